"""Pydantic schemas for the user profile."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileBase(BaseModel):
    display_name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    date_of_birth: date | None = None
    emergency_contact: str | None = Field(None, max_length=255)
    medical_notes: str | None = None


class ProfileUpdate(ProfileBase):
    """Fields sent by the profile form; blank inputs clear the stored value."""

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProfileResponse(ProfileBase):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    updated_at: datetime | None = None
