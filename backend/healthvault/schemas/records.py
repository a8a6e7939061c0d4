from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PrescriptionBase(BaseModel):
    """Base schema for an uploaded prescription record."""

    title: str = Field(..., min_length=1, max_length=200)
    doctor_name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    status: str = Field(default="active", max_length=50)
    medication_names: Optional[list[str]] = None
    file_url: Optional[str] = Field(default=None, max_length=500)
    file_name: Optional[str] = Field(default=None, max_length=255)
    file_type: Optional[str] = Field(default=None, max_length=100)

    @field_validator("status")
    @classmethod
    def normalize_status(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("status must not be empty")
        return value

    @field_validator("medication_names")
    @classmethod
    def drop_blank_medications(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return None
        return [name.strip() for name in value if name and name.strip()]


class PrescriptionCreate(PrescriptionBase):
    """Schema for registering an uploaded prescription."""

    upload_date: Optional[datetime] = None


class PrescriptionStatusUpdate(BaseModel):
    """Status is the only field that may change after upload."""

    status: str = Field(..., min_length=1, max_length=50)

    @field_validator("status")
    @classmethod
    def normalize_status(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("status must not be empty")
        return value


class PrescriptionRecord(BaseModel):
    """A stored prescription as read back from the record store.

    Rows may have been written by other clients of the hosted store, so no
    create-time constraints apply here: any stored row must load.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    title: str = ""
    upload_date: datetime
    doctor_name: Optional[str] = None
    description: Optional[str] = None
    status: str = "active"
    medication_names: Optional[list[str]] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_or_blank(cls, value: Optional[str]) -> str:
        return value or ""

    @field_validator("status", mode="before")
    @classmethod
    def status_or_default(cls, value: Optional[str]) -> str:
        return value or "active"

    @field_validator("medication_names", mode="before")
    @classmethod
    def keep_named_medications(cls, value):
        if value is None:
            return None
        return [str(name).strip() for name in value if name and str(name).strip()]


class MedicationEntry(BaseModel):
    """One medication name and the record it was prescribed in."""

    name: str
    record_id: int
    record_title: str
    doctor_name: Optional[str] = None
    upload_date: datetime
    status: str
