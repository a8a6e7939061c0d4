"""Profile store implementations."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from healthvault.models import Profile
from healthvault.schemas.profile import ProfileResponse, ProfileUpdate
from healthvault.services.assistant.errors import RecordStoreUnavailable


class ProfileRepository(Protocol):
    async def get_for_user(self, user_id: str) -> Optional[ProfileResponse]:
        ...

    async def upsert(self, user_id: str, data: ProfileUpdate) -> ProfileResponse:
        ...


class SQLProfileRepository:
    """Profile store backed by SQLAlchemy; one row per user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_row(self, user_id: str) -> Optional[Profile]:
        try:
            result = await self.db.execute(select(Profile).where(Profile.user_id == user_id))
        except (SQLAlchemyError, OSError) as exc:
            raise RecordStoreUnavailable("Failed to fetch profile") from exc
        return result.scalar_one_or_none()

    async def get_for_user(self, user_id: str) -> Optional[ProfileResponse]:
        row = await self._get_row(user_id)
        return ProfileResponse.model_validate(row) if row else None

    async def upsert(self, user_id: str, data: ProfileUpdate) -> ProfileResponse:
        row = await self._get_row(user_id)
        values = data.model_dump(exclude_unset=True)
        if row is None:
            row = Profile(user_id=user_id, **values)
            self.db.add(row)
        else:
            for field, value in values.items():
                setattr(row, field, value)
        try:
            await self.db.flush()
            await self.db.refresh(row)
        except (SQLAlchemyError, OSError) as exc:
            raise RecordStoreUnavailable("Failed to store profile") from exc
        return ProfileResponse.model_validate(row)


class InMemoryProfileRepository:
    """In-memory store for tests and local demos."""

    def __init__(self):
        self._profiles: dict[str, ProfileResponse] = {}

    async def get_for_user(self, user_id: str) -> Optional[ProfileResponse]:
        return self._profiles.get(user_id)

    async def upsert(self, user_id: str, data: ProfileUpdate) -> ProfileResponse:
        current = self._profiles.get(user_id) or ProfileResponse(user_id=user_id)
        updated = current.model_copy(
            update={**data.model_dump(exclude_unset=True), "updated_at": datetime.now(timezone.utc)}
        )
        self._profiles[user_id] = updated
        return updated
