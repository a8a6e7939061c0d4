"""Prescription record store implementations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from healthvault.models import Prescription
from healthvault.schemas.records import PrescriptionCreate, PrescriptionRecord
from healthvault.services.assistant.errors import RecordStoreUnavailable

logger = logging.getLogger("healthvault.prescriptions")


class PrescriptionRepository(Protocol):
    async def list_for_user(self, user_id: str) -> list[PrescriptionRecord]:
        ...

    async def create(self, user_id: str, payload: PrescriptionCreate) -> PrescriptionRecord:
        ...

    async def get(self, record_id: int) -> Optional[PrescriptionRecord]:
        ...

    async def update_status(self, record_id: int, status: str) -> Optional[PrescriptionRecord]:
        ...


class SQLPrescriptionRepository:
    """Prescription store backed by SQLAlchemy.

    Read failures surface as ``RecordStoreUnavailable``; there is no retry.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: str) -> list[PrescriptionRecord]:
        query = (
            select(Prescription)
            .where(Prescription.user_id == user_id)
            .order_by(Prescription.created_at.desc())
        )
        try:
            result = await self.db.execute(query)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Error fetching prescriptions: %s", exc)
            raise RecordStoreUnavailable("Failed to fetch user prescriptions") from exc
        return [PrescriptionRecord.model_validate(row) for row in result.scalars().all()]

    async def create(self, user_id: str, payload: PrescriptionCreate) -> PrescriptionRecord:
        values = payload.model_dump(exclude_none=True)
        prescription = Prescription(user_id=user_id, **values)
        try:
            self.db.add(prescription)
            await self.db.flush()
            await self.db.refresh(prescription)
        except (SQLAlchemyError, OSError) as exc:
            raise RecordStoreUnavailable("Failed to store prescription") from exc
        return PrescriptionRecord.model_validate(prescription)

    async def _get_row(self, record_id: int) -> Optional[Prescription]:
        try:
            result = await self.db.execute(
                select(Prescription).where(Prescription.id == record_id)
            )
        except (SQLAlchemyError, OSError) as exc:
            raise RecordStoreUnavailable("Failed to fetch prescription") from exc
        return result.scalar_one_or_none()

    async def get(self, record_id: int) -> Optional[PrescriptionRecord]:
        row = await self._get_row(record_id)
        return PrescriptionRecord.model_validate(row) if row else None

    async def update_status(self, record_id: int, status: str) -> Optional[PrescriptionRecord]:
        row = await self._get_row(record_id)
        if row is None:
            return None
        row.status = status
        try:
            await self.db.flush()
            await self.db.refresh(row)
        except (SQLAlchemyError, OSError) as exc:
            raise RecordStoreUnavailable("Failed to update prescription") from exc
        return PrescriptionRecord.model_validate(row)


class InMemoryPrescriptionRepository:
    """In-memory store for tests and local demos."""

    def __init__(self):
        self._records: list[PrescriptionRecord] = []
        self._next_id = 1

    async def list_for_user(self, user_id: str) -> list[PrescriptionRecord]:
        owned = [r for r in self._records if r.user_id == user_id]
        return sorted(owned, key=lambda r: (r.created_at, r.id), reverse=True)

    async def create(self, user_id: str, payload: PrescriptionCreate) -> PrescriptionRecord:
        now = datetime.now(timezone.utc)
        values = payload.model_dump()
        values["upload_date"] = values.get("upload_date") or now
        record = PrescriptionRecord(
            id=self._next_id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **values,
        )
        self._records.append(record)
        self._next_id += 1
        return record

    async def get(self, record_id: int) -> Optional[PrescriptionRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    async def update_status(self, record_id: int, status: str) -> Optional[PrescriptionRecord]:
        for idx, record in enumerate(self._records):
            if record.id == record_id:
                updated = record.model_copy(
                    update={"status": status, "updated_at": datetime.now(timezone.utc)}
                )
                self._records[idx] = updated
                return updated
        return None
