from fastapi import APIRouter, Depends, HTTPException

from healthvault.api.deps import get_prescription_repo, get_user_id
from healthvault.config import settings
from healthvault.schemas.records import (
    MedicationEntry,
    PrescriptionCreate,
    PrescriptionRecord,
    PrescriptionStatusUpdate,
)
from healthvault.services.prescriptions import PrescriptionRepository

router = APIRouter(prefix="/records", tags=["Prescription Records"])


async def _get_owned_record(
    record_id: int,
    user_id: str,
    repo: PrescriptionRepository,
) -> PrescriptionRecord:
    record = await repo.get(record_id)
    if record is None or record.user_id != user_id:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


@router.get("/", response_model=list[PrescriptionRecord])
async def list_records(
    user_id: str = Depends(get_user_id),
    repo: PrescriptionRepository = Depends(get_prescription_repo),
):
    """List the user's prescription records, newest first."""
    return await repo.list_for_user(user_id)


@router.post("/", response_model=PrescriptionRecord, status_code=201)
async def create_record(
    record: PrescriptionCreate,
    user_id: str = Depends(get_user_id),
    repo: PrescriptionRepository = Depends(get_prescription_repo),
):
    """Register an uploaded prescription file."""
    if record.file_type and record.file_type not in settings.allowed_mime_types:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {record.file_type}",
        )
    return await repo.create(user_id=user_id, payload=record)


@router.get("/medications", response_model=list[MedicationEntry])
async def list_medications(
    user_id: str = Depends(get_user_id),
    repo: PrescriptionRepository = Depends(get_prescription_repo),
):
    """Every medication named on the user's records, newest record first."""
    records = await repo.list_for_user(user_id)
    return [
        MedicationEntry(
            name=name,
            record_id=record.id,
            record_title=record.title,
            doctor_name=record.doctor_name,
            upload_date=record.upload_date,
            status=record.status,
        )
        for record in records
        for name in record.medication_names or []
    ]


@router.get("/{record_id}", response_model=PrescriptionRecord)
async def get_record(
    record_id: int,
    user_id: str = Depends(get_user_id),
    repo: PrescriptionRepository = Depends(get_prescription_repo),
):
    """Get a specific prescription record."""
    return await _get_owned_record(record_id, user_id, repo)


@router.patch("/{record_id}/status", response_model=PrescriptionRecord)
async def update_record_status(
    record_id: int,
    update: PrescriptionStatusUpdate,
    user_id: str = Depends(get_user_id),
    repo: PrescriptionRepository = Depends(get_prescription_repo),
):
    """Change a record's status; no other field is editable after upload."""
    await _get_owned_record(record_id, user_id, repo)
    updated = await repo.update_status(record_id, update.status)
    if updated is None:
        raise HTTPException(status_code=404, detail="Record not found")
    return updated
