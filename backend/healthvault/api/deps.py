"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from healthvault.database import get_db
from healthvault.services.assistant import MedicalChatService, ResponseGenerator
from healthvault.services.prescriptions import PrescriptionRepository, SQLPrescriptionRepository
from healthvault.services.profiles import ProfileRepository, SQLProfileRepository


def get_prescription_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PrescriptionRepository:
    return SQLPrescriptionRepository(db)


def get_profile_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileRepository:
    return SQLProfileRepository(db)


def get_response_generator(request: Request) -> ResponseGenerator:
    """Generator built at startup and kept on the application state."""
    generator = getattr(request.app.state, "response_generator", None)
    if generator is None:
        raise RuntimeError("Response generator is not configured")
    return generator


def get_chat_service(
    repo: Annotated[PrescriptionRepository, Depends(get_prescription_repo)],
    generator: Annotated[ResponseGenerator, Depends(get_response_generator)],
) -> MedicalChatService:
    return MedicalChatService(repository=repo, generator=generator)


async def get_user_id(
    user_id: Annotated[str, Query(description="Identifier of the record owner")],
) -> str:
    """Owner identifier issued by the hosted auth provider."""
    user_id = user_id.strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="user_id is required",
        )
    return user_id
