"""Pydantic schemas for API request/response validation."""

from healthvault.schemas.chat import (
    AssistantInfoResponse,
    ChatErrorResponse,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatWelcomeResponse,
    QuickQuestion,
)
from healthvault.schemas.profile import ProfileBase, ProfileResponse, ProfileUpdate
from healthvault.schemas.records import (
    MedicationEntry,
    PrescriptionBase,
    PrescriptionCreate,
    PrescriptionRecord,
    PrescriptionStatusUpdate,
)

__all__ = [
    # Chat
    "ChatRequest",
    "ChatResponse",
    "ChatErrorResponse",
    "ChatMessage",
    "ChatWelcomeResponse",
    "QuickQuestion",
    "AssistantInfoResponse",
    # Profile
    "ProfileBase",
    "ProfileUpdate",
    "ProfileResponse",
    # Records
    "PrescriptionBase",
    "PrescriptionCreate",
    "PrescriptionRecord",
    "PrescriptionStatusUpdate",
    "MedicationEntry",
]
