"""Chat orchestration: validate, read the user's records, generate a reply."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from healthvault.schemas.chat import ChatMessage, ChatResponse, QuickQuestion
from healthvault.services.assistant.errors import InvalidChatRequest
from healthvault.services.assistant.responders import ResponseGenerator

if TYPE_CHECKING:
    from healthvault.services.prescriptions import PrescriptionRepository

logger = logging.getLogger("healthvault.assistant")

FALLBACK_MESSAGE = (
    "I'm sorry, I'm having trouble accessing your medical data right now. "
    "Please try asking your question again, or contact your healthcare provider "
    "for medical advice."
)

WELCOME_MESSAGE = (
    "Hello! 👋 I'm your medical AI assistant. I can help you with information about "
    "your medical history, medicines, and health records. What would you like to know today?"
)

WELCOME_SUGGESTIONS = [
    "What medicines am I currently taking?",
    "Show my recent medical records",
    "Any medicine interactions to worry about?",
    "When should I schedule my next checkup?",
]

QUICK_QUESTIONS = [
    QuickQuestion(question="What medicines am I currently taking?", category="Medicines"),
    QuickQuestion(question="Show my latest medical records", category="Records"),
    QuickQuestion(question="Give me a summary of my medical history", category="History"),
    QuickQuestion(question="When should I schedule my next checkup?", category="Scheduling"),
]


def display_time(moment: datetime) -> str:
    """Clock time as shown next to a chat bubble, e.g. ``10:30 AM``."""
    return moment.strftime("%I:%M %p")


def welcome_message(now: datetime) -> ChatMessage:
    return ChatMessage(
        id=1,
        role="assistant",
        content=WELCOME_MESSAGE,
        timestamp=display_time(now),
        suggestions=list(WELCOME_SUGGESTIONS),
    )


class MedicalChatService:
    """Answers one question from one user against that user's records.

    Stateless; collaborators are supplied by the caller so each can be
    substituted in tests.
    """

    def __init__(self, repository: PrescriptionRepository, generator: ResponseGenerator):
        self.repository = repository
        self.generator = generator

    @staticmethod
    def validate(message: str | None, user_id: str | None) -> tuple[str, str]:
        if not message or not message.strip() or not user_id or not user_id.strip():
            raise InvalidChatRequest("Message and userId are required")
        return message, user_id.strip()

    async def answer(self, message: str | None, user_id: str | None) -> ChatResponse:
        message, user_id = self.validate(message, user_id)

        records = await self.repository.list_for_user(user_id)
        logger.info("Found %d prescriptions for user", len(records))

        reply = await self.generator.generate(message, records)
        logger.info("AI response generated successfully (strategy=%s)", self.generator.name)

        return ChatResponse(
            response=reply,
            context=f"Based on {len(records)} medical records",
        )
