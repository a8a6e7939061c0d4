"""Pydantic schemas for the medical assistant chat API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Inbound chat payload. Presence is checked by the chat service."""

    message: str | None = None
    user_id: str | None = Field(default=None, alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class ChatResponse(BaseModel):
    """Successful assistant reply."""

    response: str
    context: str = Field(..., description="Provenance note, e.g. 'Based on 3 medical records'")


class ChatErrorResponse(BaseModel):
    """Error envelope returned for any failed chat request."""

    error: str
    fallback: str


class ChatMessage(BaseModel):
    """A single conversation turn held by the client, never persisted."""

    id: int
    role: Literal["user", "assistant"]
    content: str
    timestamp: str
    suggestions: list[str] | None = None


class QuickQuestion(BaseModel):
    question: str
    category: str


class ChatWelcomeResponse(BaseModel):
    """Opening assistant message and the quick-question shortcuts."""

    message: ChatMessage
    quick_questions: list[QuickQuestion]


class AssistantInfoResponse(BaseModel):
    strategy: str
    model: str | None = None
