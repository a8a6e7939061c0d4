import json
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from healthvault.api.cors import CORS_HEADERS
from healthvault.api.deps import get_chat_service
from healthvault.schemas.chat import (
    ChatErrorResponse,
    ChatRequest,
    ChatResponse,
    ChatWelcomeResponse,
)
from healthvault.services.assistant import (
    FALLBACK_MESSAGE,
    ChatError,
    InvalidChatRequest,
    MedicalChatService,
)
from healthvault.services.assistant.chat import QUICK_QUESTIONS, welcome_message

logger = logging.getLogger("healthvault.api.chat")

router = APIRouter(tags=["Medical Assistant"])

def _error_response(exc: Exception) -> JSONResponse:
    status_code = exc.status_code if isinstance(exc, ChatError) else 500
    payload = ChatErrorResponse(error=str(exc) or exc.__class__.__name__, fallback=FALLBACK_MESSAGE)
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(),
        headers=CORS_HEADERS,
    )


async def _parse_chat_request(request: Request) -> ChatRequest:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidChatRequest("Request body must be valid JSON") from exc
    if not isinstance(body, dict):
        raise InvalidChatRequest("Request body must be a JSON object")
    try:
        return ChatRequest.model_validate(body)
    except ValidationError as exc:
        raise InvalidChatRequest("Message and userId are required") from exc


@router.options("/medical-ai-chat", include_in_schema=False)
async def medical_ai_chat_preflight():
    """Answer CORS pre-flight with an empty body."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/medical-ai-chat",
    response_model=ChatResponse,
    responses={400: {"model": ChatErrorResponse}, 500: {"model": ChatErrorResponse}},
)
async def medical_ai_chat(
    request: Request,
    service: MedicalChatService = Depends(get_chat_service),
):
    """Answer a question about the caller's own medical records.

    Body: ``{"message": str, "userId": str}``. Any failure returns
    ``{"error", "fallback"}`` with a 400 (missing fields) or 500 status.
    """
    try:
        chat_request = await _parse_chat_request(request)
        result = await service.answer(chat_request.message, chat_request.user_id)
    except Exception as exc:
        logger.exception("Error in medical-ai-chat")
        return _error_response(exc)

    return JSONResponse(content=result.model_dump(), headers=CORS_HEADERS)


@router.get("/chat/welcome", response_model=ChatWelcomeResponse)
async def chat_welcome():
    """Opening assistant message and quick-question shortcuts for a new chat."""
    return ChatWelcomeResponse(
        message=welcome_message(datetime.now()),
        quick_questions=QUICK_QUESTIONS,
    )
