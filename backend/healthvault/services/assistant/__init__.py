"""Medical assistant: context formatting, reply generation, chat orchestration."""

from healthvault.services.assistant.chat import FALLBACK_MESSAGE, MedicalChatService
from healthvault.services.assistant.context import NO_RECORDS_CONTEXT, format_medical_context
from healthvault.services.assistant.errors import (
    ChatError,
    InvalidChatRequest,
    RecordStoreUnavailable,
    UpstreamUnavailable,
)
from healthvault.services.assistant.responders import (
    CompletionResponseGenerator,
    ResponseGenerator,
    TemplateResponseGenerator,
    build_response_generator,
)

__all__ = [
    "FALLBACK_MESSAGE",
    "MedicalChatService",
    "NO_RECORDS_CONTEXT",
    "format_medical_context",
    "ChatError",
    "InvalidChatRequest",
    "RecordStoreUnavailable",
    "UpstreamUnavailable",
    "CompletionResponseGenerator",
    "ResponseGenerator",
    "TemplateResponseGenerator",
    "build_response_generator",
]
