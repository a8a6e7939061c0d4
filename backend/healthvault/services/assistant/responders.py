"""Reply generation strategies for the medical assistant.

Two interchangeable generators share the ``ResponseGenerator`` contract:

- ``TemplateResponseGenerator`` routes the question by keyword to canned,
  educational text and never leaves the process.
- ``CompletionResponseGenerator`` sends the user's records and question to a
  hosted chat-completion API and returns its reply verbatim.

The concrete generator is chosen once at startup by ``build_response_generator``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import requests

from healthvault.config import Settings
from healthvault.schemas.records import PrescriptionRecord
from healthvault.services.assistant.context import format_medical_context
from healthvault.services.assistant.errors import UpstreamUnavailable

logger = logging.getLogger("healthvault.assistant")

DISCLAIMER = (
    "⚠️ **Important:** This information is for educational purposes only. "
    "Always consult qualified healthcare professionals for medical advice, "
    "diagnosis, or treatment decisions."
)


class ResponseGenerator(Protocol):
    """Produces the assistant's reply for one question."""

    name: str

    async def generate(self, message: str, records: Sequence[PrescriptionRecord]) -> str:
        ...


@dataclass(frozen=True)
class KeywordCategory:
    label: str
    keywords: tuple[str, ...]


class TemplateResponseGenerator:
    """Keyword-routed canned replies.

    Categories are checked in order and the first match wins. Output depends
    only on ``(message, records)``.
    """

    name = "template"

    CATEGORIES = (
        KeywordCategory("medications", ("medicine", "medication", "drug")),
        KeywordCategory("records", ("analyze", "summary", "record")),
        KeywordCategory("interactions", ("interaction", "side effect")),
        KeywordCategory("schedule", ("schedule", "remind", "when")),
        KeywordCategory("appointments", ("doctor", "appointment", "checkup")),
    )

    def route(self, message: str) -> str:
        """Return the label of the first category whose keyword occurs in ``message``."""
        lower = message.lower()
        for category in self.CATEGORIES:
            if any(keyword in lower for keyword in category.keywords):
                return category.label
        return "default"

    async def generate(self, message: str, records: Sequence[PrescriptionRecord]) -> str:
        return self.render(message, records)

    def render(self, message: str, records: Sequence[PrescriptionRecord]) -> str:
        handler = getattr(self, f"_reply_{self.route(message)}")
        return handler(records)

    @staticmethod
    def medication_lines(records: Sequence[PrescriptionRecord]) -> list[str]:
        """One line per record listing its medication names, skipping records without any."""
        return [
            ", ".join(record.medication_names)
            for record in records
            if record.medication_names
        ]

    def _reply_medications(self, records: Sequence[PrescriptionRecord]) -> str:
        if not records:
            return (
                "I don't see any prescription records in your account yet. Once you upload "
                "your prescription files, I'll be able to help you track your medications, "
                "check for interactions, and provide detailed information about your medicines. "
                "Please upload your prescription documents first."
            )

        medications = self.medication_lines(records)
        if not medications:
            return (
                "I can see your prescription records but the medication details need to be "
                "extracted. Please ensure your prescription images are clear and contain "
                "medication names. Always consult your healthcare provider for specific "
                "medication guidance."
            )

        listing = "\n".join(medications)
        return (
            "Based on your uploaded prescriptions, here are your medications:\n\n"
            f"{listing}\n\n"
            "If you have questions about dosages, side effects, or interactions, please speak "
            "with your doctor or pharmacist before making any changes to your medication "
            "regimen.\n\n"
            f"{DISCLAIMER}"
        )

    def _reply_records(self, records: Sequence[PrescriptionRecord]) -> str:
        if not records:
            return (
                "You haven't uploaded any medical records yet. To get started:\n\n"
                "1. Go to the 'Records' section\n"
                "2. Click 'Upload New Record'\n"
                "3. Upload your prescription files, lab reports, or medical documents\n\n"
                "Once uploaded, I'll be able to analyze your medical history and provide "
                "insights about your health records."
            )

        return (
            f"I've analyzed your {len(records)} uploaded medical record(s). Here's a summary:\n\n"
            f"{format_medical_context(records)}\n\n"
            "📋 Key Points:\n"
            "• Keep all your medical records organized in one place\n"
            "• Regular follow-ups with healthcare providers are important\n"
            "• Always inform new doctors about your complete medical history\n\n"
            f"{DISCLAIMER}"
        )

    def _reply_interactions(self, records: Sequence[PrescriptionRecord]) -> str:
        return (
            "For drug interactions and side effects, I recommend:\n\n"
            "🔍 **Drug Interaction Checkers:**\n"
            "• Consult your pharmacist - they're experts in medication interactions\n"
            "• Ask your doctor when prescribed new medications\n"
            "• Keep an updated list of all medications you take\n\n"
            "⚠️ **Important Safety Notes:**\n"
            "• Never stop medications without consulting your healthcare provider\n"
            "• Report any unusual symptoms to your doctor immediately\n"
            "• Inform all healthcare providers about your complete medication list\n\n"
            f"{DISCLAIMER}"
        )

    def _reply_schedule(self, records: Sequence[PrescriptionRecord]) -> str:
        return (
            "For medication scheduling and reminders:\n\n"
            "⏰ **Medication Management Tips:**\n"
            "• Set phone alarms for consistent timing\n"
            "• Use pill organizers for weekly planning\n"
            "• Take medications with meals if recommended\n"
            "• Never skip doses without consulting your doctor\n\n"
            "📱 **Helpful Tools:**\n"
            "• Medication reminder apps\n"
            "• Pharmacy automatic refill services\n"
            "• Calendar notifications\n\n"
            "Always follow your doctor's specific instructions for timing and dosage.\n\n"
            f"{DISCLAIMER}"
        )

    def _reply_appointments(self, records: Sequence[PrescriptionRecord]) -> str:
        return (
            "For medical appointments and healthcare:\n\n"
            "📅 **Scheduling Regular Checkups:**\n"
            "• Annual physical exams are important\n"
            "• Follow your doctor's recommended visit schedule\n"
            "• Prepare questions before appointments\n"
            "• Bring your medication list and medical records\n\n"
            "🏥 **When to See a Doctor:**\n"
            "• New or worsening symptoms\n"
            "• Medication side effects\n"
            "• Questions about your treatment plan\n"
            "• Routine preventive care\n\n"
            "If you have urgent medical concerns, contact your healthcare provider "
            "immediately or seek emergency care.\n\n"
            f"{DISCLAIMER}"
        )

    def _reply_default(self, records: Sequence[PrescriptionRecord]) -> str:
        return (
            "Thank you for your question about your medical records. I'm here to help you "
            "understand your health information and manage your medical documents.\n\n"
            "🔍 **What I can help with:**\n"
            "• Analyzing your uploaded prescription files\n"
            "• Explaining medication information from your records\n"
            "• Summarizing your medical history\n"
            "• Providing general health education\n\n"
            "Feel free to ask specific questions about your uploaded medical records or "
            "request an analysis of your prescription files!\n\n"
            f"📋 **Your Current Records:** {len(records)} record(s) available\n\n"
            f"{DISCLAIMER}"
        )


class CompletionResponseGenerator:
    """Delegates the reply to an OpenAI-compatible chat-completion endpoint."""

    name = "llm"

    SYSTEM_PROMPT = """You are a helpful medical AI assistant for a personal health records app. You help users understand their uploaded prescriptions and medical documents.

Guidelines:
- Always recommend consulting a qualified healthcare professional for medical decisions.
- Never diagnose conditions or prescribe, stop, or change treatments.
- Be empathetic, clear, and supportive; use plain language.
- Reference the user's actual records below when they are relevant to the question, and say so when the records do not contain the answer.

{context}"""

    def __init__(
        self,
        *,
        api_base_url: str,
        api_key: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        timeout_seconds: int = 30,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds

    @property
    def completions_url(self) -> str:
        return f"{self.api_base_url}/chat/completions"

    def build_payload(self, message: str, records: Sequence[PrescriptionRecord]) -> dict[str, Any]:
        system_prompt = self.SYSTEM_PROMPT.format(context=format_medical_context(records))
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": message},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def generate(self, message: str, records: Sequence[PrescriptionRecord]) -> str:
        payload = self.build_payload(message, records)
        data = await asyncio.to_thread(self._post, payload)
        return self._extract_text(data)

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.post(
                self.completions_url,
                headers=headers,
                json=payload,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"Completion request failed: {exc}") from exc

        if response.status_code >= 400:
            snippet = response.text.strip().replace("\n", " ")[:240]
            logger.warning("Completion API returned HTTP %d: %s", response.status_code, snippet)
            raise UpstreamUnavailable(
                f"Completion API returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamUnavailable("Completion response is not valid JSON") from exc
        if not isinstance(data, dict):
            raise UpstreamUnavailable("Completion response is not a JSON object")
        return data

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise UpstreamUnavailable("Completion response contained no choices")
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content.strip():
            raise UpstreamUnavailable("Completion response contained no content")
        return content


def build_response_generator(settings: Settings) -> ResponseGenerator:
    """Pick the generator named by ``settings.response_strategy``."""
    if settings.response_strategy == "llm":
        logger.info("Using completion response generator (model=%s)", settings.llm_model)
        return CompletionResponseGenerator(
            api_base_url=settings.llm_api_base_url,
            api_key=settings.llm_api_key or "",
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout_seconds=settings.llm_timeout_seconds,
        )
    logger.info("Using template response generator")
    return TemplateResponseGenerator()
