"""Render a user's prescription records as a plain-text context block."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from healthvault.schemas.records import PrescriptionRecord

NO_RECORDS_CONTEXT = "No medical records found for this user."
CONTEXT_HEADER = "User's Medical Records:"
NOT_SPECIFIED = "Not specified"


def format_upload_date(value: datetime) -> str:
    """US locale short date without time, e.g. ``1/10/2024``."""
    return f"{value.month}/{value.day}/{value.year}"


def format_record(record: PrescriptionRecord) -> str:
    medications = ", ".join(record.medication_names or []) or NOT_SPECIFIED
    return "\n".join(
        [
            f"- Title: {record.title}",
            f"- Upload Date: {format_upload_date(record.upload_date)}",
            f"- Doctor: {record.doctor_name or NOT_SPECIFIED}",
            f"- Description: {record.description or 'No description'}",
            f"- Status: {record.status}",
            f"- Medications: {medications}",
        ]
    )


def format_medical_context(records: Sequence[PrescriptionRecord]) -> str:
    """Build the context block; entries keep the input order (newest first)."""
    if not records:
        return NO_RECORDS_CONTEXT
    entries = "\n\n".join(format_record(record) for record in records)
    return f"{CONTEXT_HEADER}\n\n{entries}"
