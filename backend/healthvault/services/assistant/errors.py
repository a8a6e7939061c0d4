"""Errors raised along the chat pipeline.

Every one of them ends up in the same ``{error, fallback}`` envelope; only the
message and the HTTP status differ.
"""


class ChatError(Exception):
    """Base class for chat pipeline failures."""

    status_code: int = 500


class InvalidChatRequest(ChatError):
    """Required fields were missing; nothing was read or sent upstream."""

    status_code = 400


class RecordStoreUnavailable(ChatError):
    """The record store could not be read."""


class UpstreamUnavailable(ChatError):
    """The completion service failed or answered with no content."""
