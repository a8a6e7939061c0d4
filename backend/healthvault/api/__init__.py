"""API Routes for HealthVault."""

from healthvault.api import chat, health, profile, records

__all__ = [
    "chat",
    "health",
    "profile",
    "records",
]
