from healthvault.models.base import Base, TimestampMixin
from healthvault.models.prescription import Prescription
from healthvault.models.profile import Profile

__all__ = [
    "Base",
    "TimestampMixin",
    "Prescription",
    "Profile",
]
