from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from healthvault.models.base import Base, TimestampMixin


class Prescription(Base, TimestampMixin):
    """An uploaded prescription or medical document.

    The file itself lives in the hosted object store; this row keeps the
    metadata and whatever was extracted from it (doctor, medications).
    Rows are immutable after upload except for ``status``.
    """

    __tablename__ = "prescriptions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    doctor_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default="active",
        comment="active, completed, reviewed, normal, abnormal"
    )
    medication_names: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)

    file_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    file_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    __table_args__ = (
        Index("ix_prescriptions_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Prescription(id={self.id}, user_id='{self.user_id}', title='{self.title}')>"
