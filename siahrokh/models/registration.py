"""Registration model - participant registered for a tournament."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from siahrokh.models.base import Base, UTCDateTime


class Registration(Base):
    """Participant registration with uploaded payment receipt and certificate id."""

    __tablename__ = "registrations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    tournament_id: Mapped[str] = mapped_column(
        ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    year_of_birth: Mapped[int] = mapped_column(Integer, nullable=False)
    receipt_file_path: Mapped[str] = mapped_column(Text, nullable=False)
    agreed_tos: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    certificate_id: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    certificate_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)

    tournament: Mapped["Tournament"] = relationship("Tournament", back_populates="registrations")
