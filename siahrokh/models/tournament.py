"""Tournament model."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from siahrokh.models.base import Base, UTCDateTime


class Tournament(Base):
    """Chess tournament open (or closed) for registration."""

    __tablename__ = "tournaments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)  # authoritative instant
    time: Mapped[str] = mapped_column(Text, nullable=False)  # display string, HH:MM
    is_open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    venue_address: Mapped[str] = mapped_column(Text, nullable=False)
    venue_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    registration_fee: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # display string, no currency logic
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    registrations = relationship(
        "Registration", back_populates="tournament", cascade="all, delete-orphan", passive_deletes=True
    )
