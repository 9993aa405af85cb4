"""Application settings (next tournament pointer)."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from siahrokh.models.base import Base, UTCDateTime

# The settings table only ever holds this row.
SETTINGS_ROW_ID = 1


class AppSettings(Base):
    """Singleton settings row: which tournament the homepage counts down to."""

    __tablename__ = "app_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    next_tournament_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("tournaments.id", ondelete="SET NULL"), nullable=True
    )
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
