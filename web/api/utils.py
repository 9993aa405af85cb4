"""Shared API utilities: response schemas and request-value parsing."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Request
from pydantic import BaseModel, ConfigDict

from siahrokh.storage import Storage


class TournamentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    date: datetime
    time: str
    is_open: bool
    venue_address: str
    venue_info: Optional[str] = None
    registration_fee: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RegistrationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tournament_id: str
    name: str
    phone: str
    email: str
    year_of_birth: int
    receipt_file_path: str
    agreed_tos: bool
    description: Optional[str] = None
    certificate_id: str
    certificate_confirmed: bool
    created_at: datetime


class PublicRegistrationResponse(BaseModel):
    """What the registrant sees after submitting (no server file paths)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tournament_id: str
    name: str
    year_of_birth: int
    certificate_id: str
    certificate_confirmed: bool
    created_at: datetime


def get_storage(request: Request) -> Storage:
    """Dependency: the storage backend selected at startup."""
    return request.app.state.storage


StorageDep = Depends(get_storage)


def parse_datetime(s: Optional[str]) -> Optional[datetime]:
    """Parse ISO datetime string to aware datetime (naive is taken as UTC). None if empty or invalid."""
    if not s or not s.strip():
        return None
    s = s.strip()
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
