"""Input records accepted by the registration store.

The store trusts these: the web layer and the submission pipeline validate
before building them.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TournamentData(BaseModel):
    """Mutable tournament fields (full record; used for create and replace)."""

    name: str
    date: datetime
    time: str
    is_open: bool = False
    venue_address: str
    venue_info: Optional[str] = None
    registration_fee: Optional[str] = None


class RegistrationData(BaseModel):
    """Registration fields supplied by the submitter (certificate id is assigned by the store)."""

    tournament_id: str
    name: str
    phone: str
    email: str
    year_of_birth: int
    receipt_file_path: str
    agreed_tos: bool
    description: Optional[str] = None
