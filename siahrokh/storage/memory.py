"""Process-local storage used when no database is configured.

Single-process only: there is no locking, and everything is lost on restart.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from siahrokh.errors import DuplicateKey, NotFound
from siahrokh.models import SETTINGS_ROW_ID, AppSettings, Registration, Tournament
from siahrokh.models.base import as_utc
from siahrokh.schemas import RegistrationData, TournamentData
from siahrokh.storage.base import Storage, new_id, utcnow

logger = logging.getLogger("siahrokh.storage")


class MemoryStorage(Storage):
    """In-memory implementation of the registration store.

    Returned records are the stored instances themselves, not copies. Mutating
    one changes the store directly; go through the update methods instead.
    """

    kind = "memory"
    durable = False

    def __init__(self, fallback_reason: Optional[str] = None):
        # Set when this backend replaced a durable one that failed to start
        self.fallback_reason = fallback_reason
        self._tournaments: dict[str, Tournament] = {}
        self._registrations: dict[str, Registration] = {}
        self._settings: Optional[AppSettings] = None

    # --- Tournaments ---

    async def create_tournament(self, data: TournamentData) -> Tournament:
        now = utcnow()
        values = data.model_dump()
        values["date"] = as_utc(values["date"])
        t = Tournament(id=new_id(), created_at=now, updated_at=now, **values)
        self._tournaments[t.id] = t
        return t

    async def update_tournament(self, tournament_id: str, data: TournamentData) -> Tournament:
        t = self._tournaments.get(tournament_id)
        if not t:
            raise NotFound("Tournament not found")
        for key, value in data.model_dump().items():
            setattr(t, key, as_utc(value) if key == "date" else value)
        t.updated_at = utcnow()
        return t

    async def delete_tournament(self, tournament_id: str) -> None:
        if tournament_id not in self._tournaments:
            raise NotFound("Tournament not found")
        self._registrations = {
            rid: r for rid, r in self._registrations.items() if r.tournament_id != tournament_id
        }
        del self._tournaments[tournament_id]
        if self._settings and self._settings.next_tournament_id == tournament_id:
            self._settings.next_tournament_id = None
            self._settings.updated_at = utcnow()

    async def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        return self._tournaments.get(tournament_id)

    async def get_open_tournaments(self) -> list[Tournament]:
        return sorted((t for t in self._tournaments.values() if t.is_open), key=lambda t: t.date)

    async def get_all_tournaments(self, from_date: Optional[datetime] = None) -> list[Tournament]:
        tournaments = list(self._tournaments.values())
        if from_date is not None:
            from_date = as_utc(from_date)
            tournaments = [t for t in tournaments if t.date >= from_date]
        return sorted(tournaments, key=lambda t: t.date, reverse=True)

    # --- Next tournament ---

    async def get_next_tournament(self) -> Optional[Tournament]:
        if not self._settings or not self._settings.next_tournament_id:
            return None
        return self._tournaments.get(self._settings.next_tournament_id)

    async def set_next_tournament(self, tournament_id: Optional[str]) -> None:
        if tournament_id is not None and tournament_id not in self._tournaments:
            raise NotFound("Tournament not found")
        if self._settings:
            self._settings.next_tournament_id = tournament_id
            self._settings.updated_at = utcnow()
        else:
            self._settings = AppSettings(
                id=SETTINGS_ROW_ID, next_tournament_id=tournament_id, updated_at=utcnow()
            )

    # --- Registrations ---

    async def _certificate_id_exists(self, certificate_id: str) -> bool:
        return any(r.certificate_id == certificate_id for r in self._registrations.values())

    async def _insert_registration(self, data: RegistrationData, certificate_id: str) -> Registration:
        if await self._certificate_id_exists(certificate_id):
            raise DuplicateKey("Certificate ID already issued")
        if data.tournament_id not in self._tournaments:
            raise NotFound("Tournament not found")
        reg = Registration(
            id=new_id(),
            certificate_id=certificate_id,
            certificate_confirmed=False,
            created_at=utcnow(),
            **data.model_dump(),
        )
        self._registrations[reg.id] = reg
        return reg

    async def get_registration(self, registration_id: str) -> Optional[Registration]:
        return self._registrations.get(registration_id)

    async def get_registration_by_certificate_id(self, certificate_id: str) -> Optional[Registration]:
        for reg in self._registrations.values():
            if reg.certificate_id == certificate_id:
                return reg
        return None

    async def confirm_certificate(self, registration_id: str) -> Registration:
        reg = self._registrations.get(registration_id)
        if not reg:
            raise NotFound("Registration not found")
        reg.certificate_confirmed = True
        return reg

    async def get_registrations(self, tournament_id: Optional[str] = None) -> list[Registration]:
        regs = list(self._registrations.values())
        if tournament_id:
            regs = [r for r in regs if r.tournament_id == tournament_id]
        # Newest first; reversed insertion order breaks created_at ties the same way
        return sorted(reversed(regs), key=lambda r: r.created_at, reverse=True)
