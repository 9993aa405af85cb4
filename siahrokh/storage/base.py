"""Registration store contract shared by the durable and in-memory backends."""
from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from siahrokh.errors import CertificateIdExhausted
from siahrokh.models import Registration, Tournament
from siahrokh.schemas import RegistrationData, TournamentData
from siahrokh.services import certificates

logger = logging.getLogger("siahrokh.storage")

MAX_CERTIFICATE_ATTEMPTS = 10


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Storage(ABC):
    """Persistence for tournaments, registrations and the next-tournament pointer.

    Both backends return the mapped model classes, so callers never branch on
    which one is active. Selection happens once, in ``create_storage``.
    """

    kind: str = "abstract"
    durable: bool = False

    async def init(self) -> None:
        """Prepare the backend. Durable backends raise BackendUnavailable on failure."""

    async def close(self) -> None:
        """Release backend resources."""

    # --- Tournaments ---

    @abstractmethod
    async def create_tournament(self, data: TournamentData) -> Tournament: ...

    @abstractmethod
    async def update_tournament(self, tournament_id: str, data: TournamentData) -> Tournament:
        """Replace all mutable fields and stamp updated_at. NotFound if unknown."""

    @abstractmethod
    async def delete_tournament(self, tournament_id: str) -> None:
        """Delete the tournament, its registrations, and clear the next pointer if it pointed here."""

    @abstractmethod
    async def get_tournament(self, tournament_id: str) -> Optional[Tournament]: ...

    @abstractmethod
    async def get_open_tournaments(self) -> list[Tournament]:
        """Open tournaments, soonest first."""

    @abstractmethod
    async def get_all_tournaments(self, from_date: Optional[datetime] = None) -> list[Tournament]:
        """All tournaments on or after from_date, newest first."""

    # --- Next tournament ---

    @abstractmethod
    async def get_next_tournament(self) -> Optional[Tournament]:
        """The countdown tournament, or None if unset or dangling."""

    @abstractmethod
    async def set_next_tournament(self, tournament_id: Optional[str]) -> None:
        """Upsert the settings row. None clears the pointer."""

    # --- Registrations ---

    @abstractmethod
    async def _certificate_id_exists(self, certificate_id: str) -> bool: ...

    @abstractmethod
    async def _insert_registration(self, data: RegistrationData, certificate_id: str) -> Registration:
        """Persist one registration. DuplicateKey if the store rejects the certificate id."""

    async def _allocate_certificate_id(self) -> str:
        """Bounded retry until a candidate not yet issued is found."""
        for attempt in range(1, MAX_CERTIFICATE_ATTEMPTS + 1):
            candidate = certificates.generate_certificate_id()
            if not await self._certificate_id_exists(candidate):
                return candidate
            logger.info("Certificate id collision on attempt %d", attempt)
        raise CertificateIdExhausted(MAX_CERTIFICATE_ATTEMPTS)

    async def create_registration(self, data: RegistrationData) -> Registration:
        """Allocate a unique certificate id and insert, as one operation (nothing is reserved on failure)."""
        certificate_id = await self._allocate_certificate_id()
        return await self._insert_registration(data, certificate_id)

    @abstractmethod
    async def get_registration(self, registration_id: str) -> Optional[Registration]: ...

    @abstractmethod
    async def get_registration_by_certificate_id(self, certificate_id: str) -> Optional[Registration]:
        """Exact match; callers uppercase the id first."""

    @abstractmethod
    async def confirm_certificate(self, registration_id: str) -> Registration:
        """Set certificate_confirmed (idempotent). NotFound if unknown."""

    @abstractmethod
    async def get_registrations(self, tournament_id: Optional[str] = None) -> list[Registration]:
        """Registrations (optionally for one tournament), newest first."""
