"""Durable storage on a relational database via async SQLAlchemy."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from siahrokh.errors import BackendUnavailable, DuplicateKey, NotFound
from siahrokh.models import (
    SETTINGS_ROW_ID,
    AppSettings,
    Registration,
    Tournament,
    init_db,
    make_engine,
    make_session_factory,
)
from siahrokh.models.base import as_utc
from siahrokh.schemas import RegistrationData, TournamentData
from siahrokh.storage.base import Storage, new_id, utcnow

logger = logging.getLogger("siahrokh.storage")


class DatabaseStorage(Storage):
    """Relational implementation of the registration store.

    The unique constraint on ``registrations.certificate_id`` is the real
    uniqueness guarantee; the retry loop in ``Storage`` only avoids hitting it.
    """

    kind = "database"
    durable = True

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = None
        self.session_factory = None

    async def init(self) -> None:
        try:
            self.engine = make_engine(self.database_url)
            self.session_factory = make_session_factory(self.engine)
            await init_db(self.engine)
        except Exception as e:
            if self.engine is not None:
                await self.engine.dispose()
            raise BackendUnavailable(f"Database initialization failed: {e}") from e

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()

    # --- Tournaments ---

    async def create_tournament(self, data: TournamentData) -> Tournament:
        now = utcnow()
        values = data.model_dump()
        values["date"] = as_utc(values["date"])
        async with self.session_factory() as session:
            t = Tournament(id=new_id(), created_at=now, updated_at=now, **values)
            session.add(t)
            await session.commit()
            return t

    async def update_tournament(self, tournament_id: str, data: TournamentData) -> Tournament:
        async with self.session_factory() as session:
            t = await session.get(Tournament, tournament_id)
            if not t:
                raise NotFound("Tournament not found")
            for key, value in data.model_dump().items():
                setattr(t, key, as_utc(value) if key == "date" else value)
            t.updated_at = utcnow()
            await session.commit()
            return t

    async def delete_tournament(self, tournament_id: str) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                t = await session.get(Tournament, tournament_id)
                if not t:
                    raise NotFound("Tournament not found")
                # Pointer first so no committed state references a deleted tournament
                await session.execute(
                    update(AppSettings)
                    .where(AppSettings.next_tournament_id == tournament_id)
                    .values(next_tournament_id=None, updated_at=utcnow())
                )
                await session.execute(delete(Registration).where(Registration.tournament_id == tournament_id))
                await session.execute(delete(Tournament).where(Tournament.id == tournament_id))

    async def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        async with self.session_factory() as session:
            return await session.get(Tournament, tournament_id)

    async def get_open_tournaments(self) -> list[Tournament]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Tournament).where(Tournament.is_open == True).order_by(Tournament.date)  # noqa: E712
            )
            return list(result.scalars().all())

    async def get_all_tournaments(self, from_date: Optional[datetime] = None) -> list[Tournament]:
        async with self.session_factory() as session:
            q = select(Tournament).order_by(Tournament.date.desc())
            if from_date is not None:
                q = q.where(Tournament.date >= from_date)
            result = await session.execute(q)
            return list(result.scalars().all())

    # --- Next tournament ---

    async def get_next_tournament(self) -> Optional[Tournament]:
        async with self.session_factory() as session:
            settings = await session.get(AppSettings, SETTINGS_ROW_ID)
            if not settings or not settings.next_tournament_id:
                return None
            return await session.get(Tournament, settings.next_tournament_id)

    async def set_next_tournament(self, tournament_id: Optional[str]) -> None:
        async with self.session_factory() as session:
            if tournament_id is not None and not await session.get(Tournament, tournament_id):
                raise NotFound("Tournament not found")
            settings = await session.get(AppSettings, SETTINGS_ROW_ID)
            if settings:
                settings.next_tournament_id = tournament_id
                settings.updated_at = utcnow()
            else:
                session.add(
                    AppSettings(id=SETTINGS_ROW_ID, next_tournament_id=tournament_id, updated_at=utcnow())
                )
            await session.commit()

    # --- Registrations ---

    async def _certificate_id_exists(self, certificate_id: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Registration.id).where(Registration.certificate_id == certificate_id).limit(1)
            )
            return result.first() is not None

    async def _insert_registration(self, data: RegistrationData, certificate_id: str) -> Registration:
        async with self.session_factory() as session:
            if not await session.get(Tournament, data.tournament_id):
                raise NotFound("Tournament not found")
            reg = Registration(
                id=new_id(),
                certificate_id=certificate_id,
                certificate_confirmed=False,
                created_at=utcnow(),
                **data.model_dump(),
            )
            session.add(reg)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.warning("Registration insert rejected by constraint (certificate %s): %s", certificate_id, e.orig)
                raise DuplicateKey("Registration could not be stored") from e
            return reg

    async def get_registration(self, registration_id: str) -> Optional[Registration]:
        async with self.session_factory() as session:
            return await session.get(Registration, registration_id)

    async def get_registration_by_certificate_id(self, certificate_id: str) -> Optional[Registration]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Registration).where(Registration.certificate_id == certificate_id).limit(1)
            )
            return result.scalar_one_or_none()

    async def confirm_certificate(self, registration_id: str) -> Registration:
        async with self.session_factory() as session:
            reg = await session.get(Registration, registration_id)
            if not reg:
                raise NotFound("Registration not found")
            reg.certificate_confirmed = True
            await session.commit()
            return reg

    async def get_registrations(self, tournament_id: Optional[str] = None) -> list[Registration]:
        async with self.session_factory() as session:
            q = select(Registration).order_by(Registration.created_at.desc())
            if tournament_id:
                q = q.where(Registration.tournament_id == tournament_id)
            result = await session.execute(q)
            return list(result.scalars().all())
