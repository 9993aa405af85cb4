"""Admin API routes: tournament management and registration review."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel

import config
from siahrokh.errors import NotFound, ValidationFailed
from siahrokh.schemas import TournamentData
from siahrokh.storage import Storage
from web.api.limits import limiter
from web.api.utils import RegistrationResponse, StorageDep, TournamentResponse, parse_datetime
from web.auth import require_admin_user

logger = logging.getLogger("siahrokh.web")

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin_user)])


# --- Pydantic schemas ---


class TournamentWrite(BaseModel):
    name: str
    date: str  # ISO datetime, or YYYY-MM-DD together with time
    time: Optional[str] = None  # HH:MM
    is_open: bool = False
    venue_address: str
    venue_info: Optional[str] = None
    registration_fee: Optional[str] = None


def _tournament_data(body: TournamentWrite) -> TournamentData:
    """Build the stored record. The instant and the display time are always derived from each other."""
    errors = []
    name = body.name.strip()
    venue_address = body.venue_address.strip()
    if not name:
        errors.append("Tournament name is required")
    if not venue_address:
        errors.append("Venue address is required")

    raw_date = body.date.strip()
    time = (body.time or "").strip()
    when = None
    if "T" in raw_date:
        when = parse_datetime(raw_date)
        if when is None:
            errors.append("Invalid date or time format")
    elif not time:
        errors.append("Time is required when date is not in ISO format")
    else:
        when = parse_datetime(f"{raw_date}T{time}")
        if when is None:
            errors.append("Invalid date or time format")
    if errors:
        raise ValidationFailed(errors)

    return TournamentData(
        name=name,
        date=when,
        time=when.strftime("%H:%M"),
        is_open=body.is_open,
        venue_address=venue_address,
        venue_info=(body.venue_info or "").strip() or None,
        registration_fee=(body.registration_fee or "").strip() or None,
    )


# --- Tournaments ---


@router.get("/tournaments", response_model=list[TournamentResponse])
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def list_all_tournaments(
    request: Request,
    from_date: Optional[str] = Query(None, alias="from"),
    storage: Storage = StorageDep,
):
    """All tournaments, newest first. Optional ?from=<ISO date> lower bound."""
    since = None
    if from_date:
        since = parse_datetime(from_date)
        if since is None:
            raise ValidationFailed(["Invalid 'from' date"])
    return await storage.get_all_tournaments(since)


@router.post("/tournaments", response_model=TournamentResponse)
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def create_tournament(request: Request, body: TournamentWrite, storage: Storage = StorageDep):
    """Create a tournament."""
    t = await storage.create_tournament(_tournament_data(body))
    logger.info("Tournament created: %s (%s)", t.name, t.id)
    return t


@router.put("/tournaments/{tournament_id}", response_model=TournamentResponse)
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def update_tournament(
    request: Request, tournament_id: str, body: TournamentWrite, storage: Storage = StorageDep
):
    """Replace a tournament's fields."""
    return await storage.update_tournament(tournament_id, _tournament_data(body))


@router.delete("/tournaments/{tournament_id}")
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def delete_tournament(request: Request, tournament_id: str, storage: Storage = StorageDep):
    """Delete a tournament and all its registrations."""
    await storage.delete_tournament(tournament_id)
    logger.info("Tournament deleted: %s", tournament_id)
    return {"ok": True}


# --- Registrations ---


@router.get("/registrations", response_model=list[RegistrationResponse])
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def list_registrations(
    request: Request, tournament_id: Optional[str] = None, storage: Storage = StorageDep
):
    """Registrations, newest first. Filter with ?tournament_id=."""
    return await storage.get_registrations(tournament_id)


@router.get("/registrations/{registration_id}", response_model=RegistrationResponse)
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def get_registration(request: Request, registration_id: str, storage: Storage = StorageDep):
    reg = await storage.get_registration(registration_id)
    if not reg:
        raise NotFound("Registration not found")
    return reg


@router.post("/registrations/{registration_id}/confirm", response_model=RegistrationResponse)
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def confirm_certificate(request: Request, registration_id: str, storage: Storage = StorageDep):
    """Mark the registration's certificate as confirmed after reviewing the receipt."""
    reg = await storage.confirm_certificate(registration_id)
    logger.info("Certificate %s confirmed", reg.certificate_id)
    return reg


@router.get("/registrations/{registration_id}/receipt-file")
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def get_receipt_file(request: Request, registration_id: str, storage: Storage = StorageDep):
    """Download the uploaded payment receipt."""
    reg = await storage.get_registration(registration_id)
    if not reg:
        raise NotFound("Registration not found")
    path = Path(reg.receipt_file_path)
    if not path.is_file():
        raise NotFound("Receipt file not found")
    return FileResponse(str(path), filename=path.name)
