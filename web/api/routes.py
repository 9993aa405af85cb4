"""Public API routes: open tournaments, registration submission, certificate verification."""
from __future__ import annotations

import os
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse

import config
from siahrokh.errors import NotFound, ValidationFailed
from siahrokh.services.certificates import CERTIFICATE_ID_LENGTH, normalize_certificate_id
from siahrokh.services.receipt import receipt_filename, render_receipt_html
from siahrokh.services.registration import submit_registration
from siahrokh.services.validation import ReceiptInfo, RegistrationSubmission
from siahrokh.storage import Storage
from web.api.limits import limiter
from web.api.utils import PublicRegistrationResponse, StorageDep, TournamentResponse
from web.auth import get_current_admin

router = APIRouter(prefix="/api", tags=["registrations"])


def _receipt_info(upload: Optional[UploadFile]) -> Optional[ReceiptInfo]:
    """Describe the uploaded receipt, or None when no file was sent (browsers send an empty part)."""
    if upload is None or not upload.filename:
        return None
    size = upload.size
    if size is None:
        upload.file.seek(0, os.SEEK_END)
        size = upload.file.tell()
        upload.file.seek(0)
    return ReceiptInfo(filename=upload.filename, content_type=upload.content_type, size=size)


@router.get("/health")
async def health(storage: Storage = StorageDep):
    """Liveness plus which storage backend is active (memory means data is lost on restart)."""
    return {
        "status": "ok",
        "storage": storage.kind,
        "durable": storage.durable,
        "fallback": bool(getattr(storage, "fallback_reason", None)),
    }


@router.get("/tournaments", response_model=list[TournamentResponse])
@limiter.limit(config.PUBLIC_RATE_LIMIT)
async def list_open_tournaments(request: Request, storage: Storage = StorageDep):
    """Tournaments open for registration, soonest first."""
    return await storage.get_open_tournaments()


@router.post("/registrations")
@limiter.limit(config.PUBLIC_RATE_LIMIT)
async def create_registration(
    request: Request,
    tournament_id: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    year_of_birth: Optional[str] = Form(None),
    agreed_tos: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    receipt_file: Optional[UploadFile] = File(None),
    storage: Storage = StorageDep,
):
    """Submit a registration with its payment receipt. All validation errors are returned together."""
    submission = RegistrationSubmission(
        tournament_id=tournament_id,
        name=name,
        phone=phone,
        email=email,
        year_of_birth=year_of_birth,
        agreed_tos=(agreed_tos or "").strip().lower() == "true",
        description=description,
        receipt=_receipt_info(receipt_file),
    )
    registration, tournament = await submit_registration(
        storage,
        submission,
        receipt_file,
        upload_dir=config.UPLOAD_DIR,
        max_receipt_bytes=config.MAX_RECEIPT_BYTES,
    )
    return {
        "registration": PublicRegistrationResponse.model_validate(registration),
        "tournament": TournamentResponse.model_validate(tournament),
    }


@router.get("/certificates/{certificate_id}")
@limiter.limit(config.PUBLIC_RATE_LIMIT)
async def verify_certificate(request: Request, certificate_id: str, storage: Storage = StorageDep):
    """Public certificate lookup (case-insensitive)."""
    cid = normalize_certificate_id(certificate_id)
    if len(cid) != CERTIFICATE_ID_LENGTH:
        raise ValidationFailed(
            [f"Certificate ID must be exactly {CERTIFICATE_ID_LENGTH} characters"],
            message="Invalid certificate ID",
        )
    reg = await storage.get_registration_by_certificate_id(cid)
    if not reg:
        raise NotFound("Certificate not found")
    tournament = await storage.get_tournament(reg.tournament_id)
    return {
        "certificate_id": reg.certificate_id,
        "name": reg.name,
        "certificate_confirmed": reg.certificate_confirmed,
        "registered_at": PublicRegistrationResponse.model_validate(reg).created_at,
        "tournament": (
            {
                "id": tournament.id,
                "name": tournament.name,
                "date": TournamentResponse.model_validate(tournament).date,
                "time": tournament.time,
                "venue_address": tournament.venue_address,
            }
            if tournament
            else None
        ),
    }


@router.get("/registrations/{registration_id}/receipt", response_class=HTMLResponse)
@limiter.limit(config.PUBLIC_RATE_LIMIT)
async def registration_receipt(
    request: Request,
    registration_id: str,
    certificate_id: Optional[str] = None,
    admin: Optional[str] = Depends(get_current_admin),
    storage: Storage = StorageDep,
):
    """Printable receipt. Requires the registration's own certificate id, or an admin token."""
    reg = await storage.get_registration(registration_id)
    if not reg:
        raise NotFound("Registration not found")
    if not admin and normalize_certificate_id(certificate_id) != reg.certificate_id:
        raise HTTPException(403, "Certificate ID does not match this registration")
    tournament = await storage.get_tournament(reg.tournament_id)
    if not tournament:
        raise NotFound("Tournament not found")
    return HTMLResponse(
        render_receipt_html(reg, tournament),
        headers={"Content-Disposition": f'inline; filename="{receipt_filename(tournament)}"'},
    )
