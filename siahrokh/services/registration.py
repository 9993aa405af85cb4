"""Registration submission pipeline."""
from __future__ import annotations

import logging
from pathlib import Path

from siahrokh.errors import CertificateIdExhausted, NotFound, ValidationFailed
from siahrokh.models import Registration, Tournament
from siahrokh.schemas import RegistrationData
from siahrokh.services.uploads import remove_receipt, save_receipt
from siahrokh.services.validation import RegistrationSubmission, ensure_valid
from siahrokh.storage import Storage

logger = logging.getLogger("siahrokh.registration")


async def submit_registration(
    storage: Storage,
    submission: RegistrationSubmission,
    upload,
    upload_dir: Path,
    max_receipt_bytes: int,
) -> tuple[Registration, Tournament]:
    """Validate a submission, store its receipt and create the registration.

    Nothing is written before validation passes. If the registration cannot be
    created, the stored receipt is removed again.
    """
    submission = submission.normalized()
    ensure_valid(submission, max_receipt_bytes)

    tournament = await storage.get_tournament(submission.tournament_id)
    if not tournament:
        raise NotFound("Tournament not found")
    if not tournament.is_open:
        raise ValidationFailed(["Registration is closed for this tournament"])

    receipt_file_path = await save_receipt(upload, upload_dir, max_receipt_bytes)
    data = RegistrationData(
        tournament_id=tournament.id,
        name=submission.name.strip(),
        phone=submission.phone.strip(),
        email=submission.email.strip(),
        year_of_birth=int(submission.year_of_birth.strip()),
        receipt_file_path=receipt_file_path,
        agreed_tos=True,
        description=(submission.description or "").strip() or None,
    )
    try:
        registration = await storage.create_registration(data)
    except CertificateIdExhausted:
        logger.error("No free certificate id for tournament %s", tournament.id)
        remove_receipt(receipt_file_path)
        raise
    except Exception:
        remove_receipt(receipt_file_path)
        raise
    logger.info("Registration %s created (certificate %s)", registration.id, registration.certificate_id)
    return registration, tournament
