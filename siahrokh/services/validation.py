"""Registration submission checks.

Every rule is evaluated (no short-circuit) and each violated rule adds its
message, in the fixed order below, so the form can show a full error summary.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from siahrokh.errors import ValidationFailed
from siahrokh.services.numerals import normalize_numerals

ALLOWED_RECEIPT_TYPES = ("image/jpeg", "image/jpg", "image/png", "application/pdf")
DEFAULT_MAX_RECEIPT_BYTES = 10 * 1024 * 1024

_PHONE_RE = re.compile(r"^[0-9+\-\s()]+$")
_YEAR_RE = re.compile(r"^[0-9]{4}$")


@dataclass
class ReceiptInfo:
    """What the validator needs to know about an uploaded receipt (never the bytes)."""

    filename: str
    content_type: Optional[str]
    size: int


@dataclass
class RegistrationSubmission:
    """Raw registration form as decoded by the web layer."""

    tournament_id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    year_of_birth: Optional[str] = None
    agreed_tos: object = False
    description: Optional[str] = None
    receipt: Optional[ReceiptInfo] = None

    def normalized(self) -> "RegistrationSubmission":
        """Copy with numeral-bearing fields converted to ASCII digits."""
        return RegistrationSubmission(
            tournament_id=self.tournament_id,
            name=self.name,
            phone=normalize_numerals(self.phone),
            email=self.email,
            year_of_birth=normalize_numerals(self.year_of_birth),
            agreed_tos=self.agreed_tos,
            description=self.description,
            receipt=self.receipt,
        )


def validate_submission(
    submission: RegistrationSubmission,
    max_receipt_bytes: int = DEFAULT_MAX_RECEIPT_BYTES,
) -> list[str]:
    """Return the list of violated-rule messages (empty when valid). Expects a normalized submission."""
    errors: list[str] = []

    if not submission.name or len(submission.name.strip()) < 2:
        errors.append("Full name must be at least 2 characters long")

    phone = (submission.phone or "").strip()
    if len(phone) < 10:
        errors.append("Phone number must be at least 10 digits")
    elif not _PHONE_RE.match(phone):
        errors.append("Phone number may only contain digits, spaces, +, - and parentheses")

    if not submission.email or "@" not in submission.email:
        errors.append("A valid email address is required")

    if not submission.year_of_birth or not _YEAR_RE.match(submission.year_of_birth.strip()):
        errors.append("Year of birth must be a 4-digit number")

    receipt = submission.receipt
    if receipt is None:
        errors.append("Receipt file is required")
    else:
        if (receipt.content_type or "").lower() not in ALLOWED_RECEIPT_TYPES:
            errors.append("Only JPEG, PNG, and PDF files are allowed")
        if receipt.size > max_receipt_bytes:
            errors.append(f"File size must be less than {max_receipt_bytes // (1024 * 1024)}MB")

    if submission.agreed_tos is not True:
        errors.append("You must agree to the Terms of Service")

    if not submission.tournament_id:
        errors.append("Tournament selection is required")

    return errors


def ensure_valid(submission: RegistrationSubmission, max_receipt_bytes: int = DEFAULT_MAX_RECEIPT_BYTES) -> None:
    """Raise ValidationFailed carrying every violated-rule message."""
    errors = validate_submission(submission, max_receipt_bytes)
    if errors:
        raise ValidationFailed(errors)
