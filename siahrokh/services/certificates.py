"""Certificate id candidates: 5 digits followed by 5 uppercase letters (e.g. 04217KQZAB)."""
from __future__ import annotations

import random
import re
import string
from typing import Optional

from siahrokh.services.numerals import normalize_numerals

CERTIFICATE_ID_LENGTH = 10
CERTIFICATE_ID_RE = re.compile(r"^[0-9]{5}[A-Z]{5}$")

_rng = random.SystemRandom()


def generate_certificate_id(rng: Optional[random.Random] = None) -> str:
    """Return a candidate id. Uniqueness is the store's job (see Storage.create_registration)."""
    rng = rng or _rng
    digits = f"{rng.randrange(100000):05d}"
    letters = "".join(rng.choice(string.ascii_uppercase) for _ in range(5))
    return digits + letters


def normalize_certificate_id(value: Optional[str]) -> str:
    """Canonical lookup form: trimmed, ASCII digits, uppercase."""
    return (normalize_numerals(value) or "").strip().upper()


def is_certificate_id(value: str) -> bool:
    return bool(CERTIFICATE_ID_RE.match(value))
