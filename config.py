"""Configuration for the SiahRokh registration service."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _parse_bool(value: str) -> bool:
    return value.strip().lower() not in ("", "0", "false", "no", "off")


def _normalize_database_url(value: str) -> str:
    """Map plain postgres URLs (as hosting providers hand them out) to the async driver."""
    value = value.strip()
    for prefix in ("postgres://", "postgresql://"):
        if value.startswith(prefix):
            return "postgresql+asyncpg://" + value[len(prefix):]
    return value


# Database. Empty means in-memory storage (data is lost on restart).
DATABASE_URL = _normalize_database_url(os.getenv("DATABASE_URL", ""))

# Receipt uploads
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(Path(__file__).parent / "uploads" / "receipts")))
MAX_RECEIPT_BYTES = int(os.getenv("MAX_RECEIPT_BYTES", str(10 * 1024 * 1024)))

# Web auth (JWT secret, single admin account)
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production-use-long-random-string")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")  # Plain password; ignored when a hash is set
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")  # bcrypt hash

# Rate limiting (slowapi limit strings)
RATE_LIMIT_ENABLED = _parse_bool(os.getenv("RATE_LIMIT_ENABLED", "1"))
PUBLIC_RATE_LIMIT = os.getenv("PUBLIC_RATE_LIMIT", "100/15minutes")
ADMIN_RATE_LIMIT = os.getenv("ADMIN_RATE_LIMIT", "1000/15minutes")

CORS_ORIGINS = [x.strip() for x in os.getenv("CORS_ORIGINS", "*").split(",") if x.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
