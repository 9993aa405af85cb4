"""Receipt file storage: <root>/<YYYY>/<YYYYMMDD>/<YYYYMMDD>-<uuid8>-<random8><ext>."""
from __future__ import annotations

import logging
import os
import secrets
import string
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from siahrokh.errors import ValidationFailed

logger = logging.getLogger("siahrokh.uploads")

CHUNK_SIZE = 64 * 1024
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".pdf"}
_CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "application/pdf": ".pdf",
}
_ALPHABET = string.ascii_lowercase + string.digits


def receipt_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    """Extension from the client filename when allowed, otherwise from the content type."""
    ext = Path(filename or "").suffix.lower()
    if ext in ALLOWED_EXTENSIONS:
        return ext
    return _CONTENT_TYPE_EXTENSIONS.get((content_type or "").lower(), "")


def receipt_path(root: Path, ext: str, now: Optional[datetime] = None) -> Path:
    """Fresh, randomized destination for a receipt received at `now`."""
    now = now or datetime.now(timezone.utc)
    day = now.strftime("%Y%m%d")
    short_id = uuid.uuid4().hex[:8]
    random8 = "".join(secrets.choice(_ALPHABET) for _ in range(8))
    return root / now.strftime("%Y") / day / f"{day}-{short_id}-{random8}{ext}"


async def save_receipt(upload, root: Path, max_size: int, now: Optional[datetime] = None) -> str:
    """Stream an UploadFile to disk and return the stored path.

    The size cap is enforced while streaming; a partial file is removed.
    """
    destination = receipt_path(root, receipt_extension(upload.filename, upload.content_type), now)
    destination.parent.mkdir(parents=True, exist_ok=True)
    total = 0
    with open(destination, "wb") as f:
        while chunk := await upload.read(CHUNK_SIZE):
            total += len(chunk)
            if total > max_size:
                break
            f.write(chunk)
    if total > max_size:
        destination.unlink(missing_ok=True)
        raise ValidationFailed([f"File size must be less than {max_size // (1024 * 1024)}MB"])
    logger.info("Stored receipt %s (%d bytes)", destination, total)
    return str(destination)


def remove_receipt(path: str) -> None:
    """Best-effort removal of a stored receipt (used when the registration could not be created)."""
    try:
        os.remove(path)
    except FileNotFoundError:
        return
    except OSError as e:
        logger.warning("Could not remove receipt %s: %s", path, e)
        return
    logger.warning("Removed receipt %s after failed registration", path)
