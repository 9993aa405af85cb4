"""Registration store: backend selection."""
from __future__ import annotations

import logging
from typing import Optional

from siahrokh.errors import BackendUnavailable
from siahrokh.storage.base import MAX_CERTIFICATE_ATTEMPTS, Storage
from siahrokh.storage.database import DatabaseStorage
from siahrokh.storage.memory import MemoryStorage

logger = logging.getLogger("siahrokh.storage")

__all__ = [
    "MAX_CERTIFICATE_ATTEMPTS",
    "Storage",
    "DatabaseStorage",
    "MemoryStorage",
    "create_storage",
]


async def create_storage(database_url: Optional[str]) -> Storage:
    """Pick the backend once at startup. Falls back to memory if the database cannot be initialized."""
    if not database_url:
        logger.warning("DATABASE_URL not set - using in-memory storage (data is lost on restart)")
        return MemoryStorage()
    storage = DatabaseStorage(database_url)
    try:
        await storage.init()
    except BackendUnavailable as e:
        logger.warning(
            "Failed to initialize database storage, falling back to in-memory storage "
            "(data is lost on restart): %s",
            e.message,
        )
        return MemoryStorage(fallback_reason=e.message)
    logger.info("Using database storage")
    return storage
