"""Next-tournament setting: public read (homepage countdown), admin write."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

import config
from siahrokh.storage import Storage
from web.api.limits import limiter
from web.api.utils import StorageDep, TournamentResponse
from web.auth import require_admin_user

logger = logging.getLogger("siahrokh.web")

router = APIRouter(prefix="/api", tags=["settings"])


class NextTournamentUpdate(BaseModel):
    tournament_id: Optional[str] = None  # null clears the countdown


@router.get("/tournaments/next", response_model=Optional[TournamentResponse])
@limiter.limit(config.PUBLIC_RATE_LIMIT)
async def get_next_tournament(request: Request, storage: Storage = StorageDep):
    """Tournament the homepage counts down to, or null."""
    return await storage.get_next_tournament()


@router.post("/admin/next-tournament")
@limiter.limit(config.ADMIN_RATE_LIMIT)
async def set_next_tournament(
    request: Request,
    body: NextTournamentUpdate,
    admin: str = Depends(require_admin_user),
    storage: Storage = StorageDep,
):
    """Set (or clear) the countdown tournament (admin only)."""
    await storage.set_next_tournament(body.tournament_id or None)
    logger.info("Next tournament set to %s", body.tournament_id)
    return {"ok": True}
