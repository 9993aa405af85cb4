"""Auth API routes: login, current admin."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

import config
from web.api.limits import limiter
from web.auth import check_admin_credentials, create_access_token, get_current_admin, require_admin_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: str
    role: str = "admin"


class AdminResponse(BaseModel):
    username: str
    role: str = "admin"


@router.post("/login", response_model=LoginResponse)
@limiter.limit(config.PUBLIC_RATE_LIMIT)
async def login(request: Request, body: LoginRequest):
    """Authenticate the admin and return a JWT."""
    if not check_admin_credentials(body.username, body.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return LoginResponse(access_token=create_access_token(body.username), username=body.username)


@router.get("/me", response_model=AdminResponse)
async def get_me(admin: str = Depends(require_admin_user)):
    """Get current authenticated admin."""
    return AdminResponse(username=admin)


@router.get("/check")
async def check_auth(admin: Optional[str] = Depends(get_current_admin)):
    """Whether the caller holds a valid admin token. For frontend auth check."""
    return {"is_authenticated": admin is not None, "user": admin}
