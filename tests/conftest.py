"""Pytest configuration and fixtures for API and storage tests."""
import os
import tempfile

# Set test env BEFORE any imports that use config
os.environ["DATABASE_URL"] = ""
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "testpass123"
os.environ["ADMIN_PASSWORD_HASH"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="siahrokh-receipts-")

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from siahrokh.schemas import RegistrationData, TournamentData
from siahrokh.storage import DatabaseStorage, MemoryStorage
from web.api.main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture(autouse=True)
def storage():
    """Fresh in-memory backend per test (ASGI lifespan doesn't run with httpx)."""
    app.state.storage = MemoryStorage()
    return app.state.storage


@pytest.fixture(params=["memory", "database"])
async def store(request, tmp_path):
    """Each storage backend in turn; the durable one on a throwaway SQLite file."""
    if request.param == "memory":
        s = MemoryStorage()
    else:
        s = DatabaseStorage(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
        await s.init()
    yield s
    await s.close()


@pytest.fixture
async def client():
    """Async HTTP client for testing the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def auth_headers(client):
    """Login as admin and return Authorization headers for protected endpoints."""
    r = await client.post(
        "/api/auth/login",
        json={"username": "admin", "password": "testpass123"},
    )
    assert r.status_code == 200, f"Login failed: {r.text}"
    token = r.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def tournament_data(**overrides) -> TournamentData:
    values = {
        "name": "Spring Open",
        "date": datetime.now(timezone.utc) + timedelta(days=30),
        "time": "18:00",
        "is_open": True,
        "venue_address": "12 Enghelab St, Tehran",
        "venue_info": None,
        "registration_fee": "500,000 IRR",
    }
    values.update(overrides)
    return TournamentData(**values)


def registration_data(tournament_id: str, **overrides) -> RegistrationData:
    values = {
        "tournament_id": tournament_id,
        "name": "Sara Ahmadi",
        "phone": "+98 912 345 6789",
        "email": "sara@example.com",
        "year_of_birth": 2005,
        "receipt_file_path": "/tmp/receipt.png",
        "agreed_tos": True,
        "description": None,
    }
    values.update(overrides)
    return RegistrationData(**values)
