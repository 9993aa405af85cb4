"""Backend selection at startup."""
import logging

import pytest

from conftest import registration_data, tournament_data
from siahrokh.storage import DatabaseStorage, MemoryStorage, create_storage


@pytest.mark.asyncio
async def test_no_database_url_uses_memory(caplog):
    with caplog.at_level(logging.WARNING, logger="siahrokh.storage"):
        storage = await create_storage("")
    assert isinstance(storage, MemoryStorage)
    assert storage.kind == "memory"
    assert storage.durable is False
    assert storage.fallback_reason is None
    assert "in-memory" in caplog.text


@pytest.mark.asyncio
async def test_unusable_database_falls_back_to_memory(caplog):
    with caplog.at_level(logging.WARNING, logger="siahrokh.storage"):
        storage = await create_storage("notadialect://nowhere/db")
    assert isinstance(storage, MemoryStorage)
    assert storage.fallback_reason
    assert "falling back to in-memory storage" in caplog.text


@pytest.mark.asyncio
async def test_sqlite_url_uses_database(tmp_path):
    storage = await create_storage(f"sqlite+aiosqlite:///{tmp_path / 'app.db'}")
    try:
        assert isinstance(storage, DatabaseStorage)
        assert storage.kind == "database"
        assert storage.durable is True
    finally:
        await storage.close()


@pytest.mark.asyncio
async def test_database_storage_survives_reopen(tmp_path):
    """Data written through one instance is visible to the next (restart)."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'app.db'}"
    first = await create_storage(url)
    t = await first.create_tournament(tournament_data())
    reg = await first.create_registration(registration_data(t.id))
    await first.set_next_tournament(t.id)
    await first.close()

    second = await create_storage(url)
    try:
        assert (await second.get_next_tournament()).id == t.id
        found = await second.get_registration_by_certificate_id(reg.certificate_id)
        assert found.id == reg.id
    finally:
        await second.close()
