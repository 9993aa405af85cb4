"""Tests for receipt file storage."""
from datetime import datetime, timezone

import pytest

from siahrokh.errors import ValidationFailed
from siahrokh.services.uploads import receipt_extension, receipt_path, remove_receipt, save_receipt


class FakeUpload:
    """Minimal stand-in for an UploadFile: async chunked reads."""

    def __init__(self, content: bytes, filename="receipt.png", content_type="image/png"):
        self.filename = filename
        self.content_type = content_type
        self._content = content
        self._pos = 0

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._content) - self._pos
        chunk = self._content[self._pos:self._pos + size]
        self._pos += len(chunk)
        return chunk


def test_receipt_extension():
    assert receipt_extension("scan.PDF", "application/pdf") == ".pdf"
    assert receipt_extension("photo.jpeg", "image/jpeg") == ".jpeg"
    assert receipt_extension("upload", "image/png") == ".png"
    assert receipt_extension("upload.exe", "image/jpeg") == ".jpg"
    assert receipt_extension(None, None) == ""


def test_receipt_path_layout(tmp_path):
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    path = receipt_path(tmp_path, ".png", now)
    assert path.parent == tmp_path / "2026" / "20260301"
    stem = path.stem.split("-")
    assert stem[0] == "20260301"
    assert len(stem[1]) == 8
    assert len(stem[2]) == 8
    assert path.suffix == ".png"
    assert receipt_path(tmp_path, ".png", now) != path


@pytest.mark.asyncio
async def test_save_receipt_streams_to_disk(tmp_path):
    content = b"%PDF-1.4" + b"x" * (200 * 1024)
    stored = await save_receipt(FakeUpload(content, "scan.pdf", "application/pdf"), tmp_path, 1024 * 1024)
    with open(stored, "rb") as f:
        assert f.read() == content
    assert stored.endswith(".pdf")


@pytest.mark.asyncio
async def test_save_receipt_enforces_size_cap(tmp_path):
    with pytest.raises(ValidationFailed) as exc_info:
        await save_receipt(FakeUpload(b"x" * (2 * 1024 * 1024 + 1)), tmp_path, 2 * 1024 * 1024)
    assert exc_info.value.errors == ["File size must be less than 2MB"]
    assert [p for p in tmp_path.rglob("*") if p.is_file()] == []


def test_remove_receipt(tmp_path):
    path = tmp_path / "r.png"
    path.write_bytes(b"x")
    remove_receipt(str(path))
    assert not path.exists()
    remove_receipt(str(path))
