# This project was developed with assistance from AI tools.
"""Shared fixtures: a fresh in-memory SQLite database per test."""

import pytest
import pytest_asyncio
from db import build_engine, build_sessionmaker, init_models

from src.core.config import settings
from src.services.storage import init_storage_service


@pytest_asyncio.fixture
async def engine():
    eng = build_engine("sqlite+aiosqlite:///:memory:")
    await init_models(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async with build_sessionmaker(engine)() as s:
        yield s


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Lowest bcrypt cost so registrations and logins stay quick."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def upload_dir(monkeypatch, tmp_path):
    """Local storage rooted in a temp directory."""
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    init_storage_service(settings)
    return path
