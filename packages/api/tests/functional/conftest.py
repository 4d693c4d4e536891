# This project was developed with assistance from AI tools.
"""Fixtures for functional tests.

The real app from ``src.main`` is a module singleton. Each test gets a fresh
in-memory database wired in through ``dependency_overrides`` and a temp
upload directory; ``client`` clears the overrides afterwards so nothing
leaks into the next test.
"""

import pytest
from db import DatabaseService, build_engine, build_sessionmaker, get_db, get_db_service, init_models
from fastapi.testclient import TestClient

import src.main as main_module
from src.core.config import settings
from src.main import app as real_app

from .personas import CONSOLE_SECRET


@pytest.fixture
def engine():
    return build_engine("sqlite+aiosqlite:///:memory:")


@pytest.fixture
def client(engine, monkeypatch, tmp_path):
    """TestClient over the real app, backed by a per-test database."""
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "ADMIN_CONSOLE_SECRET", CONSOLE_SECRET)
    # Lifespan creates the schema on the per-test engine instead of the global one
    monkeypatch.setattr(main_module, "init_models", lambda: init_models(engine))

    sessionmaker = build_sessionmaker(engine)

    async def _get_db():
        async with sessionmaker() as session:
            yield session

    real_app.dependency_overrides[get_db] = _get_db
    real_app.dependency_overrides[get_db_service] = lambda: DatabaseService(engine)

    with TestClient(real_app) as test_client:
        test_client.sessionmaker = sessionmaker
        yield test_client
        test_client.portal.call(engine.dispose)

    real_app.dependency_overrides.clear()
