"""Shared fixtures: every test runs against its own SQLite database files."""

from __future__ import annotations

import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.config import reset_settings_cache  # noqa: E402
from app.infrastructure.database import get_engine, reset_engines, session_scope  # noqa: E402
from app.infrastructure.default_attachments_table import ensure_table  # noqa: E402
from app.utils.datetime import get_app_timezone  # noqa: E402


def _clear_caches() -> None:
    reset_settings_cache()
    get_app_timezone.cache_clear()
    reset_engines()


@pytest.fixture(autouse=True)
def database_url(tmp_path, monkeypatch) -> str:
    """Point ``DATABASE_URL`` at a fresh master database for every test."""

    url = f"sqlite:///{tmp_path / 'master.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    monkeypatch.delenv("PROVISION_ON_STARTUP", raising=False)
    monkeypatch.delenv("ENABLE_SEEDING", raising=False)
    _clear_caches()
    yield url
    _clear_caches()


@pytest.fixture()
def session(database_url):
    """Return a session on a master database that already has the table."""

    with get_engine(database_url).begin() as connection:
        ensure_table(connection)
    with session_scope() as db:
        yield db
