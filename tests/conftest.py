"""Shared fixtures: a fresh SQLite database per test and an app environment."""

import pytest

from adslot.core.database import init_database, seed_settings
from adslot.core.models import AppConfig
from adslot.db.repository import Repository

_ENV_VARS = (
    "ADSLOT_DB_PATH",
    "ADSLOT_MAX_CONTENT_LENGTH",
    "ADSLOT_SITE_NAME",
    "ADSLOT_ADMIN_HASH",
    "ADSLOT_ADMIN_PASSWORD",
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("adslot.web.security._cached_admin_hash", None)
    monkeypatch.setattr("adslot.web.security._login_attempts", {})
    return monkeypatch


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "adslot.db")
    init_database(path)
    seed_settings(path)
    return path


@pytest.fixture
def repo(db_path):
    return Repository(db_path)


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def app_env(clean_env, db_path):
    clean_env.setenv("ADSLOT_DB_PATH", db_path)
    return db_path
