"""Settings — environment parsing and backend selection value."""

import pytest
from pydantic import ValidationError

from user_service.config import Settings
from user_service.core.domain_types import StorageBackend


def test_db_type_from_environment(monkeypatch):
    monkeypatch.setenv("DB_TYPE", "mongodb")
    assert Settings(_env_file=None).storage_backend == StorageBackend.MONGODB


def test_unset_db_type_is_auto(monkeypatch):
    monkeypatch.delenv("DB_TYPE", raising=False)
    assert Settings(_env_file=None).storage_backend == StorageBackend.AUTO


def test_postgres_url_gets_async_driver():
    settings = Settings(_env_file=None, database_url="postgresql://u:p@h:5432/d")
    assert settings.database_url == "postgresql+asyncpg://u:p@h:5432/d"


def test_cache_disabled_by_default(monkeypatch):
    monkeypatch.delenv("CACHE_ENABLED", raising=False)
    settings = Settings(_env_file=None)
    assert settings.cache_enabled is False
    assert settings.cache_ttl_seconds == 300


def test_negative_cache_ttl_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, cache_ttl_seconds=-1)
