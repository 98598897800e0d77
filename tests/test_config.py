"""Configuration — required settings and URL normalisation.

Tests cover:
    - Missing DATABASE_URL or SECRET_KEY raises ConfigurationError naming the setting
    - postgresql:// is rewritten for the asyncpg driver
    - Defaults give a fixed-size pool
"""

import pytest

from hackerclone.config import async_database_url, load_settings
from hackerclone.core.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.chdir("/")


def test_missing_secret_is_configuration_error(clean_env):
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(database_url="sqlite+aiosqlite:///x.db")
    assert "SECRET_KEY" in exc_info.value.message
    assert exc_info.value.setting == "secret_key"
    assert not exc_info.value.recoverable


def test_missing_database_url_is_configuration_error(clean_env):
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(secret_key="s")
    assert "DATABASE_URL" in exc_info.value.message


def test_blank_secret_is_configuration_error(clean_env):
    with pytest.raises(ConfigurationError):
        load_settings(database_url="sqlite+aiosqlite:///x.db", secret_key="   ")


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///env.db")
    monkeypatch.setenv("SECRET_KEY", "from-env")
    settings = load_settings()
    assert settings.database_url == "sqlite+aiosqlite:///env.db"
    assert settings.secret_key == "from-env"


def test_postgres_url_gets_asyncpg_driver(clean_env):
    settings = load_settings(database_url="postgresql://u:p@db/hc", secret_key="s")
    assert settings.database_url == "postgresql+asyncpg://u:p@db/hc"


def test_pool_defaults_are_bounded(clean_env):
    settings = load_settings(database_url="sqlite+aiosqlite:///x.db", secret_key="s")
    assert settings.database_max_overflow == 0
    assert settings.database_pool_size > 0
    assert settings.session_max_age_seconds is None


@pytest.mark.parametrize("url, expected", [
    ("postgresql://u:p@db/hc", "postgresql+asyncpg://u:p@db/hc"),
    ("postgresql+asyncpg://u:p@db/hc", "postgresql+asyncpg://u:p@db/hc"),
    ("sqlite+aiosqlite:///./dev.db", "sqlite+aiosqlite:///./dev.db"),
])
def test_async_database_url_shared_with_migrations(url, expected):
    assert async_database_url(url) == expected
