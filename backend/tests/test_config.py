"""Settings: unified database URL, fallbacks and derived URLs."""
import pytest

from app.core.config import Settings
from app.core.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "MONGOURI", "MONGOURL", "FRONTEND_URL", "VITE_FRONTEND_URL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_database_url_missing_fails_fast(clean_env):
    s = Settings(_env_file=None)
    assert s.DATABASE_URL is None
    assert s.sync_database_url is None
    with pytest.raises(ConfigurationError):
        s.require_database_url()
    with pytest.raises(ConfigurationError):
        s.async_database_url


def test_database_url_preferred_over_legacy_names(clean_env):
    clean_env.setenv("MONGOURL", "sqlite:///legacy.db")
    clean_env.setenv("DATABASE_URL", "sqlite:///current.db")
    assert Settings(_env_file=None).DATABASE_URL == "sqlite:///current.db"


@pytest.mark.parametrize("legacy", ["MONGOURI", "MONGOURL"])
def test_legacy_database_url_names(clean_env, legacy):
    clean_env.setenv(legacy, "postgresql://u:p@db:5432/invoices")
    assert Settings(_env_file=None).DATABASE_URL == "postgresql://u:p@db:5432/invoices"


def test_sync_and_async_urls_are_derived(clean_env):
    s = Settings(_env_file=None, DATABASE_URL="postgresql+asyncpg://u:secret@db:5432/invoices")
    assert s.sync_database_url == "postgresql://u:secret@db:5432/invoices"
    assert s.async_database_url == "postgresql+asyncpg://u:secret@db:5432/invoices"

    s = Settings(_env_file=None, DATABASE_URL="postgresql://u:secret@db:5432/invoices")
    assert s.async_database_url == "postgresql+asyncpg://u:secret@db:5432/invoices"

    s = Settings(_env_file=None, DATABASE_URL="sqlite:///app.db")
    assert s.async_database_url == "sqlite+aiosqlite:///app.db"


def test_frontend_url_fallback(clean_env):
    assert Settings(_env_file=None).FRONTEND_URL == "http://localhost:3000"
    clean_env.setenv("VITE_FRONTEND_URL", "https://invoice.example.com")
    assert Settings(_env_file=None).FRONTEND_URL == "https://invoice.example.com"


def test_cors_origins_list(clean_env):
    s = Settings(_env_file=None, CORS_ORIGINS="http://a.test, http://b.test")
    assert s.cors_origins_list == ["http://a.test", "http://b.test"]
