"""Tests for settings and database URL handling."""

import pytest

from usergraph.config import Settings, get_database_url, settings
from usergraph.database.connection import to_async_url


def test_defaults():
    defaults = Settings(_env_file=None)

    assert defaults.database_url.startswith("sqlite+aiosqlite://")
    assert defaults.api_port == 4000
    assert defaults.graphiql is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("USERGRAPH_API_PORT", "9000")
    monkeypatch.setenv("USERGRAPH_CORS_ORIGINS", '["https://example.com"]')
    monkeypatch.setenv("USERGRAPH_GRAPHIQL", "false")

    configured = Settings(_env_file=None)

    assert configured.api_port == 9000
    assert configured.cors_origins == ["https://example.com"]
    assert configured.graphiql is False


def test_get_database_url_prefers_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("USERGRAPH_DATABASE_URL", raising=False)
    assert get_database_url() == settings.database_url

    monkeypatch.setenv("USERGRAPH_DATABASE_URL", "postgresql://u:p@db/users")
    assert get_database_url() == "postgresql://u:p@db/users"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@db/users", "postgresql+asyncpg://u:p@db/users"),
        ("sqlite:///./users.db", "sqlite+aiosqlite:///./users.db"),
        ("sqlite+aiosqlite://", "sqlite+aiosqlite://"),
        ("postgresql+asyncpg://db/users", "postgresql+asyncpg://db/users"),
    ],
)
def test_to_async_url(url: str, expected: str):
    assert to_async_url(url) == expected
