"""Test configuration loading."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def test_settings_load():
    """Test that settings load correctly."""
    os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

    from core.config import get_settings

    settings = get_settings()

    assert settings.default_username == "alexmorgan"
    assert settings.new_lead_window_days == 7
    assert settings.dashboard_activity_limit == 5
    assert settings.log_level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    assert settings.is_memory_database()


@pytest.mark.parametrize("raw, expected", [
    ("/api", "/api"),
    ("api/", "/api"),
    ("/v1/api/", "/v1/api"),
    ("", ""),
])
def test_api_prefix_is_normalized(raw, expected):
    from core.config import Settings

    assert Settings(API_PREFIX=raw).api_prefix == expected


def test_cors_origins_parsing():
    from core.config import Settings

    assert Settings(CORS_ALLOWED_ORIGINS="*").get_cors_origins() == ["*"]
    assert Settings(
        CORS_ALLOWED_ORIGINS="http://localhost:3000, https://example.com,"
    ).get_cors_origins() == ["http://localhost:3000", "https://example.com"]


def test_relative_sqlite_path_resolves_against_project_root():
    from core.config import PROJECT_ROOT, Settings

    settings = Settings(DATABASE_URL="sqlite:///./data/crm.db")

    assert settings.database_url == f"sqlite:///{(PROJECT_ROOT / 'data/crm.db').as_posix()}"


def test_memory_and_server_urls_are_unchanged():
    from core.config import Settings

    assert Settings(DATABASE_URL="sqlite:///:memory:").database_url == "sqlite:///:memory:"
    url = "postgresql://user:pw@db:5432/crm"
    assert Settings(DATABASE_URL=url).database_url == url


def test_invalid_log_level_is_rejected():
    from pydantic import ValidationError
    from core.config import Settings

    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="chatty")


def test_reload_settings_picks_up_environment(monkeypatch):
    from core.config import get_settings, reload_settings

    monkeypatch.setenv("NEW_LEAD_WINDOW_DAYS", "14")
    try:
        assert reload_settings().new_lead_window_days == 14
    finally:
        monkeypatch.delenv("NEW_LEAD_WINDOW_DAYS")
        reload_settings()

    assert get_settings().new_lead_window_days == 7
