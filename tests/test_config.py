import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from ticketdesk.api import deps
from ticketdesk.core.config import Settings
from ticketdesk.main import app

def test_defaults_are_valid():
    cfg = Settings()
    assert cfg.TIMEZONE == "Asia/Bangkok"
    assert len(cfg.SLIP_RECEIVER_PATTERNS) == 2

def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError):
        Settings(TIMEZONE="Mars/Olympus_Mons")

def test_broken_receiver_pattern_is_rejected():
    with pytest.raises(ValidationError):
        Settings(SLIP_RECEIVER_PATTERNS=[r"YOYE\s*(MUETHONG"])

@pytest.fixture
def fresh_wiring():
    providers = (deps.get_dispatcher, deps.get_database, deps.get_sheets_gateway, deps.get_line_client)
    for provider in providers:
        provider.cache_clear()
    yield
    for provider in providers:
        provider.cache_clear()

def test_startup_fails_when_dispatcher_cannot_be_built(monkeypatch, tmp_path, fresh_wiring):
    # model_construct skips validation, as a settings object patched at runtime would
    broken = Settings.model_construct(TIMEZONE="Mars/Olympus_Mons", DATABASE_PATH=str(tmp_path / "t.db"))
    monkeypatch.setattr(deps, "get_settings", lambda: broken)

    with pytest.raises(Exception):
        with TestClient(app):
            pass

def test_startup_builds_dispatcher(monkeypatch, tmp_path, fresh_wiring):
    monkeypatch.setattr(deps, "get_settings", lambda: Settings(DATABASE_PATH=str(tmp_path / "t.db")))

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert deps.get_dispatcher.cache_info().currsize == 1
    assert (tmp_path / "t.db").exists()
