from __future__ import annotations

import sys

import pytest

from core.config import AppSettings, get_user_config_dir, write_user_env_vars


def test_defaults(monkeypatch):
    for name in ("RMAPI_BASE_URL", "RMAPI_SWALLOW_LISTING_ERRORS", "RMAPI_HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "https://rickandmortyapi.com/api"
    assert settings.swallow_listing_errors is True
    assert settings.http_timeout_seconds == 20.0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RMAPI_BASE_URL", "https://mirror.test/api")
    monkeypatch.setenv("RMAPI_SWALLOW_LISTING_ERRORS", "false")
    monkeypatch.setenv("RMAPI_HTTP_TIMEOUT_SECONDS", "3.5")

    settings = AppSettings(_env_file=None)

    assert settings.base_url == "https://mirror.test/api"
    assert settings.swallow_listing_errors is False
    assert settings.http_timeout_seconds == 3.5


def test_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("RMAPI_BASE_URL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("RMAPI_BASE_URL=https://from-file.test/api\n", encoding="utf-8")

    assert AppSettings(_env_file=env_file).base_url == "https://from-file.test/api"


def test_invalid_timeout_rejected(monkeypatch):
    monkeypatch.setenv("RMAPI_HTTP_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValueError):
        AppSettings(_env_file=None)


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"RMAPI_BASE_URL": "https://a.test/api"}, env_path=env_path)
    write_user_env_vars({"RMAPI_HTTP_TIMEOUT_SECONDS": "5"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "RMAPI_BASE_URL=https://a.test/api" in lines
    assert "RMAPI_HTTP_TIMEOUT_SECONDS=5" in lines


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout")
def test_user_config_dir_follows_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "rmapi"
