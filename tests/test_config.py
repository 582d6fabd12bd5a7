from __future__ import annotations

import pytest

from tmapi.core.config import AppSettings, get_user_config_dir, write_user_env_vars
from tmapi.core.domain.connection import Connection


def test_defaults(settings: AppSettings) -> None:
    assert settings.http_timeout_seconds == 60.0
    assert settings.user_agent == "TMAPIv4 Python wrapper"
    assert settings.default_page_size == 100


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMAPI_HOST", "tm.example.com")
    monkeypatch.setenv("TMAPI_PASSWORD", "secret")
    monkeypatch.setenv("TMAPI_HTTP_TIMEOUT_SECONDS", "5")
    settings = AppSettings(_env_file=None)
    assert settings.host == "tm.example.com"
    assert settings.password.get_secret_value() == "secret"
    assert settings.http_timeout_seconds == 5.0


def test_connection_from_settings() -> None:
    settings = AppSettings(
        _env_file=None,
        host="tm.example.com",
        username="a@b.com",
        password="p",
        organization_id="7",
    )
    connection = Connection.from_settings(settings)
    assert connection.base_url == "https://tm.example.com/admin/api/7"
    assert connection.credentials == "a@b.com|p"
    assert str(connection.password) == "**********"


def test_connection_from_incomplete_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("HOST", "USERNAME", "PASSWORD", "ORGANIZATION_ID"):
        monkeypatch.delenv(f"TMAPI_{name}", raising=False)
    settings = AppSettings(_env_file=None, host="tm.example.com")
    assert settings.missing_connection_fields() == ["username", "password", "organization_id"]
    with pytest.raises(ValueError, match="username"):
        Connection.from_settings(settings)


def test_connection_is_immutable(connection: Connection) -> None:
    with pytest.raises(Exception):
        connection.host = "other"  # type: ignore[misc]


def test_write_user_env_vars_merges(tmp_path) -> None:
    env_path = tmp_path / "tmapi" / ".env"
    write_user_env_vars({"TMAPI_HOST": "a", "TMAPI_USERNAME": "u"}, env_path)
    write_user_env_vars({"TMAPI_HOST": "b", "TMAPI_PASSWORD": None}, env_path)
    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines == ["# tmapi user config (.env)", "TMAPI_HOST=b", "TMAPI_USERNAME=u"]


def test_user_config_dir_honours_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "tmapi"
