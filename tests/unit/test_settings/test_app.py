"""Unit tests for environment settings."""

import logging
from pathlib import Path

import pytest

from src.settings import FetchSettings, get_settings


class TestFetchSettings:
    """Tests for FetchSettings."""

    @pytest.fixture(autouse=True)
    def _isolate_env(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Run from an empty directory so no .env file is picked up."""
        monkeypatch.chdir(tmp_path)
        for name in (
            "STORAGE_FETCH_TIMEOUT_SECONDS",
            "STORAGE_FETCH_USER_AGENT",
            "STORAGE_FETCH_LOG_LEVEL",
            "STORAGE_FETCH_LOG_JSON",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self) -> None:
        """Defaults keep the transport timeout and JSON logs."""
        settings = get_settings()

        assert settings.timeout_seconds is None
        assert settings.log_level == "INFO"
        assert settings.log_json is True

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """STORAGE_FETCH_* variables populate the settings."""
        monkeypatch.setenv("STORAGE_FETCH_TIMEOUT_SECONDS", "15")
        monkeypatch.setenv("STORAGE_FETCH_USER_AGENT", "uploader/3.1")
        monkeypatch.setenv("STORAGE_FETCH_LOG_JSON", "false")

        settings = FetchSettings()

        assert settings.timeout_seconds == 15.0
        assert settings.user_agent == "uploader/3.1"
        assert settings.log_json is False

    def test_to_fetch_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings and caller headers combine into a FetchConfig."""
        monkeypatch.setenv("STORAGE_FETCH_TIMEOUT_SECONDS", "45")

        config = FetchSettings().to_fetch_config(
            default_headers={"apikey": "anon-key"}
        )

        assert config.timeout_seconds == 45.0
        assert config.default_headers == {"apikey": "anon-key"}

    def test_apply_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """apply_logging passes the parsed level and format through."""
        calls: list[dict[str, object]] = []
        monkeypatch.setattr(
            "src.settings.app.configure_logging",
            lambda **kwargs: calls.append(kwargs),
        )
        monkeypatch.setenv("STORAGE_FETCH_LOG_LEVEL", "warning")
        monkeypatch.setenv("STORAGE_FETCH_LOG_JSON", "false")

        FetchSettings().apply_logging()

        assert calls == [{"level": logging.WARNING, "json_format": False}]
