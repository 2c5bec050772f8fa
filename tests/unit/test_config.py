"""Unit tests for Settings."""

import pytest

from payment_registry.config import Settings


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("ACCOUNT_LOCK_TIMEOUT_MS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.account_lock_timeout_ms == 5000
        assert settings.gateway_timeout_seconds == 5.0
        assert settings.log_format == "json"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GATEWAY_URL", "http://gateway.internal:9000")
        monkeypatch.setenv("account_lock_timeout_ms", "250")
        monkeypatch.setenv("LOG_FORMAT", "console")

        settings = Settings(_env_file=None)

        assert settings.gateway_url == "http://gateway.internal:9000"
        assert settings.account_lock_timeout_ms == 250
        assert settings.log_format == "console"

    def test_rejects_unknown_log_format(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ValueError):
            Settings(_env_file=None)
