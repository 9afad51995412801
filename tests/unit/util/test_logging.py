"""Unit tests for logging and Logfire configuration."""

import logging

import logfire

from discuss.config import ObservabilitySettings, Settings
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_debug_enables_debug_level(self):
        setup_logging(Settings(_env_file=None, debug=True))

        assert logging.getLogger("discuss").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_production_is_quiet(self):
        setup_logging(Settings(_env_file=None, environment="production"))

        assert logging.getLogger("discuss").level == logging.WARNING


class TestConfigureLogfire:
    """Tests for configure_logfire."""

    def test_token_enables_sending(self, monkeypatch):
        # Arrange
        captured = {}
        monkeypatch.setattr(logfire, "configure", lambda **kwargs: captured.update(kwargs))
        settings = Settings(
            _env_file=None,
            observability=ObservabilitySettings(logfire_token="secret"),
        )

        # Act
        configure_logfire(settings)

        # Assert
        assert captured["send_to_logfire"] is True
        assert captured["token"] == "secret"
        assert captured["service_name"] == "discuss"

    def test_console_only_without_token(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logfire, "configure", lambda **kwargs: captured.update(kwargs))

        configure_logfire(Settings(_env_file=None))

        assert captured["send_to_logfire"] is False
        assert "token" not in captured
