"""Unit tests for Settings."""

from discuss.config import Settings
from discuss.domain.value import SortOrder


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("THREAD__MAX_DEPTH", raising=False)

        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.thread.max_depth == 3
        assert settings.thread.default_sort == SortOrder.NEWEST
        assert settings.service.timeout_seconds == 10.0
        assert settings.observability.send_to_logfire is None

    def test_nested_environment_overrides(self, monkeypatch):
        """Double-underscore variables should reach nested settings."""
        # Arrange
        monkeypatch.setenv("SERVICE__BASE_URL", "https://comments.example.org/api")
        monkeypatch.setenv("THREAD__MAX_DEPTH", "5")
        monkeypatch.setenv("THREAD__DEFAULT_SORT", "most_upvoted")
        monkeypatch.setenv("ENVIRONMENT", "test")

        # Act
        settings = Settings(_env_file=None)

        # Assert
        assert settings.service.base_url == "https://comments.example.org/api"
        assert settings.thread.max_depth == 5
        assert settings.thread.default_sort == SortOrder.MOST_UPVOTED
        assert settings.environment == "test"
