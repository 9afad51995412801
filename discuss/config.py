"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field

from pydantic_settings import BaseSettings, SettingsConfigDict

from discuss.domain.value import SortOrder


class ServiceSettings(BaseModel):
    """Comment Service connection."""

    # Base URL the JSON endpoints (/get-post-comments, ...) are relative to
    base_url: str = "http://localhost:3000/api"

    # Total timeout for one request
    timeout_seconds: float = Field(default=10.0, gt=0)


class ThreadSettings(BaseModel):
    """Thread view configuration."""

    # Deepest render depth that nests replies; deeper replies sit behind
    # a "continue thread" gate
    max_depth: int = Field(default=3, ge=0)

    # Sort order used when a thread is first opened
    default_sort: SortOrder = SortOrder.NEWEST


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nested values:

        SERVICE__BASE_URL=https://discuss.example.org/api
        THREAD__MAX_DEPTH=5
        THREAD__DEFAULT_SORT=most_upvoted
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows SERVICE__BASE_URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    service: ServiceSettings = ServiceSettings()
    thread: ThreadSettings = ThreadSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
