"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from discuss.config import ServiceSettings, Settings, ThreadSettings
from discuss.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_service_settings(self, settings: Settings) -> ServiceSettings:
        """Provide Comment Service settings."""
        return settings.service

    @provide(scope=Scope.APP)
    def provide_thread_settings(self, settings: Settings) -> ThreadSettings:
        """Provide thread view settings."""
        return settings.thread
