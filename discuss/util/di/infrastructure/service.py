"""Comment Service infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
import logfire
from dishka import Scope, provide

from discuss.adapter.http import (
    HttpCommentRepository,
    HttpUserRepository,
    ServiceClient,
)
from discuss.config import ServiceSettings
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.util.di.base import ProviderBase


class ServiceProvider(ProviderBase):
    """Comment Service component base."""

    __mock_component__ = "service"


class ProdServiceProvider(ServiceProvider):
    """Production provider talking to the Comment Service over HTTP."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_http_client(
        self, service_settings: ServiceSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client, closed with the container."""
        async with httpx.AsyncClient(
            base_url=service_settings.base_url,
            timeout=service_settings.timeout_seconds,
        ) as client:
            logfire.info("Comment Service client opened", base_url=service_settings.base_url)
            yield client

    @provide(scope=Scope.APP)
    def get_service_client(self, client: httpx.AsyncClient) -> ServiceClient:
        """Provide Comment Service client."""
        return ServiceClient(client)

    @provide(scope=Scope.APP)
    def get_comment_repository(self, service_client: ServiceClient) -> CommentRepository:
        """Provide Comment repository."""
        return HttpCommentRepository(service_client)

    @provide(scope=Scope.APP)
    def get_user_repository(self, service_client: ServiceClient) -> UserRepository:
        """Provide User repository."""
        return HttpUserRepository(service_client)
