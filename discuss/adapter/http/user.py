"""HTTP implementation of the user lookup contract."""

from typing import Any, Mapping, Optional

from discuss.domain.error import RejectedOperation
from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import ExternalUserId, UserId

from .client import ServiceClient
from .mappers import user_to_wire, wire_to_user


class HttpUserRepository(UserRepository):
    """User lookup over HTTP."""

    def __init__(self, service_client: ServiceClient) -> None:
        """Initialize repository with the shared service client.

        Args:
            service_client: JSON service client
        """
        self.service_client = service_client

    async def _get_user(self, query: Mapping[str, Any]) -> Optional[User]:
        try:
            data = await self.service_client.post("/get-user", query)
        except RejectedOperation as e:
            if e.status_code == 404:
                return None
            raise
        return ServiceClient.decode("/get-user", data, wire_to_user)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return await self._get_user({"id": user_id})

    async def find_by_external_id(
        self, external_id: ExternalUserId
    ) -> Optional[User]:
        """Find a user by identity-provider ID."""
        return await self._get_user({"clerk_user_id": external_id})

    async def create(
        self,
        external_id: ExternalUserId,
        name: str,
        email: str = "",
        avatar_url: Optional[str] = None,
    ) -> User:
        """Register a signed-in identity as a user."""
        data = await self.service_client.post(
            "/create-user", user_to_wire(external_id, name, email, avatar_url)
        )
        return ServiceClient.decode("/create-user", data, wire_to_user)
