"""User lookup contract."""

from abc import ABC, abstractmethod
from typing import Optional

from discuss.domain.model import User
from discuss.domain.value import ExternalUserId, UserId


class UserRepository(ABC):
    """Repository for user records owned by the remote service."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_external_id(
        self, external_id: ExternalUserId
    ) -> Optional[User]:
        """Find a user by the identity-provider ID they signed in with.

        Args:
            external_id: Identity-provider user ID

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(
        self,
        external_id: ExternalUserId,
        name: str,
        email: str = "",
        avatar_url: Optional[str] = None,
    ) -> User:
        """Register a signed-in identity as a user.

        Args:
            external_id: Identity-provider user ID
            name: Display name
            email: Primary email
            avatar_url: Avatar image reference

        Returns:
            The created user
        """
        pass
