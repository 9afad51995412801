"""In-memory user repository for testing."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import ExternalUserId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_external_id(
        self, external_id: ExternalUserId
    ) -> Optional[User]:
        """Find a user by identity-provider ID."""
        for user in self._users.values():
            if user.external_id == external_id:
                return user
        return None

    async def create(
        self,
        external_id: ExternalUserId,
        name: str,
        email: str = "",
        avatar_url: Optional[str] = None,
    ) -> User:
        """Register a new user."""
        user = User(
            id=UserId(str(uuid4())),
            external_id=external_id,
            name=name,
            email=email,
            avatar_url=avatar_url,
            created_at=datetime.now(timezone.utc),
        )
        return await self.save(user)

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user
