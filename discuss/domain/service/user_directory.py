"""User directory.

Memoizes user records for rendering comment authors. One directory lives
per signed-in session: it is built by the DI request scope and cleared on
sign-out, never shared process-wide.
"""

import asyncio
from collections.abc import Iterable
from typing import Optional

import logfire

from discuss.domain.error import DomainError, NotFoundError
from discuss.domain.model import Comment, User
from discuss.domain.repository import UserRepository
from discuss.domain.value import ExternalUserId, UserId

from .base import Service


class UserDirectory(Service):
    """Session-scoped cache of user profiles."""

    span_prefix = "user_directory"

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user directory.

        Args:
            user_repository: User repository used for cache misses
        """
        self.user_repository = user_repository
        self._users: dict[UserId, User] = {}
        self._by_external_id: dict[ExternalUserId, UserId] = {}
        self._pending: dict[UserId, asyncio.Task[User]] = {}

    def __len__(self) -> int:
        return len(self._users)

    def remember(self, user: User) -> None:
        """Store a user, indexing it by external identity when known."""
        self._users[user.id] = user
        if user.external_id:
            self._by_external_id[user.external_id] = user.id

    def remember_authors(self, comments: Iterable[Comment]) -> int:
        """Store the authors embedded in comments returned by the service.

        Returns:
            Number of embedded authors found
        """
        found = 0
        for comment in comments:
            if comment.author is not None:
                self.remember(comment.author)
                found += 1
        return found

    def get(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_external_id(self, external_id: ExternalUserId) -> Optional[User]:
        user_id = self._by_external_id.get(external_id)
        if user_id is None:
            return None
        return self._users.get(user_id)

    def resolve(self, user_id: UserId) -> User:
        """Return the cached user or a deterministic placeholder."""
        return self._users.get(user_id) or User.placeholder(user_id)

    async def fetch(self, user_id: UserId) -> User:
        """Return a user, asking the service on a cache miss.

        Concurrent fetches of the same ID share one request.

        Args:
            user_id: User ID

        Returns:
            The user

        Raises:
            NotFoundError: If the service does not know the user
        """
        cached = self._users.get(user_id)
        if cached is not None:
            return cached

        task = self._pending.get(user_id)
        if task is None:
            task = asyncio.create_task(self._load(user_id))
            self._pending[user_id] = task
        try:
            return await task
        finally:
            if self._pending.get(user_id) is task and task.done():
                del self._pending[user_id]

    async def _load(self, user_id: UserId) -> User:
        with self.span("fetch", user_id=user_id):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("User not found", user_id=user_id)
                raise NotFoundError("User", user_id)
            self.remember(user)
            logfire.info("User resolved", user_id=user_id, name=user.name)
            return user

    async def prefetch(self, user_ids: Iterable[UserId]) -> int:
        """Resolve every unknown ID; failed lookups keep their placeholder.

        Args:
            user_ids: IDs to resolve (duplicates and cached IDs are skipped)

        Returns:
            Number of users newly resolved
        """
        unknown = [uid for uid in dict.fromkeys(user_ids) if uid not in self._users]
        if not unknown:
            return 0

        with self.span("prefetch", count=len(unknown)):
            results = await asyncio.gather(
                *(self.fetch(uid) for uid in unknown), return_exceptions=True
            )
            resolved = 0
            for uid, result in zip(unknown, results):
                # Lookups cancelled by clear() keep their placeholder too
                if isinstance(result, (DomainError, asyncio.CancelledError)):
                    logfire.warn(
                        "User lookup failed",
                        user_id=uid,
                        error=str(result),
                        error_type=type(result).__name__,
                    )
                elif isinstance(result, BaseException):
                    raise result
                else:
                    resolved += 1
            return resolved

    async def sync_viewer(
        self,
        external_id: ExternalUserId,
        name: str,
        email: str = "",
        avatar_url: Optional[str] = None,
    ) -> User:
        """Resolve the signed-in identity to a user, registering it if new.

        Args:
            external_id: Identity-provider user ID
            name: Display name to register with
            email: Email to register with
            avatar_url: Avatar to register with

        Returns:
            The viewer's user record
        """
        with self.span("sync_viewer", external_id=external_id):
            user = self.get_by_external_id(external_id)
            if user is None:
                user = await self.user_repository.find_by_external_id(external_id)
            if user is None:
                user = await self.user_repository.create(
                    external_id=external_id,
                    name=name or "Anonymous",
                    email=email,
                    avatar_url=avatar_url,
                )
                logfire.info("Viewer registered", user_id=user.id, name=user.name)
            self.remember(user)
            return user

    def clear(self) -> None:
        """Forget every cached user (on sign-out)."""
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()
        self._users.clear()
        self._by_external_id.clear()
        logfire.info("User directory cleared")
