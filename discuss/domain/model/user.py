"""User directory entry."""

from datetime import datetime, timezone
from typing import Optional

from discuss.domain.model.common import DomainModel
from discuss.domain.value import ExternalUserId, UserId, UserRole

PLACEHOLDER_NAME = "Loading…"
PLACEHOLDER_CREATED_AT = datetime(1970, 1, 1, tzinfo=timezone.utc)


class User(DomainModel):
    """User as known to the Comment Service.

    ``external_id`` is the identity-provider id the user signed in with; it is
    empty for placeholders and for authors embedded without it.
    """

    id: UserId
    external_id: Optional[ExternalUserId] = None
    name: str
    email: str = ""
    avatar_url: Optional[str] = None
    role: UserRole = UserRole.USER
    is_deleted: bool = False
    created_at: datetime = PLACEHOLDER_CREATED_AT

    @property
    def is_moderator(self) -> bool:
        return self.role == UserRole.MODERATOR

    @classmethod
    def placeholder(cls, user_id: UserId) -> "User":
        """Deterministic stand-in for a user that has not been resolved yet."""
        return cls(
            id=user_id,
            name=PLACEHOLDER_NAME,
            role=UserRole.USER,
            created_at=PLACEHOLDER_CREATED_AT,
        )
