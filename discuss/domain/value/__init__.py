"""Domain value objects for threaded discussions."""

from discuss.domain.value.identifiers import (
    CommentId,
    ExternalUserId,
    PostId,
    UserId,
)
from discuss.domain.value.types import SortOrder, UserRole

__all__ = [
    # Identifiers
    "CommentId",
    "ExternalUserId",
    "PostId",
    "UserId",
    # Types
    "SortOrder",
    "UserRole",
]
