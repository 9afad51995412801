"""Domain model entities for threaded discussions."""

from discuss.domain.model.comment import Comment
from discuss.domain.model.user import User
from discuss.domain.model.vote import UpvoteResult

__all__ = [
    "Comment",
    "UpvoteResult",
    "User",
]
