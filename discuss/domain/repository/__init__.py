"""Repository interfaces for threaded discussions.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the adapter layer.
"""

from discuss.domain.repository.comment import CommentRepository
from discuss.domain.repository.user import UserRepository

__all__ = [
    "CommentRepository",
    "UserRepository",
]
