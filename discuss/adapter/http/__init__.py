"""HTTP Comment Service adapter."""

from .client import ServiceClient
from .comment import HttpCommentRepository
from .user import HttpUserRepository

__all__ = ["HttpCommentRepository", "HttpUserRepository", "ServiceClient"]
