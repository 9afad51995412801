"""Domain services."""

from .base import Service
from .materializer import ReplyIndex, TreeMaterializer, order_comments
from .user_directory import UserDirectory

__all__ = [
    "ReplyIndex",
    "Service",
    "TreeMaterializer",
    "UserDirectory",
    "order_comments",
]
