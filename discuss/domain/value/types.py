"""Domain value types for threaded discussions."""

from enum import Enum


class SortOrder(str, Enum):
    """Ordering applied by the Comment Service to comment collections."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_UPVOTED = "most_upvoted"

    @property
    def wire_value(self) -> str:
        """Value understood by the Comment Service ``sort_by`` field."""
        return _WIRE_SORT[self]


_WIRE_SORT = {
    SortOrder.NEWEST: "created_at",
    SortOrder.OLDEST: "oldest",
    SortOrder.MOST_UPVOTED: "upvotes",
}


class UserRole(str, Enum):
    """Role of a directory user.

    Moderators may delete any comment; users only their own.
    """

    USER = "user"
    MODERATOR = "moderator"

    @classmethod
    def from_wire(cls, value: str | None) -> "UserRole":
        """Parse a role as sent by the service (``admin`` means moderator)."""
        if value in ("admin", "moderator"):
            return cls.MODERATOR
        return cls.USER
