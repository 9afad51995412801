"""Per-comment busy flags.

The thread store does not serialize calls, so the view keeps at most one
call of each kind in flight per comment and ignores repeated triggers while
one is outstanding.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from discuss.domain.value import CommentId


class BusyAction(str, Enum):
    UPVOTE = "upvote"
    DELETE = "delete"
    LOAD_REPLIES = "load_replies"


class BusyFlags:
    """Set of (action, comment) pairs with a call in flight."""

    def __init__(self) -> None:
        self._busy: set[tuple[BusyAction, CommentId]] = set()

    def is_busy(self, action: BusyAction, comment_id: CommentId) -> bool:
        return (action, comment_id) in self._busy

    @contextmanager
    def claim(self, action: BusyAction, comment_id: CommentId) -> Iterator[bool]:
        """Mark a call as in flight for the duration of the block.

        Yields:
            False if the same call was already in flight (nothing claimed)
        """
        key = (action, comment_id)
        if key in self._busy:
            yield False
            return
        self._busy.add(key)
        try:
            yield True
        finally:
            self._busy.discard(key)
