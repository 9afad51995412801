"""Comment entity.

Comments arrive from the Comment Service as a flat collection linked by
``parent_id``. The client attaches nested ``children`` lazily, one level per
expansion, so an empty ``children`` tuple means "not loaded", never "no
replies". ``descendant_count`` carries the real reply total.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.model.user import User
from discuss.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Server fields are immutable; the UI annotations (``children``,
    ``descendant_count``, ``has_upvoted_locally``) change by producing a copy
    with ``model_copy(update=...)``.
    """

    id: CommentId
    post_id: PostId
    parent_id: Optional[CommentId] = None
    author_id: UserId
    text: str  # Non-empty at creation; tombstones may come back blank
    upvote_count: int = Field(default=0, ge=0)
    is_deleted: bool = False
    created_at: datetime
    author: Optional[User] = None  # Embedded by the service when available

    children: tuple["Comment", ...] = ()
    descendant_count: int = Field(default=0, ge=0)
    has_upvoted_locally: bool = False

    def as_unloaded(self, descendant_count: int = 0) -> "Comment":
        """Copy with no loaded subtree and the given reply total."""
        return self.model_copy(
            update={"children": (), "descendant_count": descendant_count}
        )
