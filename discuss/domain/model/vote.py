"""Upvote toggle outcome."""

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId


class UpvoteResult(DomainModel):
    """Server answer to an upvote toggle.

    Upvotes are a per-user toggle; ``upvote_count`` is the comment's new
    server-authoritative total after the toggle was applied.
    """

    comment_id: CommentId
    upvote_count: int = Field(ge=0)
