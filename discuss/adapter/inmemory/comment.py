"""In-memory Comment Service for testing.

Mirrors the remote service's observable behaviour: sorted flat and reply
collections, per-user upvote toggles, soft deletes restricted to the author
or a moderator, and rejection of empty text.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from discuss.domain.error import NotAuthorizedError, RejectedOperation
from discuss.domain.model import Comment, UpvoteResult
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.service import order_comments
from discuss.domain.value import CommentId, PostId, SortOrder, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, user_repository: Optional[UserRepository] = None) -> None:
        self.user_repository = user_repository
        self._comments: dict[CommentId, Comment] = {}
        self._upvotes: set[tuple[CommentId, UserId]] = set()

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment (stored without UI annotations)."""
        stored = comment.model_copy(
            update={"children": (), "descendant_count": 0, "has_upvoted_locally": False}
        )
        self._comments[comment.id] = stored
        return stored

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def fetch_comments(
        self,
        post_id: PostId,
        sort_order: Optional[SortOrder] = None,
    ) -> List[Comment]:
        """Return every comment of a post, sorted."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        return order_comments(comments, sort_order or SortOrder.NEWEST)

    async def fetch_replies(
        self,
        post_id: PostId,
        parent_id: CommentId,
        sort_order: Optional[SortOrder] = None,
    ) -> List[Comment]:
        """Return the direct replies of a comment, sorted."""
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id == parent_id
        ]
        return order_comments(comments, sort_order or SortOrder.NEWEST)

    async def create_comment(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        author_id: UserId,
        text: str,
    ) -> Comment:
        """Create a comment after validating text and parent."""
        if not text.strip():
            raise RejectedOperation("Comment text is required", status_code=400)
        if parent_id is not None:
            parent = self._comments.get(parent_id)
            if parent is None or parent.post_id != post_id:
                raise RejectedOperation("Parent comment not found", status_code=404)

        author = None
        if self.user_repository is not None:
            author = await self.user_repository.find_by_id(author_id)

        comment = Comment(
            id=CommentId(str(uuid4())),
            post_id=post_id,
            parent_id=parent_id,
            author_id=author_id,
            text=text,
            upvote_count=0,
            is_deleted=False,
            created_at=datetime.now(timezone.utc),
            author=author,
        )
        return await self.save(comment)

    async def toggle_upvote(self, comment_id: CommentId, user_id: UserId) -> UpvoteResult:
        """Add the user's upvote, or remove it if already present."""
        comment = self._comments.get(comment_id)
        if comment is None:
            raise RejectedOperation("Comment not found", status_code=404)

        key = (comment_id, user_id)
        if key in self._upvotes:
            self._upvotes.discard(key)
            count = max(0, comment.upvote_count - 1)
        else:
            self._upvotes.add(key)
            count = comment.upvote_count + 1

        self._comments[comment_id] = comment.model_copy(update={"upvote_count": count})
        return UpvoteResult(comment_id=comment_id, upvote_count=count)

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Soft-delete a comment for its author or a moderator."""
        comment = self._comments.get(comment_id)
        if comment is None:
            raise RejectedOperation("Comment not found", status_code=404)

        if comment.author_id != user_id:
            user = None
            if self.user_repository is not None:
                user = await self.user_repository.find_by_id(user_id)
            if user is None or not user.is_moderator:
                raise NotAuthorizedError("comment", comment_id, user_id)

        self._comments[comment_id] = comment.model_copy(update={"is_deleted": True})
