"""Comment Service contract."""

from abc import ABC, abstractmethod
from typing import List, Optional

from discuss.domain.model import Comment, UpvoteResult
from discuss.domain.value import CommentId, PostId, SortOrder, UserId


class CommentRepository(ABC):
    """Repository for comments owned by the remote Comment Service.

    All operations are request/response. Implementations raise
    ``TransportFailure`` when the service cannot be reached or answers with
    something unreadable, and ``RejectedOperation`` when it answers with a
    well-formed error.
    """

    @abstractmethod
    async def fetch_comments(
        self,
        post_id: PostId,
        sort_order: Optional[SortOrder] = None,
    ) -> List[Comment]:
        """Fetch every comment of a post, at every depth, as a flat list.

        Args:
            post_id: The post ID
            sort_order: Ordering to apply (service default when None)

        Returns:
            Flat list of comments; the client reconstructs the tree
        """
        pass

    @abstractmethod
    async def fetch_replies(
        self,
        post_id: PostId,
        parent_id: CommentId,
        sort_order: Optional[SortOrder] = None,
    ) -> List[Comment]:
        """Fetch the direct replies of a comment.

        Args:
            post_id: The post ID
            parent_id: The parent comment ID
            sort_order: Ordering to apply (service default when None)

        Returns:
            Direct children of ``parent_id`` only
        """
        pass

    @abstractmethod
    async def create_comment(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        author_id: UserId,
        text: str,
    ) -> Comment:
        """Create a root comment or a reply.

        Args:
            post_id: The post ID
            parent_id: Parent comment ID for replies (None for root comments)
            author_id: Author user ID
            text: Comment text

        Returns:
            The comment as durably created by the service
        """
        pass

    @abstractmethod
    async def toggle_upvote(self, comment_id: CommentId, user_id: UserId) -> UpvoteResult:
        """Toggle the user's upvote on a comment.

        Args:
            comment_id: The comment ID
            user_id: The voting user ID

        Returns:
            The comment's new upvote total
        """
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Soft-delete a comment.

        Args:
            comment_id: The comment ID
            user_id: The requesting user ID

        Raises:
            NotAuthorizedError: If the user is neither the author nor a moderator
        """
        pass
