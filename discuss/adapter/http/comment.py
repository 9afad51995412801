"""HTTP implementation of the Comment Service contract."""

from typing import Any, List, Optional

import logfire

from discuss.domain.error import NotAuthorizedError, RejectedOperation
from discuss.domain.model import Comment, UpvoteResult
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, PostId, SortOrder, UserId

from .client import ServiceClient
from .mappers import wire_to_comment, wire_to_upvote_result


class HttpCommentRepository(CommentRepository):
    """Comment Service client over HTTP."""

    def __init__(self, service_client: ServiceClient) -> None:
        """Initialize repository with the shared service client.

        Args:
            service_client: JSON service client
        """
        self.service_client = service_client

    async def fetch_comments(
        self,
        post_id: PostId,
        sort_order: Optional[SortOrder] = None,
    ) -> List[Comment]:
        """Fetch every comment of a post as a flat list."""
        payload: dict[str, Any] = {"post_id": post_id}
        if sort_order is not None:
            payload["sort_by"] = sort_order.wire_value
        data = await self.service_client.post("/get-post-comments", payload)
        return ServiceClient.decode_list("/get-post-comments", data, wire_to_comment)

    async def fetch_replies(
        self,
        post_id: PostId,
        parent_id: CommentId,
        sort_order: Optional[SortOrder] = None,
    ) -> List[Comment]:
        """Fetch the direct replies of a comment."""
        payload: dict[str, Any] = {
            "post_id": post_id,
            "parent_comment_id": parent_id,
        }
        if sort_order is not None:
            payload["sort_by"] = sort_order.wire_value
        data = await self.service_client.post("/get-comment-reply", payload)
        return ServiceClient.decode_list("/get-comment-reply", data, wire_to_comment)

    async def create_comment(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        author_id: UserId,
        text: str,
    ) -> Comment:
        """Create a root comment or a reply."""
        data = await self.service_client.post(
            "/create-comment",
            {
                "post_id": post_id,
                "parent_comment_id": parent_id,
                "user_id": author_id,
                "text": text,
            },
        )
        comment = ServiceClient.decode("/create-comment", data, wire_to_comment)
        logfire.info(
            "Comment created",
            comment_id=comment.id,
            post_id=post_id,
            parent_id=parent_id,
        )
        return comment

    async def toggle_upvote(self, comment_id: CommentId, user_id: UserId) -> UpvoteResult:
        """Toggle the user's upvote on a comment."""
        data = await self.service_client.post(
            "/upvote-comment", {"comment_id": comment_id, "user_id": user_id}
        )
        return ServiceClient.decode("/upvote-comment", data, wire_to_upvote_result)

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Soft-delete a comment."""
        try:
            await self.service_client.post(
                "/delete-comment", {"comment_id": comment_id, "user_id": user_id}
            )
        except RejectedOperation as e:
            if e.status_code in (401, 403):
                raise NotAuthorizedError("comment", comment_id, user_id) from e
            raise
