"""Submit comment use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from discuss.application.thread_store import ThreadStore
from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import ValidationError
from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, PostId, UserId


class SubmitCommentRequest(BaseModel):
    """Submit comment request."""

    post_id: PostId
    author_id: UserId  # User ID of the signed-in viewer
    text: str
    parent_id: Optional[CommentId] = None  # Parent comment ID for replies


class SubmitCommentResponse(BaseModel):
    """Submit comment response."""

    comment: Comment
    placed: bool  # Whether the comment is now shown in the thread


class SubmitCommentUseCase(
    BaseUseCase[SubmitCommentRequest, SubmitCommentResponse]
):
    """Use case for posting a root comment or a reply from the thread view."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        thread_store: ThreadStore,
    ) -> None:
        """Initialize submit comment use case.

        Args:
            comment_repository: Comment Service client
            thread_store: Thread store receiving the created comment
        """
        self.comment_repository = comment_repository
        self.thread_store = thread_store

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Steps:
        1. Trim the text and reject it if nothing is left
        2. Create the comment via the Comment Service
        3. Show it first among the roots, or first below its parent

        Args:
            request: Submit comment request

        Returns:
            Created comment and whether it was placed in the loaded tree

        Raises:
            ValidationError: If the text is empty
            ServiceError: If the service call failed (tree unchanged)
        """
        text = request.text.strip()
        if not text:
            raise ValidationError("Comment text cannot be empty")

        with logfire.span(
            "submit_comment",
            post_id=request.post_id,
            parent_id=request.parent_id,
            text_length=len(text),
        ):
            comment = await self.comment_repository.create_comment(
                post_id=request.post_id,
                parent_id=request.parent_id,
                author_id=request.author_id,
                text=text,
            )
            self.thread_store.user_directory.remember_authors([comment])

            if request.parent_id is None:
                placed = self.thread_store.add_root(comment)
            else:
                placed = self.thread_store.add_reply(request.parent_id, comment)

            return SubmitCommentResponse(comment=comment, placed=placed)
