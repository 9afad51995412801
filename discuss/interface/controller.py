"""Thread view controller.

Drives a thread store on behalf of one signed-in viewer: expansion flags,
busy flags, inline error reporting and text rendering.
"""

from datetime import datetime
from typing import Optional

import logfire

from discuss.application.thread_store import ThreadStore
from discuss.application.usecase.comment import (
    SubmitCommentRequest,
    SubmitCommentUseCase,
)
from discuss.domain.error import DomainError, ServiceError, ValidationError
from discuss.domain.model import Comment, User
from discuss.domain.service import UserDirectory
from discuss.domain.value import CommentId, PostId, SortOrder

from .render.busy import BusyAction, BusyFlags
from .render.expansion import ExpansionPolicy, ExpansionState, RenderRow
from .render.text import render_thread


class ThreadController:
    """Thread view for one viewer.

    Service failures never propagate out of the controller: they are logged
    and kept in ``error`` as the inline message, and the tree is left as it
    was.
    """

    def __init__(
        self,
        store: ThreadStore,
        submit_comment: SubmitCommentUseCase,
        policy: ExpansionPolicy,
        viewer: User,
    ) -> None:
        """Initialize thread controller.

        Args:
            store: Thread store for the viewer's session
            submit_comment: Submit comment use case bound to the same store
            policy: Expansion policy
            viewer: Signed-in user
        """
        self.store = store
        self.submit_comment = submit_comment
        self.policy = policy
        self.viewer = viewer
        self.state = ExpansionState()
        self.busy = BusyFlags()
        self.error: Optional[str] = None

    @property
    def directory(self) -> UserDirectory:
        return self.store.user_directory

    def _fail(self, action: str, error: DomainError, **attributes) -> None:
        self.error = str(error) or "An error occurred"
        logfire.warn(
            "Thread action failed",
            action=action,
            error=self.error,
            error_type=type(error).__name__,
            **attributes,
        )

    async def _resolve_authors(self) -> None:
        await self.directory.prefetch(self.store.loaded_author_ids())

    async def open(
        self, post_id: PostId, sort_order: Optional[SortOrder] = None
    ) -> bool:
        """Show a post's comments.

        Returns:
            Whether the comments were loaded
        """
        previous = self.store.post_id
        self.error = None
        try:
            await self.store.load_roots(post_id, sort_order)
        except ServiceError as e:
            self._fail("open", e, post_id=post_id)
            return False

        if post_id != previous:
            self.state.clear()
        await self._resolve_authors()
        return True

    async def change_sort(self, sort_order: SortOrder) -> bool:
        """Reload the current post in another order."""
        if self.store.post_id is None:
            return False
        return await self.open(self.store.post_id, sort_order)

    async def toggle_replies(self, comment_id: CommentId) -> bool:
        """Show or hide a comment's replies, loading them on first expansion.

        Returns:
            Whether the replies are now shown
        """
        node = self.store.find(comment_id)
        if node is None or self.store.post_id is None:
            return False

        if not self.state.is_expanded(comment_id) and not node.children:
            with self.busy.claim(BusyAction.LOAD_REPLIES, comment_id) as claimed:
                if not claimed:
                    return False
                self.error = None
                try:
                    await self.store.load_replies(self.store.post_id, comment_id)
                except ServiceError as e:
                    self._fail("load_replies", e, comment_id=comment_id)
                    return False
            await self._resolve_authors()

        return self.state.toggle(comment_id)

    def continue_thread(self, comment_id: CommentId) -> None:
        self.state.continue_thread(comment_id)

    def collapse_thread(self, comment_id: CommentId) -> None:
        self.state.collapse_thread(comment_id)

    def can_reply(self, depth: int) -> bool:
        return self.policy.can_reply(depth)

    def can_delete(self, comment: Comment) -> bool:
        """Deleting is offered to the author and to moderators."""
        if comment.is_deleted:
            return False
        return comment.author_id == self.viewer.id or self.viewer.is_moderator

    async def upvote(self, comment_id: CommentId) -> Optional[int]:
        """Toggle the viewer's upvote.

        Returns:
            The new upvote count, or None if ignored or failed
        """
        with self.busy.claim(BusyAction.UPVOTE, comment_id) as claimed:
            if not claimed:
                return None
            self.error = None
            try:
                return await self.store.toggle_upvote(comment_id, self.viewer.id)
            except ServiceError as e:
                self._fail("upvote", e, comment_id=comment_id)
                return None

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment the viewer may delete.

        Returns:
            Whether the comment is now shown as deleted
        """
        comment = self.store.find(comment_id)
        if comment is None or not self.can_delete(comment):
            return False

        with self.busy.claim(BusyAction.DELETE, comment_id) as claimed:
            if not claimed:
                return False
            self.error = None
            try:
                return await self.store.soft_delete(comment_id, self.viewer.id)
            except ServiceError as e:
                self._fail("delete", e, comment_id=comment_id)
                return False

    async def submit(
        self, text: str, parent_id: Optional[CommentId] = None
    ) -> Optional[Comment]:
        """Post a root comment or a reply as the viewer.

        A reply expands its parent so the new comment is visible. When the
        parent's existing replies were never loaded they are loaded along
        with it, so the parent never shows a partial reply list.

        Returns:
            The created comment, or None if rejected or failed
        """
        if self.store.post_id is None:
            return None
        parent = self.store.find(parent_id) if parent_id is not None else None
        replies_unloaded = (
            parent is not None and not parent.children and parent.descendant_count > 0
        )
        self.error = None
        try:
            response = await self.submit_comment.execute(
                SubmitCommentRequest(
                    post_id=self.store.post_id,
                    author_id=self.viewer.id,
                    text=text,
                    parent_id=parent_id,
                )
            )
        except (ServiceError, ValidationError) as e:
            self._fail("submit", e, parent_id=parent_id)
            return None

        if parent_id is not None and response.placed:
            if replies_unloaded:
                try:
                    await self.store.load_replies(self.store.post_id, parent_id)
                except ServiceError as e:
                    self._fail("load_replies", e, comment_id=parent_id)
                else:
                    await self._resolve_authors()
            self.state.expand(parent_id)
        return response.comment

    def sign_out(self) -> None:
        """Drop every piece of per-viewer state."""
        self.store.reset()
        self.directory.clear()
        self.state.clear()
        self.error = None

    def rows(self) -> list[RenderRow]:
        return self.policy.layout(self.store.roots, self.state)

    def render(self, now: Optional[datetime] = None) -> list[str]:
        """Render the current thread as text lines."""
        lines = render_thread(
            self.rows(),
            total=self.store.total_visible_count(),
            directory=self.directory,
            state=self.state,
            viewer_is_moderator=self.viewer.is_moderator,
            now=now,
        )
        if self.error:
            lines.insert(1, f"Error: {self.error}")
        return lines
