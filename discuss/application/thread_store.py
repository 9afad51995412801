"""Thread store.

Canonical client-side state of one discussion: the visible root comments
(each optionally carrying loaded replies), the active sort order and the
comments upvoted during this session.

Remote operations change local state only after the Comment Service call
has succeeded, so a failed call leaves the tree exactly as it was and there
is nothing to roll back. The store does not serialize concurrent calls;
callers keep one call per comment in flight (see ``BusyFlags``).
"""

from collections.abc import Sequence
from typing import Optional

import logfire

from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.service import TreeMaterializer, UserDirectory
from discuss.domain.service.tree import find_comment, update_comment, walk
from discuss.domain.value import CommentId, PostId, SortOrder, UserId


class ThreadStore:
    """Client-side state and mutations for a threaded discussion."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        materializer: TreeMaterializer,
        user_directory: UserDirectory,
        sort_order: SortOrder = SortOrder.NEWEST,
    ) -> None:
        """Initialize thread store.

        Args:
            comment_repository: Comment Service client
            materializer: Tree materializer
            user_directory: Session user directory, fed with embedded authors
            sort_order: Initial sort order
        """
        self.comment_repository = comment_repository
        self.materializer = materializer
        self.user_directory = user_directory
        self._roots: tuple[Comment, ...] = ()
        self._post_id: Optional[PostId] = None
        self._sort_order = sort_order
        self._upvoted: set[CommentId] = set()

    @property
    def roots(self) -> tuple[Comment, ...]:
        return self._roots

    @property
    def post_id(self) -> Optional[PostId]:
        return self._post_id

    @property
    def sort_order(self) -> SortOrder:
        return self._sort_order

    def has_upvoted(self, comment_id: CommentId) -> bool:
        return comment_id in self._upvoted

    def find(self, comment_id: CommentId) -> Optional[Comment]:
        """Return a loaded comment from anywhere in the tree."""
        return find_comment(self._roots, comment_id)

    def total_visible_count(self) -> int:
        """Count root comments plus all their replies, loaded or not."""
        return sum(1 + root.descendant_count for root in self._roots)

    def reset(self) -> None:
        """Drop all thread state (view deactivated or viewer signed out)."""
        self._roots = ()
        self._post_id = None
        self._upvoted.clear()

    async def load_roots(
        self, post_id: PostId, sort_order: Optional[SortOrder] = None
    ) -> tuple[Comment, ...]:
        """Fetch a post's comments and replace the visible roots.

        Args:
            post_id: Post ID
            sort_order: Sort order (keeps the current one when None)

        Returns:
            The new visible roots

        Raises:
            ServiceError: If the fetch failed; the previous roots are kept
        """
        order = sort_order or self._sort_order
        with logfire.span(
            "thread_store.load_roots", post_id=post_id, sort_order=order.value
        ):
            try:
                flat = await self.comment_repository.fetch_comments(post_id, order)
            except Exception as e:
                logfire.error(
                    "Loading comments failed",
                    post_id=post_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            self.user_directory.remember_authors(flat)
            if post_id != self._post_id:
                self._upvoted.clear()
            roots = self._with_session_upvotes(self.materializer.build_roots(flat))
            self._roots = roots
            self._post_id = post_id
            self._sort_order = order
            logfire.info(
                "Comments loaded",
                post_id=post_id,
                root_count=len(roots),
                total=self.total_visible_count(),
            )
            return roots

    def add_root(self, comment: Comment) -> bool:
        """Show a freshly created root comment first, whatever the sort order.

        Returns:
            False when a root with the same ID is already shown
        """
        if any(root.id == comment.id for root in self._roots):
            logfire.warn("Root comment already shown", comment_id=comment.id)
            return False
        self._roots = (comment.as_unloaded(0),) + self._roots
        logfire.info("Root comment added", comment_id=comment.id)
        return True

    def add_reply(self, parent_id: CommentId, reply: Comment) -> bool:
        """Insert a freshly created reply first under its parent.

        Only the direct parent's ``descendant_count`` grows by one; totals
        of higher ancestors stay as loaded until the next reload.

        Args:
            parent_id: Parent comment ID (anywhere in the loaded tree)
            reply: The reply as created by the service

        Returns:
            Whether the reply was placed
        """
        placed = reply.as_unloaded(0)
        duplicate = False

        def prepend(parent: Comment) -> Comment:
            nonlocal duplicate
            if any(child.id == reply.id for child in parent.children):
                duplicate = True
                return parent
            return parent.model_copy(
                update={
                    "children": (placed,) + parent.children,
                    "descendant_count": parent.descendant_count + 1,
                }
            )

        roots, found = update_comment(self._roots, parent_id, prepend)
        if not found:
            logfire.warn(
                "Reply parent not loaded", parent_id=parent_id, comment_id=reply.id
            )
            return False
        if duplicate:
            logfire.warn("Reply already shown", comment_id=reply.id)
            return False
        self._roots = roots
        logfire.info("Reply added", parent_id=parent_id, comment_id=reply.id)
        return True

    async def toggle_upvote(self, comment_id: CommentId, user_id: UserId) -> int:
        """Toggle the user's upvote and apply the server's new total.

        Args:
            comment_id: Comment ID
            user_id: Voting user ID

        Returns:
            The new upvote count reported by the service
        """
        with logfire.span(
            "thread_store.toggle_upvote", comment_id=comment_id, user_id=user_id
        ):
            result = await self.comment_repository.toggle_upvote(comment_id, user_id)

            upvoted = comment_id not in self._upvoted
            if upvoted:
                self._upvoted.add(comment_id)
            else:
                self._upvoted.discard(comment_id)

            self._roots, found = update_comment(
                self._roots,
                comment_id,
                lambda c: c.model_copy(
                    update={
                        "upvote_count": result.upvote_count,
                        "has_upvoted_locally": upvoted,
                    }
                ),
            )
            if not found:
                logfire.warn("Upvoted comment not loaded", comment_id=comment_id)
            logfire.info(
                "Upvote toggled",
                comment_id=comment_id,
                upvoted=upvoted,
                upvote_count=result.upvote_count,
            )
            return result.upvote_count

    async def soft_delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a comment remotely and tombstone it in place.

        Args:
            comment_id: Comment ID
            user_id: Requesting user ID

        Returns:
            Whether the comment was loaded locally

        Raises:
            NotAuthorizedError: If the user may not delete the comment
        """
        with logfire.span(
            "thread_store.soft_delete", comment_id=comment_id, user_id=user_id
        ):
            await self.comment_repository.delete_comment(comment_id, user_id)
            self._roots, found = update_comment(
                self._roots,
                comment_id,
                lambda c: c.model_copy(update={"is_deleted": True}),
            )
            if found:
                logfire.info("Comment deleted", comment_id=comment_id)
            else:
                logfire.warn("Deleted comment not loaded", comment_id=comment_id)
            return found

    async def load_replies(
        self,
        post_id: PostId,
        parent_id: CommentId,
        sort_order: Optional[SortOrder] = None,
    ) -> tuple[Comment, ...]:
        """Load the direct replies of a comment into the tree.

        Also fetches the post's full collection so each reply gets its own
        recursive reply total.

        Args:
            post_id: Post ID
            parent_id: Comment whose replies to load
            sort_order: Sort order (current one when None)

        Returns:
            The attached replies (empty if the parent is not loaded)

        Raises:
            ServiceError: If a fetch failed; existing children are kept
        """
        order = sort_order or self._sort_order
        with logfire.span(
            "thread_store.load_replies",
            post_id=post_id,
            parent_id=parent_id,
            sort_order=order.value,
        ):
            try:
                replies = await self.comment_repository.fetch_replies(
                    post_id, parent_id, order
                )
                flat = await self.comment_repository.fetch_comments(post_id)
            except Exception as e:
                logfire.error(
                    "Loading replies failed",
                    post_id=post_id,
                    parent_id=parent_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            self.user_directory.remember_authors(replies)
            self.user_directory.remember_authors(flat)

            attached: tuple[Comment, ...] = ()

            def attach(node: Comment) -> Comment:
                nonlocal attached
                updated = self.materializer.attach_replies(node, replies, flat)
                updated = updated.model_copy(
                    update={"children": self._with_session_upvotes(updated.children)}
                )
                attached = updated.children
                return updated

            self._roots, found = update_comment(self._roots, parent_id, attach)
            if not found:
                logfire.warn("Reply parent not loaded", parent_id=parent_id)
            else:
                logfire.info(
                    "Replies loaded", parent_id=parent_id, reply_count=len(attached)
                )
            return attached

    def _with_session_upvotes(
        self, comments: Sequence[Comment]
    ) -> tuple[Comment, ...]:
        """Re-apply this session's upvote marks to freshly loaded comments."""
        return tuple(
            c.model_copy(update={"has_upvoted_locally": c.id in self._upvoted})
            if c.has_upvoted_locally != (c.id in self._upvoted)
            else c
            for c in comments
        )

    def loaded_author_ids(self) -> list[UserId]:
        """Author IDs of every loaded comment, in tree order."""
        return list(dict.fromkeys(comment.author_id for comment, _ in walk(self._roots)))
