"""Tree materializer.

Turns the flat comment collections delivered by the Comment Service into
root comments and lazily attached reply levels, annotated with recursive
reply totals.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence

import logfire

from discuss.domain.model import Comment
from discuss.domain.value import CommentId, SortOrder

from .base import Service


def unique_comments(comments: Iterable[Comment]) -> list[Comment]:
    """Drop repeated IDs, keeping the first occurrence and the input order."""
    seen: set[CommentId] = set()
    unique = []
    for comment in comments:
        if comment.id in seen:
            continue
        seen.add(comment.id)
        unique.append(comment)
    return unique


def order_comments(
    comments: Iterable[Comment], sort_order: SortOrder
) -> list[Comment]:
    """Sort comments the way the Comment Service does.

    Args:
        comments: Comments to sort
        sort_order: Requested ordering

    Returns:
        New sorted list (newest first breaks upvote ties)
    """
    if sort_order == SortOrder.OLDEST:
        return sorted(comments, key=lambda c: c.created_at)
    if sort_order == SortOrder.MOST_UPVOTED:
        return sorted(
            comments, key=lambda c: (c.upvote_count, c.created_at), reverse=True
        )
    return sorted(comments, key=lambda c: c.created_at, reverse=True)


class ReplyIndex:
    """Parent → children index over one flat comment collection.

    The index is built in a single pass; subtree sizes are then summed
    bottom-up and memoized, so every comment is visited once no matter how
    many counts are requested.
    """

    def __init__(self, comments: Iterable[Comment]) -> None:
        self._children: dict[CommentId, list[CommentId]] = defaultdict(list)
        self._counts: dict[CommentId, int] = {}
        for comment in unique_comments(comments):
            if comment.parent_id is not None:
                self._children[comment.parent_id].append(comment.id)

    def direct_reply_ids(self, comment_id: CommentId) -> list[CommentId]:
        return list(self._children.get(comment_id, ()))

    def descendant_count(self, comment_id: CommentId) -> int:
        """Count all replies below a comment, at any depth.

        Uses an explicit post-order stack. Edges that would close a cycle are
        ignored; the service guarantees an acyclic parent graph.
        """
        if comment_id in self._counts:
            return self._counts[comment_id]

        on_path: set[CommentId] = set()
        stack: list[tuple[CommentId, bool]] = [(comment_id, False)]
        while stack:
            node, children_done = stack.pop()
            if children_done:
                on_path.discard(node)
                self._counts[node] = sum(
                    1 + self._counts.get(child, 0)
                    for child in self._children.get(node, ())
                    if child in self._counts
                )
                continue
            if node in self._counts or node in on_path:
                continue
            on_path.add(node)
            stack.append((node, True))
            for child in self._children.get(node, ()):
                if child not in self._counts and child not in on_path:
                    stack.append((child, False))
        return self._counts[comment_id]


class TreeMaterializer(Service):
    """Domain service building comment trees from flat collections."""

    span_prefix = "tree_materializer"

    def build_roots(self, flat_comments: Sequence[Comment]) -> tuple[Comment, ...]:
        """Extract root comments annotated with their total reply counts.

        Args:
            flat_comments: Every comment of a post, at all depths

        Returns:
            Root comments in input order, each with ``descendant_count`` set
            and no children loaded
        """
        with self.span("build_roots", comment_count=len(flat_comments)):
            comments = unique_comments(flat_comments)
            index = ReplyIndex(comments)
            roots = tuple(
                comment.as_unloaded(index.descendant_count(comment.id))
                for comment in comments
                if comment.parent_id is None
            )
            logfire.info(
                "Roots built",
                comment_count=len(comments),
                root_count=len(roots),
            )
            return roots

    def attach_replies(
        self,
        node: Comment,
        direct_replies: Sequence[Comment],
        flat_comments: Sequence[Comment],
    ) -> Comment:
        """Attach one level of replies below a comment.

        The fetched replies are authoritative: they replace whatever was
        attached before, and a reply that appears twice is attached once.
        The node's own ``descendant_count`` is left as it was.

        Args:
            node: Comment whose replies were fetched
            direct_replies: Direct replies as returned by the service
            flat_comments: Every comment of the post, used for nested counts

        Returns:
            Copy of ``node`` with ``children`` set
        """
        with self.span(
            "attach_replies",
            comment_id=node.id,
            reply_count=len(direct_replies),
        ):
            index = ReplyIndex(flat_comments)
            children = []
            for reply in unique_comments(direct_replies):
                if reply.parent_id != node.id:
                    logfire.warn(
                        "Skipping reply with foreign parent",
                        comment_id=reply.id,
                        parent_id=reply.parent_id,
                        expected_parent_id=node.id,
                    )
                    continue
                children.append(reply.as_unloaded(index.descendant_count(reply.id)))
            return node.model_copy(update={"children": tuple(children)})
