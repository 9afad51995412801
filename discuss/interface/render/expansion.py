"""Depth-limited expansion policy.

Which replies are shown is render state, kept per comment ID outside the
thread store:

- ``expanded``: the comment's loaded replies are shown (default: hidden)
- ``continued``: the "continue thread" gate of a comment at the maximum
  depth has been opened (default: closed)

Replies of a comment at a depth below ``max_depth`` render one level deeper.
A comment at ``max_depth`` shows a single gate instead; opening the gate
renders its replies as a fresh thread starting again at depth 0. The layout
never touches the comments themselves.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from discuss.domain.model import Comment
from discuss.domain.value import CommentId

DEFAULT_MAX_DEPTH = 3


class RowKind(str, Enum):
    """Kind of a rendered row."""

    COMMENT = "comment"
    CONTINUE = "continue"  # Closed gate: "Continue thread (N replies)"
    COLLAPSE = "collapse"  # Open gate: "Collapse thread"


@dataclass(frozen=True)
class RenderRow:
    """One row of the rendered thread.

    For gate rows ``comment`` is the comment at the maximum depth whose
    replies are behind the gate.
    """

    kind: RowKind
    comment: Comment
    depth: int
    thread: int = 0  # Continuation gates opened above this row

    @property
    def reply_count(self) -> int:
        """Replies behind a gate (loaded replies of the gating comment)."""
        return len(self.comment.children)


class ExpansionState:
    """Per-comment expansion flags, keyed by comment ID."""

    def __init__(self) -> None:
        self._expanded: set[CommentId] = set()
        self._continued: set[CommentId] = set()

    def is_expanded(self, comment_id: CommentId) -> bool:
        return comment_id in self._expanded

    def expand(self, comment_id: CommentId) -> None:
        self._expanded.add(comment_id)

    def toggle(self, comment_id: CommentId) -> bool:
        """Flip the expanded flag and return the new value."""
        if comment_id in self._expanded:
            self._expanded.discard(comment_id)
            return False
        self._expanded.add(comment_id)
        return True

    def is_continued(self, comment_id: CommentId) -> bool:
        return comment_id in self._continued

    def continue_thread(self, comment_id: CommentId) -> None:
        self._continued.add(comment_id)

    def collapse_thread(self, comment_id: CommentId) -> None:
        self._continued.discard(comment_id)

    def clear(self) -> None:
        self._expanded.clear()
        self._continued.clear()


class ExpansionPolicy:
    """Lays out a comment tree under a maximum nesting depth."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        self.max_depth = max_depth

    def is_gate_depth(self, depth: int) -> bool:
        return depth >= self.max_depth

    def can_reply(self, depth: int) -> bool:
        """Replying is offered only below the gate depth."""
        return depth < self.max_depth

    def layout(
        self, roots: Sequence[Comment], state: ExpansionState
    ) -> list[RenderRow]:
        """Flatten the visible part of the tree into render rows.

        Uses an explicit stack, so arbitrarily deep data is laid out without
        recursion.

        Args:
            roots: Root comments from the thread store
            state: Expansion flags

        Returns:
            Rows in display order
        """
        rows: list[RenderRow] = []
        stack: list[tuple[Comment, int, int]] = [
            (root, 0, 0) for root in reversed(roots)
        ]
        while stack:
            node, depth, thread = stack.pop()
            rows.append(RenderRow(RowKind.COMMENT, node, depth, thread))

            if not node.children or not state.is_expanded(node.id):
                continue

            if not self.is_gate_depth(depth):
                stack.extend(
                    (child, depth + 1, thread) for child in reversed(node.children)
                )
            elif state.is_continued(node.id):
                rows.append(RenderRow(RowKind.COLLAPSE, node, depth, thread))
                stack.extend(
                    (child, 0, thread + 1) for child in reversed(node.children)
                )
            else:
                rows.append(RenderRow(RowKind.CONTINUE, node, depth, thread))
        return rows
