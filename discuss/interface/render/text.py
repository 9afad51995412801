"""Plain-text rendering of a laid-out thread."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Optional

from discuss.domain.service import UserDirectory

from .expansion import ExpansionState, RenderRow, RowKind

INDENT = "  "
THREAD_MARK = "| "

_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def plural(count: int, word: str, words: Optional[str] = None) -> str:
    """Format ``count word`` with a plural form when needed."""
    return f"{count} {word if count == 1 else (words or word + 's')}"


def time_ago(when: datetime, now: Optional[datetime] = None) -> str:
    """Describe how long ago ``when`` was, e.g. ``3 hours ago``.

    Naive datetimes are taken to be UTC.
    """
    now = now or datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - when).total_seconds())
    if seconds < 60:
        return "just now"
    for unit, size in _UNITS:
        if seconds >= size:
            return f"{plural(seconds // size, unit)} ago"
    return "just now"


def comment_count_header(total: int) -> str:
    return f"{total} {'Comment' if total == 1 else 'Comments'}"


def render_thread(
    rows: Sequence[RenderRow],
    *,
    total: int,
    directory: UserDirectory,
    state: ExpansionState,
    viewer_is_moderator: bool = False,
    now: Optional[datetime] = None,
) -> list[str]:
    """Render layout rows as text lines.

    Args:
        rows: Rows from ``ExpansionPolicy.layout``
        total: Total comment count for the header
        directory: User directory for author names
        state: Expansion flags (for the replies toggle label)
        viewer_is_moderator: Whether moderator badges are shown
        now: Reference time for relative timestamps

    Returns:
        Lines of text
    """
    lines = [comment_count_header(total)]
    if not rows:
        lines.append("No comments yet. Be the first to comment!")
        return lines

    for row in rows:
        prefix = THREAD_MARK * row.thread + INDENT * row.depth
        comment = row.comment

        if row.kind == RowKind.CONTINUE:
            replies = plural(row.reply_count, "reply", "replies")
            lines.append(f"{prefix}{INDENT}Continue thread ({replies})")
            continue
        if row.kind == RowKind.COLLAPSE:
            lines.append(f"{prefix}{INDENT}Collapse thread")
            continue

        if comment.is_deleted:
            lines.append(f"{prefix}[Comment deleted]")
        else:
            author = comment.author or directory.resolve(comment.author_id)
            badge = " [Moderator]" if viewer_is_moderator and author.is_moderator else ""
            vote_mark = "▲*" if comment.has_upvoted_locally else "▲"
            lines.append(
                f"{prefix}{author.name}{badge} · {time_ago(comment.created_at, now)}"
                f" · {vote_mark}{comment.upvote_count}"
            )
            lines.extend(f"{prefix}{INDENT}{line}" for line in comment.text.splitlines())

        if comment.descendant_count > 0:
            if state.is_expanded(comment.id):
                label = f"Hide {'reply' if comment.descendant_count == 1 else 'replies'}"
            else:
                label = plural(comment.descendant_count, "reply", "replies")
            lines.append(f"{prefix}{INDENT}[{label}]")
    return lines
