"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from discuss.domain.model import Comment, User
from discuss.domain.value import CommentId, PostId, UserId, UserRole

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
POST_ID = PostId("post-1")


def make_comment(
    comment_id: str,
    parent_id: Optional[str] = None,
    *,
    post_id: str = POST_ID,
    author_id: str = "user-1",
    text: Optional[str] = None,
    upvote_count: int = 0,
    minutes: int = 0,
    is_deleted: bool = False,
    author: Optional[User] = None,
) -> Comment:
    """Build a server-shaped comment created ``minutes`` after BASE_TIME."""
    return Comment(
        id=CommentId(comment_id),
        post_id=PostId(post_id),
        parent_id=CommentId(parent_id) if parent_id else None,
        author_id=UserId(author_id),
        text=text if text is not None else f"Comment {comment_id}",
        upvote_count=upvote_count,
        is_deleted=is_deleted,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        author=author,
    )


def make_user(
    user_id: str,
    name: Optional[str] = None,
    role: UserRole = UserRole.USER,
    external_id: Optional[str] = None,
) -> User:
    return User(
        id=UserId(user_id),
        external_id=external_id,
        name=name or f"User {user_id}",
        role=role,
        created_at=BASE_TIME,
    )


def scenario_comments() -> list[Comment]:
    """Roots A and B; C replies to A, D to C, E to D (oldest first)."""
    return [
        make_comment("A", minutes=0),
        make_comment("B", minutes=1),
        make_comment("C", "A", minutes=2),
        make_comment("D", "C", minutes=3),
        make_comment("E", "D", minutes=4),
    ]
