"""Mappers between Comment Service JSON payloads and domain models.

The service speaks snake_case JSON with its own field names
(``parent_comment_id``, ``user_id``, ``upvotes``, ``clerk_user_id``).
"""

from typing import Any, Mapping, Optional

from discuss.domain.model import Comment, UpvoteResult, User
from discuss.domain.value import (
    CommentId,
    ExternalUserId,
    PostId,
    UserId,
    UserRole,
)


def wire_to_user(data: Mapping[str, Any]) -> User:
    """Convert a service user payload to a User domain model.

    Args:
        data: User payload

    Returns:
        User domain model
    """
    external_id = data.get("clerk_user_id")
    fields: dict[str, Any] = {
        "id": UserId(str(data["id"])),
        "external_id": ExternalUserId(external_id) if external_id else None,
        "name": data["name"],
        "email": data.get("email") or "",
        "avatar_url": data.get("avatar_url"),
        "role": UserRole.from_wire(data.get("role")),
        "is_deleted": data.get("is_deleted", False),
    }
    if data.get("created_at"):
        fields["created_at"] = data["created_at"]
    return User(**fields)


def wire_to_comment(data: Mapping[str, Any]) -> Comment:
    """Convert a service comment payload to a Comment domain model.

    Args:
        data: Comment payload, optionally with the author embedded as ``user``

    Returns:
        Comment domain model with no children loaded
    """
    parent_id = data.get("parent_comment_id")
    author = data.get("user")
    return Comment(
        id=CommentId(str(data["id"])),
        post_id=PostId(str(data["post_id"])),
        parent_id=CommentId(str(parent_id)) if parent_id else None,
        author_id=UserId(str(data["user_id"])),
        text=data["text"],
        upvote_count=data.get("upvotes", 0),
        is_deleted=data.get("is_deleted", False),
        created_at=data["created_at"],
        author=wire_to_user(author) if author else None,
    )


def wire_to_upvote_result(data: Mapping[str, Any]) -> UpvoteResult:
    """Convert an upvote toggle answer to an UpvoteResult."""
    return UpvoteResult(
        comment_id=CommentId(str(data["comment_id"])),
        upvote_count=data["upvotes"],
    )


def user_to_wire(
    external_id: ExternalUserId,
    name: str,
    email: str,
    avatar_url: Optional[str],
) -> dict[str, Any]:
    """Build a create-user payload."""
    payload: dict[str, Any] = {
        "clerk_user_id": external_id,
        "name": name,
        "email": email,
    }
    if avatar_url:
        payload["avatar_url"] = avatar_url
    return payload
