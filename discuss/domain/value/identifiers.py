"""Strongly typed identifiers for discussion entities.

Identifiers are opaque strings issued by the Comment Service. NewType keeps
comment, post and user ids from being mixed up at call sites.
"""

from typing import NewType

CommentId = NewType("CommentId", str)
PostId = NewType("PostId", str)
UserId = NewType("UserId", str)
ExternalUserId = NewType("ExternalUserId", str)
