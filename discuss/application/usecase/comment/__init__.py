"""Comment use cases."""

from .submit_comment import (
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)

__all__ = [
    "SubmitCommentRequest",
    "SubmitCommentResponse",
    "SubmitCommentUseCase",
]
