"""Domain value objects for the forum comment engine."""

from forum.domain.value.identifiers import CommentId, SubmissionId, UserId
from forum.domain.value.types import CommentSortOrder

__all__ = [
    # Identifiers
    "CommentId",
    "SubmissionId",
    "UserId",
    # Types
    "CommentSortOrder",
]
