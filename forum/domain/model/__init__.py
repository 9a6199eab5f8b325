"""Domain model entities for the forum comment engine."""

from forum.domain.model.comment import DELETED_PLACEHOLDER, Comment, controversy
from forum.domain.model.comment_node import CommentNode

__all__ = [
    "Comment",
    "CommentNode",
    "DELETED_PLACEHOLDER",
    "controversy",
]
