"""In-memory repository implementations."""

from .comment import InMemoryCommentRepository

__all__ = [
    "InMemoryCommentRepository",
]
