"""In-memory comment repository."""

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, SubmissionId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for tests and local runs."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_submission(self, submission_id: SubmissionId) -> list[Comment]:
        """Find every comment of a submission."""
        return [
            c for c in self._comments.values() if c.parent_submission_id == submission_id
        ]

    async def find_by_submission_since(
        self, submission_id: SubmissionId, since: int
    ) -> list[Comment]:
        """Find comments of a submission created at or after ``since``."""
        comments = await self.find_by_submission(submission_id)
        return [c for c in comments if c.created_utc >= since]

    async def count_by_submission(self, submission_id: SubmissionId) -> int:
        """Count comments of a submission."""
        return sum(
            1
            for c in self._comments.values()
            if c.parent_submission_id == submission_id
        )

    async def save(self, comment: Comment) -> Comment:
        """Save or replace a comment."""
        self._comments[comment.id] = comment
        return comment
