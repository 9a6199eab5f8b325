"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List

from forum.domain.model.comment import Comment
from forum.domain.value import SubmissionId


class CommentRepository(ABC):
    """Repository for Comment records.

    Defines the contract the thread engine needs from persistence.
    Records come back already filtered to visible moderation state, with
    scores and the viewer's annotations pre-computed.
    """

    @abstractmethod
    async def find_by_submission(self, submission_id: SubmissionId) -> List[Comment]:
        """Find every visible comment of a submission.

        Args:
            submission_id: The submission ID

        Returns:
            List of comments, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_submission_since(
        self, submission_id: SubmissionId, since: int
    ) -> List[Comment]:
        """Find comments of a submission created at or after a watermark.

        The bound is inclusive; re-delivering an already merged comment is
        harmless because merging is idempotent.

        Args:
            submission_id: The submission ID
            since: Watermark in seconds since epoch

        Returns:
            List of comments with created_utc >= since
        """
        pass

    @abstractmethod
    async def count_by_submission(self, submission_id: SubmissionId) -> int:
        """Count visible comments of a submission.

        Args:
            submission_id: The submission ID

        Returns:
            Number of comments
        """
        pass
