"""Load thread use case."""

import time

import logfire
from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.service import CommentStore
from forum.domain.value import SubmissionId


def fetch_watermark(comments: list[Comment]) -> int:
    """Watermark for a fetch: newest created_utc seen, or now if nothing came back."""
    return max((c.created_utc for c in comments), default=0) or int(time.time())


class LoadThreadRequest(BaseModel):
    """Load thread request."""

    submission_id: int


class LoadThreadResponse(BaseModel):
    """Load thread response."""

    submission_id: int
    comment_count: int
    last_fetched_at: int


class LoadThreadUseCase(BaseUseCase[LoadThreadRequest, LoadThreadResponse]):
    """Use case for (re)loading every comment of a submission into the store.

    Runs on a fresh page load and replaces whatever the store held for the
    submission.
    """

    def __init__(
        self, comment_repository: CommentRepository, comment_store: CommentStore
    ) -> None:
        """Initialize load thread use case.

        Args:
            comment_repository: Source of comment records
            comment_store: Per-submission comment cache
        """
        self.comment_repository = comment_repository
        self.comment_store = comment_store

    async def execute(self, request: LoadThreadRequest) -> LoadThreadResponse:
        """Execute load thread flow.

        Args:
            request: Submission to load

        Returns:
            Comment count and watermark stored for the submission
        """
        submission_id = SubmissionId(request.submission_id)

        with logfire.span("load_thread", submission_id=submission_id):
            comments = await self.comment_repository.find_by_submission(submission_id)
            comment_count = await self.comment_repository.count_by_submission(
                submission_id
            )
            state = self.comment_store.init_submission(
                submission_id,
                comments,
                comment_count=comment_count,
                last_fetched_at=fetch_watermark(comments),
            )

        return LoadThreadResponse(
            submission_id=request.submission_id,
            comment_count=state.comment_count,
            last_fetched_at=state.last_fetched_at,
        )
