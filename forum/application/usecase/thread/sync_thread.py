"""Sync thread use case."""

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase
from forum.application.usecase.thread.load_thread import fetch_watermark
from forum.domain.repository import CommentRepository
from forum.domain.service import CommentStore, CommentThreadService
from forum.domain.value import SubmissionId


class SyncThreadRequest(BaseModel):
    """Sync thread request."""

    submission_id: int
    limit: int = Field(ge=0)  # Visible limit currently shown


class SyncThreadResponse(BaseModel):
    """Sync thread response."""

    submission_id: int
    new_count: int
    limit: int  # Visible limit extended by new_count
    comment_count: int
    last_fetched_at: int


class SyncThreadUseCase(BaseUseCase[SyncThreadRequest, SyncThreadResponse]):
    """Use case for pulling comments posted since the stored watermark.

    Triggered when the viewer switches sort order, so the re-sorted thread
    includes whatever arrived in the meantime.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_store: CommentStore,
        comment_thread_service: CommentThreadService,
    ) -> None:
        """Initialize sync thread use case.

        Args:
            comment_repository: Source of comment records
            comment_store: Per-submission comment cache
            comment_thread_service: Thread service for limit bookkeeping
        """
        self.comment_repository = comment_repository
        self.comment_store = comment_store
        self.comment_thread_service = comment_thread_service

    async def execute(self, request: SyncThreadRequest) -> SyncThreadResponse:
        """Execute sync thread flow.

        Args:
            request: Submission and currently visible limit

        Returns:
            Number of new comments and the adjusted limit

        Raises:
            SubmissionNotLoadedError: If the submission was never loaded
        """
        submission_id = SubmissionId(request.submission_id)
        since = self.comment_store.require(submission_id).last_fetched_at

        with logfire.span("sync_thread", submission_id=submission_id, since=since):
            comments = await self.comment_repository.find_by_submission_since(
                submission_id, since
            )
            new_count = self.comment_store.merge_comments(
                submission_id, comments, fetch_watermark(comments)
            )

        return merge_response(
            self.comment_store, self.comment_thread_service, request, new_count
        )


def merge_response(
    comment_store: CommentStore,
    comment_thread_service: CommentThreadService,
    request: SyncThreadRequest,
    new_count: int,
) -> SyncThreadResponse:
    """Build the response after a merge, growing the limit by the new comments."""
    state = comment_store.require(SubmissionId(request.submission_id))
    return SyncThreadResponse(
        submission_id=request.submission_id,
        new_count=new_count,
        limit=comment_thread_service.extend_limit_for_merge(request.limit, new_count),
        comment_count=state.comment_count,
        last_fetched_at=state.last_fetched_at,
    )
