"""Add reply use case."""

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase
from forum.application.usecase.thread.sync_thread import (
    SyncThreadRequest,
    SyncThreadResponse,
    merge_response,
)
from forum.domain.model import Comment
from forum.domain.service import CommentStore, CommentThreadService


class AddReplyRequest(BaseModel):
    """Add reply request."""

    comment: Comment  # Comment just created by the viewer
    limit: int = Field(ge=0)


class AddReplyUseCase(BaseUseCase[AddReplyRequest, SyncThreadResponse]):
    """Use case for merging the viewer's own new comment into the thread."""

    def __init__(
        self,
        comment_store: CommentStore,
        comment_thread_service: CommentThreadService,
    ) -> None:
        """Initialize add reply use case.

        Args:
            comment_store: Per-submission comment cache
            comment_thread_service: Thread service for limit bookkeeping
        """
        self.comment_store = comment_store
        self.comment_thread_service = comment_thread_service

    async def execute(self, request: AddReplyRequest) -> SyncThreadResponse:
        """Execute add reply flow.

        The comment's own creation time serves as the watermark.

        Args:
            request: New comment and currently visible limit

        Returns:
            Number of new comments (0 or 1) and the adjusted limit
        """
        comment = request.comment
        new_count = self.comment_store.merge_comments(
            comment.parent_submission_id, [comment], comment.created_utc
        )
        logfire.info(
            "Reply added",
            submission_id=comment.parent_submission_id,
            comment_id=comment.id,
            new_count=new_count,
        )

        sync_request = SyncThreadRequest(
            submission_id=comment.parent_submission_id, limit=request.limit
        )
        return merge_response(
            self.comment_store, self.comment_thread_service, sync_request, new_count
        )

