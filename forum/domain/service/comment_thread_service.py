"""Comment thread domain service."""

from dataclasses import dataclass

import logfire

from forum.config import CommentSettings
from forum.domain.model import CommentNode
from forum.domain.value import CommentSortOrder, SubmissionId

from .base import Service
from .comment_pagination import (
    VisibleWindow,
    filter_comment_tree,
    get_visible_comment_ids,
)
from .comment_store import CommentStore, SubmissionCommentState
from .comment_tree import build_comment_tree


@dataclass(frozen=True)
class ThreadView:
    """One rendered page of a submission's comment thread.

    ``roots`` is the full sorted forest, ``visible_roots`` the part of it
    inside the visible window.
    """

    submission_id: SubmissionId
    sort: CommentSortOrder
    limit: int
    roots: list[CommentNode]
    visible_roots: list[CommentNode]
    window: VisibleWindow
    comment_count: int
    last_fetched_at: int

    @property
    def remaining(self) -> int:
        return self.window.remaining


class CommentThreadService(Service):
    """Domain service turning stored comments into windowed thread views."""

    def __init__(
        self, comment_store: CommentStore, comment_settings: CommentSettings
    ) -> None:
        """Initialize comment thread service.

        Args:
            comment_store: Per-submission comment cache
            comment_settings: Page size and default sort
        """
        self.comment_store = comment_store
        self.comment_settings = comment_settings
        # Last forest built per submission, reused while state and sort are unchanged
        self._forests: dict[
            SubmissionId,
            tuple[SubmissionCommentState, CommentSortOrder, list[CommentNode]],
        ] = {}

    def build_forest(
        self, submission_id: SubmissionId, sort: CommentSortOrder
    ) -> list[CommentNode]:
        """Get the sorted forest for a submission.

        The forest is rebuilt only when the stored state or the sort order
        changed since the last call. Otherwise the previous node objects are
        returned, so unchanged renders share every subtree.

        Args:
            submission_id: Submission ID
            sort: Sort order

        Returns:
            Forest roots (empty if the submission was never loaded)
        """
        return self._forest_for(
            submission_id, self.comment_store.get(submission_id), sort
        )

    def _forest_for(
        self,
        submission_id: SubmissionId,
        state: SubmissionCommentState | None,
        sort: CommentSortOrder,
    ) -> list[CommentNode]:
        if state is None:
            return []

        cached = self._forests.get(submission_id)
        if cached is not None and cached[0] is state and cached[1] == sort:
            return cached[2]

        with logfire.span(
            "comment_thread_service.build_forest",
            submission_id=submission_id,
            sort=sort.value,
            count=len(state.all_ids),
        ):
            roots = build_comment_tree(state.comments(), sort)
        self._forests[submission_id] = (state, sort, roots)
        return roots

    def render(
        self,
        submission_id: SubmissionId,
        sort: CommentSortOrder | None = None,
        limit: int | None = None,
    ) -> ThreadView:
        """Render the visible window of a submission's thread.

        Args:
            submission_id: Submission ID
            sort: Sort order (settings default if None)
            limit: Maximum visible comments (one page if None)

        Returns:
            Thread view with the full forest, the window and the filtered forest
        """
        sort = sort or self.comment_settings.default_sort
        limit = self.comment_settings.page_size if limit is None else limit

        with logfire.span(
            "comment_thread_service.render",
            submission_id=submission_id,
            sort=sort.value,
            limit=limit,
        ):
            state = self.comment_store.get(submission_id)
            roots = self._forest_for(submission_id, state, sort)
            window = get_visible_comment_ids(roots, limit)
            visible_roots = filter_comment_tree(roots, window.visible_ids)

            view = ThreadView(
                submission_id=submission_id,
                sort=sort,
                limit=limit,
                roots=roots,
                visible_roots=visible_roots,
                window=window,
                comment_count=state.comment_count if state else 0,
                last_fetched_at=state.last_fetched_at if state else 0,
            )
            logfire.info(
                "Thread rendered",
                submission_id=submission_id,
                visible=len(window.visible_ids),
                total=window.total_count,
            )
            return view

    def close_submission(self, submission_id: SubmissionId) -> None:
        """Release a submission the client no longer shows.

        Drops both the cached forest and the stored comment state.
        """
        self._forests.pop(submission_id, None)
        self.comment_store.drop_submission(submission_id)

    def load_more(self, limit: int) -> int:
        """Visible limit after one more "load more" step."""
        return limit + self.comment_settings.page_size

    @staticmethod
    def extend_limit_for_merge(limit: int, new_count: int) -> int:
        """Grow the visible limit so freshly merged comments stay in view."""
        return limit + new_count if new_count > 0 else limit
