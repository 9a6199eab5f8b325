"""Per-submission comment cache with incremental merge.

The store keeps the flat comment records seen for each submission. A page
load replaces a submission's state wholesale; later "since watermark"
fetches are merged in, suppressing duplicates and counting new comments.

Every mutation builds a fresh ``SubmissionCommentState`` and swaps it in
under a single lock, so readers only ever observe complete states. Listeners
are notified under the same lock, in commit order.
"""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

import logfire

from forum.domain.error import SubmissionNotLoadedError
from forum.domain.model import Comment
from forum.domain.value import CommentId, SubmissionId

from .base import Service

StoreListener = Callable[[SubmissionId, "SubmissionCommentState"], None]


@dataclass(frozen=True)
class SubmissionCommentState:
    """Snapshot of the comments known for one submission.

    Attributes:
        by_id: Comment records keyed by id
        all_ids: Ids in first-observed order (not display order)
        last_fetched_at: Watermark for the next "since" fetch
        comment_count: Number of distinct comments known
    """

    by_id: dict[CommentId, Comment] = field(default_factory=dict)
    all_ids: list[CommentId] = field(default_factory=list)
    last_fetched_at: int = 0
    comment_count: int = 0

    def comments(self) -> list[Comment]:
        """Flat records in first-observed order."""
        return [self.by_id[comment_id] for comment_id in self.all_ids]


def normalize_comments(
    comments: Iterable[Comment],
) -> tuple[dict[CommentId, Comment], list[CommentId]]:
    """Split records into an id index and an ordered id list.

    A repeated id keeps its first position and its last record.
    """
    by_id: dict[CommentId, Comment] = {}
    all_ids: list[CommentId] = []
    for comment in comments:
        if comment.id not in by_id:
            all_ids.append(comment.id)
        by_id[comment.id] = comment
    return by_id, all_ids


class CommentStore(Service):
    """Owned cache of comment state for every submission a client has open."""

    def __init__(self) -> None:
        self._submissions: dict[SubmissionId, SubmissionCommentState] = {}
        self._listeners: list[StoreListener] = []
        self._lock = threading.RLock()

    def __contains__(self, submission_id: object) -> bool:
        return submission_id in self._submissions

    def get(self, submission_id: SubmissionId) -> SubmissionCommentState | None:
        """Get the current state of a submission, None if never loaded."""
        return self._submissions.get(submission_id)

    def require(self, submission_id: SubmissionId) -> SubmissionCommentState:
        """Get the current state of a submission.

        Raises:
            SubmissionNotLoadedError: If the submission was never loaded
        """
        state = self._submissions.get(submission_id)
        if state is None:
            raise SubmissionNotLoadedError(submission_id)
        return state

    def comments(self, submission_id: SubmissionId) -> list[Comment]:
        """Flat records of a submission in first-observed order."""
        state = self._submissions.get(submission_id)
        return state.comments() if state else []

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a callback run after every committed mutation.

        Callbacks run while the store lock is held, so they see states in
        commit order. The lock is re-entrant: a callback may read or mutate
        the store from the same thread.

        Args:
            listener: Called with (submission_id, new_state)

        Returns:
            Function that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def init_submission(
        self,
        submission_id: SubmissionId,
        comments: Iterable[Comment],
        comment_count: int,
        last_fetched_at: int,
    ) -> SubmissionCommentState:
        """Replace the stored state of a submission wholesale.

        Used on a fresh page load. Calling it twice with the same arguments
        leaves the same state behind.

        Args:
            submission_id: Submission ID
            comments: Every comment fetched for the submission
            comment_count: Comment total reported alongside the fetch
            last_fetched_at: Watermark of the fetch

        Returns:
            The new state
        """
        by_id, all_ids = normalize_comments(comments)
        state = SubmissionCommentState(
            by_id=by_id,
            all_ids=all_ids,
            last_fetched_at=last_fetched_at,
            comment_count=comment_count,
        )
        with self._lock:
            self._submissions[submission_id] = state
            logfire.info(
                "Submission comments initialised",
                submission_id=submission_id,
                count=len(all_ids),
                comment_count=comment_count,
                last_fetched_at=last_fetched_at,
            )
            self._notify(submission_id, state)
        return state

    def merge_comments(
        self,
        submission_id: SubmissionId,
        comments: Iterable[Comment],
        last_fetched_at: int,
    ) -> int:
        """Merge newly observed comments into a submission's state.

        Unknown ids are appended and counted. Every incoming record replaces
        the stored one, so edits and score changes to known comments still
        take effect. The watermark only moves forward.

        Args:
            submission_id: Submission ID
            comments: Newly fetched comments
            last_fetched_at: Watermark of the fetch

        Returns:
            Number of comments that were not known before
        """
        with self._lock:
            current = self._submissions.get(submission_id) or SubmissionCommentState()
            by_id = dict(current.by_id)
            all_ids = list(current.all_ids)

            new_count = 0
            for comment in comments:
                if comment.id not in by_id:
                    new_count += 1
                    all_ids.append(comment.id)
                by_id[comment.id] = comment

            state = SubmissionCommentState(
                by_id=by_id,
                all_ids=all_ids,
                last_fetched_at=max(current.last_fetched_at, last_fetched_at),
                comment_count=current.comment_count + new_count,
            )
            self._submissions[submission_id] = state
            logfire.info(
                "Comments merged",
                submission_id=submission_id,
                new_count=new_count,
                comment_count=state.comment_count,
                last_fetched_at=state.last_fetched_at,
            )
            self._notify(submission_id, state)
        return new_count

    def drop_submission(self, submission_id: SubmissionId) -> bool:
        """Forget everything stored for a submission.

        Listeners are not notified; a dropped submission reads as never loaded.

        Returns:
            True if the submission was loaded
        """
        with self._lock:
            dropped = self._submissions.pop(submission_id, None) is not None
        if dropped:
            logfire.info("Submission comments dropped", submission_id=submission_id)
        return dropped

    def _notify(
        self, submission_id: SubmissionId, state: SubmissionCommentState
    ) -> None:
        # Runs under the lock, so listeners see states in commit order
        for listener in list(self._listeners):
            listener(submission_id, state)
