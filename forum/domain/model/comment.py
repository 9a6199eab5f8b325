"""Comment record.

A comment is the flat, per-fetch representation of one reply on a
submission. Records are replaced by id when a newer copy arrives (edits,
score changes); they are never mutated in place.

Threading is derived from parent pointers only:
- parent_comment_id: Direct parent comment (None for top-level)
- level: Depth hint recorded at creation time, informational only
"""

from typing import Any, Optional

from pydantic import Field, model_validator

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, SubmissionId, UserId

DELETED_PLACEHOLDER = "[deleted]"


def controversy(upvotes: int, downvotes: int) -> float:
    """Controversy metric favouring even splits with high engagement.

    Returns 0 when nobody voted, otherwise
    ``(up + down) * (1 - |up - down| / (up + down))``.
    """
    total = upvotes + downvotes
    if total == 0:
        return 0.0
    return total * (1 - abs(upvotes - downvotes) / total)


class Comment(DomainModel):
    """Comment record.

    Scores and vote totals arrive pre-computed from the persistence layer.
    When ``score`` is omitted it defaults to ``upvotes - downvotes``.
    """

    id: CommentId
    parent_submission_id: SubmissionId
    parent_comment_id: Optional[CommentId] = None
    created_utc: int
    edited_utc: int = 0
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    score: int = 0
    level: int = Field(default=0, ge=0)
    is_deleted: bool = False

    # Render-ready content, opaque to the thread engine
    author_id: Optional[UserId] = None
    author_name: str = ""
    body: Optional[str] = None
    body_html: str = ""
    descendant_count: int = Field(default=0, ge=0)
    is_pinned: Optional[str] = None
    distinguish_level: int = 0

    @model_validator(mode="before")
    @classmethod
    def default_score_from_votes(cls, data: Any) -> Any:
        """Fill in score from the vote totals when it is not supplied."""
        if isinstance(data, dict) and data.get("score") is None:
            data = {
                **data,
                "score": data.get("upvotes", 0) - data.get("downvotes", 0),
            }
        return data

    @property
    def controversy(self) -> float:
        """Controversy metric for this comment's votes."""
        return controversy(self.upvotes, self.downvotes)

    @property
    def display_body(self) -> str:
        """Body to render, replaced by a placeholder once deleted."""
        if self.is_deleted:
            return DELETED_PLACEHOLDER
        return self.body_html or (self.body or "")

    @property
    def display_author(self) -> str:
        """Author name to render, hidden once deleted."""
        return DELETED_PLACEHOLDER if self.is_deleted else self.author_name
