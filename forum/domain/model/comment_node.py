"""Comment tree node."""

from dataclasses import dataclass, field

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId


@dataclass(frozen=True, eq=False)
class CommentNode:
    """Node in a comment forest.

    Wraps a comment record together with its ordered replies. Each node owns
    its replies list and appears under at most one parent. Equality is
    identity: two nodes are "the same" only if they are the same object,
    which lets callers detect unchanged subtrees with ``is``.
    """

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        return self.comment.id

    def with_replies(self, replies: list["CommentNode"]) -> "CommentNode":
        """Return a new node for the same comment carrying different replies."""
        return CommentNode(comment=self.comment, replies=replies)
