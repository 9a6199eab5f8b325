"""Strongly typed identifiers for forum entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType

# Integer ids are assigned by the persistence layer
CommentId = NewType("CommentId", int)
SubmissionId = NewType("SubmissionId", int)
UserId = NewType("UserId", int)
