"""Domain services."""

from .base import Service
from .comment_pagination import (
    VisibleWindow,
    filter_comment_tree,
    get_visible_comment_ids,
)
from .comment_sort import (
    compare_comments,
    sort_comment_forest,
    sort_comment_nodes,
    sort_key,
)
from .comment_store import CommentStore, SubmissionCommentState
from .comment_thread_service import CommentThreadService, ThreadView
from .comment_tree import (
    CommentForest,
    build_comment_forest,
    build_comment_subtree,
    build_comment_tree,
)

__all__ = [
    "CommentForest",
    "CommentStore",
    "CommentThreadService",
    "Service",
    "SubmissionCommentState",
    "ThreadView",
    "VisibleWindow",
    "build_comment_forest",
    "build_comment_subtree",
    "build_comment_tree",
    "compare_comments",
    "filter_comment_tree",
    "get_visible_comment_ids",
    "sort_comment_forest",
    "sort_comment_nodes",
    "sort_key",
]
