"""Comment forest construction.

Turns the flat comment records of one submission into a forest of reply
nodes. Structure comes from ``parent_comment_id`` only:

- a comment without a parent is a root
- a comment whose parent is present becomes one of that parent's replies
- a comment whose parent is absent (deleted, hidden, not fetched yet) is
  promoted to a root

Duplicate ids are a caller contract violation; the last record for an id
wins and keeps the position where that id was first seen.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import logfire

from forum.domain.model import Comment, CommentNode
from forum.domain.value import CommentId, CommentSortOrder

from .comment_sort import sort_comment_forest


@dataclass
class CommentForest:
    """Built forest plus an id index over every node in it."""

    roots: list[CommentNode]
    by_id: dict[CommentId, CommentNode]


def _index_nodes(comments: Iterable[Comment]) -> dict[CommentId, CommentNode]:
    by_id: dict[CommentId, CommentNode] = {}
    for comment in comments:
        by_id[comment.id] = CommentNode(comment=comment)
    return by_id


def _resolve_parents(
    by_id: dict[CommentId, CommentNode],
) -> dict[CommentId, CommentId | None]:
    """Map each comment to its parent within the set, None for roots.

    Parent chains that loop back on themselves would leave every member of
    the loop unreachable from any root. Each such cycle is broken by
    promoting the member that appears first in the input.
    """
    parent_of: dict[CommentId, CommentId | None] = {}
    for comment_id, node in by_id.items():
        parent_id = node.comment.parent_comment_id
        parent_of[comment_id] = parent_id if parent_id in by_id else None

    position = {comment_id: index for index, comment_id in enumerate(by_id)}
    settled: set[CommentId] = set()

    for start in by_id:
        path: list[CommentId] = []
        on_path: set[CommentId] = set()
        current: CommentId | None = start
        while current is not None and current not in settled:
            if current in on_path:
                cycle = path[path.index(current) :]
                promoted = min(cycle, key=position.__getitem__)
                parent_of[promoted] = None
                logfire.warn(
                    "Broke cyclic comment parent chain",
                    promoted_comment_id=promoted,
                    cycle=cycle,
                )
                break
            path.append(current)
            on_path.add(current)
            current = parent_of[current]
        settled.update(path)

    return parent_of


def build_comment_forest(
    comments: Iterable[Comment],
    sort: CommentSortOrder = CommentSortOrder.TOP,
) -> CommentForest:
    """Build a sorted reply forest from flat comment records.

    Algorithm:
    1. Wrap every record in a node with no replies, indexed by id
    2. Attach each node to its parent, or make it a root when it has no
       parent in the set (orphan promotion)
    3. Sort the roots and every replies list with the sort policy

    Args:
        comments: Flat comment records of one submission, in any order
        sort: Ranking policy applied to every sibling list

    Returns:
        Forest roots and an index of every node by comment id
    """
    by_id = _index_nodes(comments)
    parent_of = _resolve_parents(by_id)

    roots: list[CommentNode] = []
    for comment_id, node in by_id.items():
        parent_id = parent_of[comment_id]
        if parent_id is None:
            roots.append(node)
        else:
            by_id[parent_id].replies.append(node)

    sort_comment_forest(roots, sort)
    return CommentForest(roots=roots, by_id=by_id)


def build_comment_tree(
    comments: Iterable[Comment],
    sort: CommentSortOrder = CommentSortOrder.TOP,
) -> list[CommentNode]:
    """Build a sorted reply forest and return only its roots."""
    return build_comment_forest(comments, sort).roots


def build_comment_subtree(
    root_id: CommentId,
    comments: Iterable[Comment],
    sort: CommentSortOrder = CommentSortOrder.TOP,
) -> CommentNode | None:
    """Build the thread below a single comment, as shown on its permalink.

    Only the target and its descendants are kept. Unlike the full forest,
    comments whose parent is missing are dropped rather than promoted,
    since they don't belong to the permalinked thread.

    Args:
        root_id: Comment to use as the root
        comments: Flat records containing the target and its descendants
        sort: Ranking policy applied to every replies list

    Returns:
        The target node with its sorted replies, or None if the target is absent
    """
    by_id = _index_nodes(comments)
    target = by_id.get(root_id)
    if target is None:
        return None

    for comment_id, node in by_id.items():
        if comment_id == root_id:
            continue
        parent = by_id.get(node.comment.parent_comment_id)
        if parent is not None:
            parent.replies.append(node)

    sort_comment_forest([target], sort)
    return target
