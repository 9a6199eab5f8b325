"""Comment ranking policy.

Each sort order is a single key plus a direction. Sorting relies on
``list.sort`` being stable (also with ``reverse=True``), so siblings with
equal keys keep the order they were built in.
"""

from collections.abc import Callable

from forum.domain.model import CommentNode
from forum.domain.value import CommentSortOrder

SortKey = Callable[[CommentNode], float]


def sort_key(sort: CommentSortOrder) -> tuple[SortKey, bool]:
    """Return the key function and ``reverse`` flag for a sort order.

    Args:
        sort: Sort order

    Returns:
        Tuple of (key function, reverse)
    """
    match sort:
        case CommentSortOrder.NEW:
            return (lambda node: node.comment.created_utc), True
        case CommentSortOrder.OLD:
            return (lambda node: node.comment.created_utc), False
        case CommentSortOrder.CONTROVERSIAL:
            return (lambda node: node.comment.controversy), True
        case CommentSortOrder.TOP:
            return (lambda node: node.comment.score), True
    raise AssertionError(f"Unhandled sort order: {sort!r}")


def compare_comments(a: CommentNode, b: CommentNode, sort: CommentSortOrder) -> int:
    """Compare two sibling nodes under a sort order.

    Returns:
        Negative if ``a`` ranks before ``b``, positive if after, 0 on a tie
    """
    key, reverse = sort_key(sort)
    left, right = key(a), key(b)
    result = (left > right) - (left < right)
    return -result if reverse else result


def sort_comment_nodes(nodes: list[CommentNode], sort: CommentSortOrder) -> None:
    """Sort one sibling list in place."""
    key, reverse = sort_key(sort)
    nodes.sort(key=key, reverse=reverse)


def sort_comment_forest(roots: list[CommentNode], sort: CommentSortOrder) -> None:
    """Sort the roots and every replies list of a forest in place.

    Walks the forest with an explicit stack so arbitrarily deep threads
    don't run into the interpreter recursion limit.
    """
    key, reverse = sort_key(sort)
    pending = [roots]
    while pending:
        siblings = pending.pop()
        siblings.sort(key=key, reverse=reverse)
        pending.extend(node.replies for node in siblings if node.replies)
