"""Progressive disclosure over a comment forest.

The visible window is the first ``limit`` nodes of a pre-order walk, so
raising the limit reveals replies of already visible comments before
unrelated later top-level comments.
"""

from collections.abc import Set
from dataclasses import dataclass

from forum.domain.model import CommentNode
from forum.domain.value import CommentId


@dataclass(frozen=True)
class VisibleWindow:
    """Result of selecting the visible window over a forest."""

    visible_ids: frozenset[CommentId]
    total_count: int

    @property
    def remaining(self) -> int:
        """Number of comments left outside the window."""
        return self.total_count - len(self.visible_ids)

    @property
    def has_more(self) -> bool:
        return self.remaining > 0


def get_visible_comment_ids(roots: list[CommentNode], limit: int) -> VisibleWindow:
    """Select the first ``limit`` nodes of the forest in pre-order.

    Every node is counted, so ``total_count`` is exact even once the window
    is full. A non-positive limit selects nothing.

    Args:
        roots: Forest roots, in display order
        limit: Maximum number of visible comments

    Returns:
        Visible comment ids and the total number of nodes
    """
    visible_ids: set[CommentId] = set()
    total_count = 0

    # Reversed pushes keep siblings popping in forest order
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        total_count += 1
        if len(visible_ids) < limit:
            visible_ids.add(node.id)
        stack.extend(reversed(node.replies))

    return VisibleWindow(visible_ids=frozenset(visible_ids), total_count=total_count)


def filter_comment_tree(
    roots: list[CommentNode], visible_ids: Set[CommentId]
) -> list[CommentNode]:
    """Keep only visible nodes, sharing every unchanged subtree.

    A node outside ``visible_ids`` is dropped together with its whole
    subtree. A kept node whose filtered replies are the very same node
    objects as before is returned as-is; otherwise a new node is built
    around the filtered replies. When nothing changes at the top level the
    input list itself is returned, so a fully visible forest comes back
    identical by reference.

    Sibling lists are finished bottom-up from an explicit stack, so deep
    threads don't hit the interpreter recursion limit.

    Args:
        roots: Forest roots
        visible_ids: Ids selected by ``get_visible_comment_ids``

    Returns:
        Filtered forest roots
    """
    # Frames of (original siblings, kept so far, index of the next sibling)
    stack: list[tuple[list[CommentNode], list[CommentNode], int]] = [(roots, [], 0)]
    while True:
        siblings, kept, index = stack[-1]
        while index < len(siblings) and siblings[index].id not in visible_ids:
            index += 1
        if index < len(siblings):
            stack[-1] = (siblings, kept, index + 1)
            stack.append((siblings[index].replies, [], 0))
            continue

        stack.pop()
        filtered = siblings if _same_nodes(kept, siblings) else kept
        if not stack:
            return filtered

        parent_siblings, parent_kept, parent_index = stack[-1]
        node = parent_siblings[parent_index - 1]
        parent_kept.append(
            node if filtered is node.replies else node.with_replies(filtered)
        )


def _same_nodes(filtered: list[CommentNode], original: list[CommentNode]) -> bool:
    return len(filtered) == len(original) and all(
        a is b for a, b in zip(filtered, original)
    )
