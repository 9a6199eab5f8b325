"""Unit tests for comment forest construction."""

from forum.domain.service import (
    build_comment_forest,
    build_comment_subtree,
    build_comment_tree,
)
from forum.domain.value import CommentSortOrder
from tests.factories import ids, make_comment


def walk(nodes):
    """Yield every node of a forest in pre-order."""
    for node in nodes:
        yield node
        yield from walk(node.replies)


class TestBuildCommentForest:
    """Tests for build_comment_forest."""

    def test_empty_input_gives_empty_forest(self):
        forest = build_comment_forest([], CommentSortOrder.TOP)

        assert forest.roots == []
        assert forest.by_id == {}

    def test_replies_attach_to_their_parent(self):
        """Each comment appears under its parent_comment_id."""
        # Arrange
        comments = [
            make_comment(1),
            make_comment(2, parent_id=1),
            make_comment(3, parent_id=2),
            make_comment(4),
        ]

        # Act
        forest = build_comment_forest(comments, CommentSortOrder.OLD)

        # Assert
        assert ids(forest.roots) == [1, 4]
        assert ids(forest.roots[0].replies) == [2]
        assert ids(forest.roots[0].replies[0].replies) == [3]
        assert forest.roots[1].replies == []

    def test_children_before_parents_in_input(self):
        """Input order doesn't matter for structure."""
        comments = [make_comment(3, parent_id=2), make_comment(2, parent_id=1), make_comment(1)]

        roots = build_comment_tree(comments, CommentSortOrder.TOP)

        assert ids(roots) == [1]
        assert ids(roots[0].replies) == [2]
        assert ids(roots[0].replies[0].replies) == [3]

    def test_orphan_is_promoted_to_root(self):
        """A reply whose parent is missing becomes a root."""
        comments = [make_comment(1, created_utc=10), make_comment(5, parent_id=99, created_utc=20)]

        forest = build_comment_forest(comments, CommentSortOrder.OLD)

        assert ids(forest.roots) == [1, 5]
        assert forest.roots[1].comment.parent_comment_id == 99

    def test_every_comment_appears_exactly_once(self):
        comments = [
            make_comment(1),
            make_comment(2, parent_id=1),
            make_comment(3, parent_id=1),
            make_comment(4, parent_id=3),
            make_comment(5, parent_id=42),
            make_comment(6),
        ]

        forest = build_comment_forest(comments, CommentSortOrder.NEW)

        seen = [node.id for node in walk(forest.roots)]
        assert sorted(seen) == [1, 2, 3, 4, 5, 6]
        assert set(forest.by_id) == {1, 2, 3, 4, 5, 6}

    def test_by_id_indexes_the_tree_nodes(self):
        comments = [make_comment(1), make_comment(2, parent_id=1)]

        forest = build_comment_forest(comments, CommentSortOrder.TOP)

        assert forest.by_id[1] is forest.roots[0]
        assert forest.by_id[2] is forest.roots[0].replies[0]

    def test_sorts_every_level(self):
        comments = [
            make_comment(1, upvotes=1),
            make_comment(2, upvotes=5),
            make_comment(3, parent_id=2, upvotes=1),
            make_comment(4, parent_id=2, upvotes=7),
        ]

        roots = build_comment_tree(comments, CommentSortOrder.TOP)

        assert ids(roots) == [2, 1]
        assert ids(roots[0].replies) == [4, 3]

    def test_rebuild_is_deterministic(self):
        """Building twice from the same records gives the same order everywhere."""
        comments = [
            make_comment(i, parent_id=(i // 3) or None, created_utc=1000, upvotes=i % 4)
            for i in range(1, 30)
        ]

        first = build_comment_tree(comments, CommentSortOrder.TOP)
        second = build_comment_tree(comments, CommentSortOrder.TOP)

        assert [n.id for n in walk(first)] == [n.id for n in walk(second)]

    def test_builds_fresh_nodes_every_time(self):
        comments = [make_comment(1)]

        first = build_comment_tree(comments)
        second = build_comment_tree(comments)

        assert first[0] is not second[0]
        assert first[0].comment is second[0].comment

    def test_duplicate_id_last_record_wins_at_first_position(self):
        """Later record for an id replaces the earlier one; position is kept."""
        comments = [
            make_comment(1, created_utc=10, body="first"),
            make_comment(2, created_utc=10),
            make_comment(1, created_utc=10, body="second"),
        ]

        forest = build_comment_forest(comments, CommentSortOrder.OLD)

        assert ids(forest.roots) == [1, 2]
        assert forest.by_id[1].comment.body == "second"


class TestCyclicParents:
    """Tests for parent chains that loop back on themselves."""

    def test_two_comment_cycle_is_broken(self):
        """A->B->A: the first of the cycle in input order becomes a root."""
        comments = [make_comment(1, parent_id=2), make_comment(2, parent_id=1)]

        roots = build_comment_tree(comments, CommentSortOrder.TOP)

        assert ids(roots) == [1]
        assert ids(roots[0].replies) == [2]
        assert roots[0].replies[0].replies == []

    def test_self_parent_is_a_root(self):
        roots = build_comment_tree([make_comment(7, parent_id=7)])

        assert ids(roots) == [7]
        assert roots[0].replies == []

    def test_cycle_with_tail_keeps_every_comment(self):
        """Comments hanging off a cycle stay attached after the break."""
        comments = [
            make_comment(4, parent_id=3),
            make_comment(1, parent_id=3),
            make_comment(2, parent_id=1),
            make_comment(3, parent_id=2),
            make_comment(5),
        ]

        forest = build_comment_forest(comments, CommentSortOrder.OLD)

        # 1 is the earliest cycle member in input order
        assert ids(forest.roots) == [1, 5]
        assert sorted(n.id for n in walk(forest.roots)) == [1, 2, 3, 4, 5]
        assert ids(forest.by_id[3].replies) == [4]


class TestBuildCommentSubtree:
    """Tests for permalink subtrees."""

    def test_returns_target_with_descendants(self):
        comments = [
            make_comment(10, parent_id=1),
            make_comment(11, parent_id=10, upvotes=1),
            make_comment(12, parent_id=10, upvotes=5),
            make_comment(13, parent_id=12),
        ]

        target = build_comment_subtree(10, comments, CommentSortOrder.TOP)

        assert target is not None
        assert target.id == 10
        assert ids(target.replies) == [12, 11]
        assert ids(target.replies[0].replies) == [13]

    def test_missing_target_returns_none(self):
        assert build_comment_subtree(99, [make_comment(1)]) is None

    def test_unrelated_orphans_are_dropped(self):
        comments = [make_comment(10), make_comment(20, parent_id=404)]

        target = build_comment_subtree(10, comments)

        assert target is not None
        assert target.replies == []
