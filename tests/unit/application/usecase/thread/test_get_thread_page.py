"""Unit tests for GetThreadPageUseCase."""

import pytest

from forum.application.usecase.thread import (
    CommentNodeResponse,
    GetThreadPageRequest,
    GetThreadPageUseCase,
)
from forum.domain.error import SubmissionNotLoadedError, ValidationError
from forum.domain.model import CommentNode
from forum.domain.service import CommentStore, build_comment_tree
from forum.domain.value import CommentSortOrder, SubmissionId
from tests.factories import make_comment, make_wide_thread
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def chain(length: int) -> list:
    """Comments 1..length, each replying to the previous one."""
    return [make_comment(1)] + [
        make_comment(i, parent_id=i - 1) for i in range(2, length + 1)
    ]


class TestGetThreadPageUseCase:
    """Tests for GetThreadPageUseCase."""

    @pytest.mark.asyncio
    async def test_first_page_uses_defaults(self, unit_env):
        """Without sort or limit, one page sorted by top is returned."""
        # Arrange
        store = await unit_env.get(CommentStore)
        store.init_submission(SubmissionId(1), make_wide_thread(20, 3), 80, 10)
        use_case = await unit_env.get(GetThreadPageUseCase)

        # Act
        page = await use_case.execute(GetThreadPageRequest(submission_id=1))

        # Assert
        assert page.sort is CommentSortOrder.TOP
        assert page.limit == 50
        assert page.next_limit == 100
        assert page.visible_count == 50
        assert page.total_count == 80
        assert page.remaining == 30
        assert page.has_more is True
        assert page.comment_count == 80
        assert page.last_fetched_at == 10
        assert [c.comment_id for c in page.comments[:2]] == [1, 2]

    @pytest.mark.asyncio
    async def test_limit_reveals_replies_before_later_roots(self, unit_env):
        # Arrange
        store = await unit_env.get(CommentStore)
        store.init_submission(SubmissionId(1), make_wide_thread(5, 3), 20, 0)
        use_case = await unit_env.get(GetThreadPageUseCase)

        # Act
        page = await use_case.execute(GetThreadPageRequest(submission_id=1, limit=3))

        # Assert
        assert [c.comment_id for c in page.comments] == [1]
        assert [r.comment_id for r in page.comments[0].replies] == [6, 7]
        assert page.has_more is True

    @pytest.mark.asyncio
    async def test_sort_identifier_is_parsed(self, unit_env):
        # Arrange
        store = await unit_env.get(CommentStore)
        store.init_submission(
            SubmissionId(1), [make_comment(1, upvotes=9), make_comment(2)], 2, 0
        )
        use_case = await unit_env.get(GetThreadPageUseCase)

        # Act
        page = await use_case.execute(
            GetThreadPageRequest(submission_id=1, sort="new")
        )

        # Assert
        assert page.sort is CommentSortOrder.NEW
        assert [c.comment_id for c in page.comments] == [2, 1]
        assert page.has_more is False

    @pytest.mark.asyncio
    async def test_unknown_sort_raises(self, unit_env):
        store = await unit_env.get(CommentStore)
        store.init_submission(SubmissionId(1), [], 0, 0)
        use_case = await unit_env.get(GetThreadPageUseCase)

        with pytest.raises(ValidationError, match="Unknown comment sort"):
            await use_case.execute(GetThreadPageRequest(submission_id=1, sort="best"))

    @pytest.mark.asyncio
    async def test_unloaded_submission_raises(self, unit_env):
        use_case = await unit_env.get(GetThreadPageUseCase)

        with pytest.raises(SubmissionNotLoadedError):
            await use_case.execute(GetThreadPageRequest(submission_id=404))

    @pytest.mark.asyncio
    async def test_deep_threads_are_collapsed(self, unit_env):
        """Replies below the depth cap are replaced by a continue marker."""
        # Arrange
        store = await unit_env.get(CommentStore)
        store.init_submission(SubmissionId(1), chain(15), 15, 0)
        use_case = await unit_env.get(GetThreadPageUseCase)

        # Act
        page = await use_case.execute(GetThreadPageRequest(submission_id=1))

        # Assert
        node = page.comments[0]
        depth = 0
        while node.replies:
            node = node.replies[0]
            depth += 1
        assert depth == 10
        assert node.comment_id == 11
        assert node.continue_thread == 1


class TestCommentNodeResponse:
    """Tests for CommentNodeResponse.from_domain."""

    def test_deleted_comment_shows_placeholder(self):
        comment = make_comment(1, is_deleted=True, author_name="alice", body="gone")

        response = CommentNodeResponse.from_domain(CommentNode(comment=comment))

        assert response.body == "[deleted]"
        assert response.author_name == "[deleted]"
        assert response.is_deleted is True

    def test_without_cap_every_level_is_expanded(self):
        roots = build_comment_tree(chain(3))

        response = CommentNodeResponse.from_domain(roots[0])

        assert response.replies[0].replies[0].comment_id == 3
        assert response.replies[0].replies[0].continue_thread == 0

    def test_zero_depth_collapses_roots(self):
        roots = build_comment_tree(chain(3))

        response = CommentNodeResponse.from_domain(roots[0], max_depth=0)

        assert response.replies == []
        assert response.continue_thread == 1

    def test_deep_chain_converts_without_recursion(self):
        """Conversion without a cap handles threads deeper than the recursion limit."""
        roots = build_comment_tree(chain(3000))

        response = CommentNodeResponse.from_domain(roots[0])

        node = response
        depth = 0
        while node.replies:
            node = node.replies[0]
            depth += 1
        assert depth == 2999
        assert node.comment_id == 3000

    def test_sibling_order_is_kept(self):
        comments = [
            make_comment(1),
            make_comment(2, parent_id=1, upvotes=3),
            make_comment(3, parent_id=1, upvotes=2),
            make_comment(4, parent_id=1, upvotes=1),
        ]
        roots = build_comment_tree(comments)

        response = CommentNodeResponse.from_domain(roots[0])

        assert [r.comment_id for r in response.replies] == [2, 3, 4]
