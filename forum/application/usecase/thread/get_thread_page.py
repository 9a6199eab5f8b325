"""Get thread page use case."""

from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase
from forum.domain.model import Comment, CommentNode
from forum.domain.service import CommentStore, CommentThreadService
from forum.domain.value import CommentSortOrder, SubmissionId


class CommentNodeResponse(BaseModel):
    """Comment node in a thread page.

    Recursive structure mirroring the visible part of the domain forest.
    """

    comment_id: int
    parent_comment_id: int | None
    author_name: str
    body: str
    created_utc: int
    edited_utc: int
    score: int
    upvotes: int
    downvotes: int
    is_deleted: bool
    descendant_count: int
    replies: list["CommentNodeResponse"]
    continue_thread: int = 0  # Replies hidden behind "continue this thread"

    @classmethod
    def from_domain(
        cls, node: CommentNode, depth: int = 0, max_depth: int | None = None
    ) -> "CommentNodeResponse":
        """Convert a domain node to a response model.

        Replies are converted bottom-up from an explicit stack, so the
        conversion itself has no nesting limit.

        Args:
            node: Domain comment node
            depth: Nesting depth of the node (0 for roots)
            max_depth: Depth at which replies stop being expanded

        Returns:
            Response model with replies converted down to ``max_depth``
        """
        converted: dict[int, CommentNodeResponse] = {}  # keyed by id() of the node
        stack = [(node, depth, False)]
        while stack:
            current, level, replies_done = stack.pop()
            collapsed = max_depth is not None and level >= max_depth
            if not collapsed and not replies_done and current.replies:
                stack.append((current, level, True))
                stack.extend((reply, level + 1, False) for reply in current.replies)
                continue

            replies = (
                [] if collapsed else [converted.pop(id(r)) for r in current.replies]
            )
            converted[id(current)] = cls._from_comment(
                current.comment,
                replies,
                continue_thread=len(current.replies) if collapsed else 0,
            )
        return converted[id(node)]

    @classmethod
    def _from_comment(
        cls,
        comment: Comment,
        replies: list["CommentNodeResponse"],
        continue_thread: int,
    ) -> "CommentNodeResponse":
        return cls(
            comment_id=comment.id,
            parent_comment_id=comment.parent_comment_id,
            author_name=comment.display_author,
            body=comment.display_body,
            created_utc=comment.created_utc,
            edited_utc=comment.edited_utc,
            score=comment.score,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            is_deleted=comment.is_deleted,
            descendant_count=comment.descendant_count,
            replies=replies,
            continue_thread=continue_thread,
        )


class GetThreadPageRequest(BaseModel):
    """Get thread page request."""

    submission_id: int
    sort: str | None = None  # top, new, old or controversial
    limit: int | None = Field(default=None, ge=0)


class GetThreadPageResponse(BaseModel):
    """Get thread page response."""

    submission_id: int
    sort: CommentSortOrder
    limit: int
    next_limit: int  # Limit to request for "load more"
    comments: list[CommentNodeResponse]
    visible_count: int
    total_count: int
    remaining: int
    has_more: bool
    comment_count: int
    last_fetched_at: int


class GetThreadPageUseCase(
    BaseUseCase[GetThreadPageRequest, GetThreadPageResponse]
):
    """Use case for rendering the visible window of a submission's thread."""

    def __init__(
        self,
        comment_store: CommentStore,
        comment_thread_service: CommentThreadService,
    ) -> None:
        """Initialize get thread page use case.

        Args:
            comment_store: Per-submission comment cache
            comment_thread_service: Thread service
        """
        self.comment_store = comment_store
        self.comment_thread_service = comment_thread_service

    async def execute(self, request: GetThreadPageRequest) -> GetThreadPageResponse:
        """Execute get thread page flow.

        Args:
            request: Submission, sort and visible limit

        Returns:
            Visible comments as a nested tree plus window bookkeeping

        Raises:
            SubmissionNotLoadedError: If the submission was never loaded
            ValidationError: If the sort identifier is unknown
        """
        submission_id = SubmissionId(request.submission_id)
        self.comment_store.require(submission_id)

        settings = self.comment_thread_service.comment_settings
        sort = (
            CommentSortOrder.parse(request.sort)
            if request.sort is not None
            else settings.default_sort
        )
        view = self.comment_thread_service.render(submission_id, sort, request.limit)

        return GetThreadPageResponse(
            submission_id=request.submission_id,
            sort=view.sort,
            limit=view.limit,
            next_limit=self.comment_thread_service.load_more(view.limit),
            comments=[
                CommentNodeResponse.from_domain(node, max_depth=settings.max_depth)
                for node in view.visible_roots
            ],
            visible_count=len(view.window.visible_ids),
            total_count=view.window.total_count,
            remaining=view.remaining,
            has_more=view.window.has_more,
            comment_count=view.comment_count,
            last_fetched_at=view.last_fetched_at,
        )
