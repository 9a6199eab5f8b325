"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.thread import (
    AddReplyUseCase,
    GetThreadPageUseCase,
    LoadThreadUseCase,
    SyncThreadUseCase,
)
from forum.domain.repository import CommentRepository
from forum.domain.service import CommentStore, CommentThreadService
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_load_thread_use_case(
        self, comment_repository: CommentRepository, comment_store: CommentStore
    ) -> LoadThreadUseCase:
        """Provide load thread use case."""
        return LoadThreadUseCase(
            comment_repository=comment_repository, comment_store=comment_store
        )

    @provide(scope=Scope.REQUEST)
    def get_sync_thread_use_case(
        self,
        comment_repository: CommentRepository,
        comment_store: CommentStore,
        comment_thread_service: CommentThreadService,
    ) -> SyncThreadUseCase:
        """Provide sync thread use case."""
        return SyncThreadUseCase(
            comment_repository=comment_repository,
            comment_store=comment_store,
            comment_thread_service=comment_thread_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_add_reply_use_case(
        self,
        comment_store: CommentStore,
        comment_thread_service: CommentThreadService,
    ) -> AddReplyUseCase:
        """Provide add reply use case."""
        return AddReplyUseCase(
            comment_store=comment_store,
            comment_thread_service=comment_thread_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_thread_page_use_case(
        self,
        comment_store: CommentStore,
        comment_thread_service: CommentThreadService,
    ) -> GetThreadPageUseCase:
        """Provide get thread page use case."""
        return GetThreadPageUseCase(
            comment_store=comment_store,
            comment_thread_service=comment_thread_service,
        )
