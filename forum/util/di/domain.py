"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import CommentSettings
from forum.domain.service import CommentStore, CommentThreadService
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    The comment store is the client-side cache, so it lives for the whole
    container (APP scope) together with the thread service that memoizes
    forests built from it.
    """

    @provide(scope=Scope.APP)
    def get_comment_store(self) -> CommentStore:
        """Provide the per-submission comment store."""
        return CommentStore()

    @provide(scope=Scope.APP)
    def get_comment_thread_service(
        self, comment_store: CommentStore, comment_settings: CommentSettings
    ) -> CommentThreadService:
        """Provide comment thread domain service."""
        return CommentThreadService(
            comment_store=comment_store, comment_settings=comment_settings
        )
