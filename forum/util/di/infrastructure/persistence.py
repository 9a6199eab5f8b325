"""Persistence infrastructure providers."""

from dishka import Scope, provide

from forum.domain.repository import CommentRepository
from forum.persistence.repository import InMemoryCommentRepository
from forum.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Default persistence provider.

    Serves comments from a process-wide in-memory repository. Hosts that
    own a real comment database register their own CommentRepository
    provider in place of this one.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide Comment repository."""
        return InMemoryCommentRepository()
