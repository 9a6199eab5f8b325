"""Comment thread use cases."""

from .add_reply import AddReplyRequest, AddReplyUseCase
from .get_thread_page import (
    CommentNodeResponse,
    GetThreadPageRequest,
    GetThreadPageResponse,
    GetThreadPageUseCase,
)
from .load_thread import LoadThreadRequest, LoadThreadResponse, LoadThreadUseCase
from .sync_thread import SyncThreadRequest, SyncThreadResponse, SyncThreadUseCase

__all__ = [
    "AddReplyRequest",
    "AddReplyUseCase",
    "CommentNodeResponse",
    "GetThreadPageRequest",
    "GetThreadPageResponse",
    "GetThreadPageUseCase",
    "LoadThreadRequest",
    "LoadThreadResponse",
    "LoadThreadUseCase",
    "SyncThreadRequest",
    "SyncThreadResponse",
    "SyncThreadUseCase",
]
