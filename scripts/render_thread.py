#!/usr/bin/env python3
"""Render a submission's comment thread from a JSON dump of comment records."""

import argparse
import asyncio
import sys
from pathlib import Path

import logfire
from dishka import Provider, Scope, provide
from pydantic import TypeAdapter

from forum.application.usecase.thread import (
    CommentNodeResponse,
    GetThreadPageRequest,
    GetThreadPageUseCase,
    LoadThreadRequest,
    LoadThreadUseCase,
)
from forum.config import Settings
from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.persistence.repository import InMemoryCommentRepository
from forum.util.di.container import create_container
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", type=Path, help="JSON file with a list of comments")
    parser.add_argument("--submission", type=int, required=True)
    parser.add_argument("--sort", default=None)
    parser.add_argument("--limit", type=int, default=None)
    return parser.parse_args(argv)


def print_node(node: CommentNodeResponse, depth: int = 0) -> None:
    indent = "  " * depth
    print(f"{indent}[{node.score:+d}] {node.author_name}: {node.body}")
    for reply in node.replies:
        print_node(reply, depth + 1)
    if node.continue_thread:
        print(f"{indent}  continue this thread ({node.continue_thread} more replies)")


class DumpPersistenceProvider(Provider):
    """Serves the comments read from the dump file."""

    def __init__(self, repository: InMemoryCommentRepository) -> None:
        super().__init__()
        self.repository = repository

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        return self.repository


async def render(args: argparse.Namespace) -> None:
    comments = TypeAdapter(list[Comment]).validate_json(args.path.read_bytes())
    repository = InMemoryCommentRepository()
    for comment in comments:
        await repository.save(comment)

    container = create_container(DumpPersistenceProvider(repository))
    try:
        async with container() as request_container:
            load = await request_container.get(LoadThreadUseCase)
            await load.execute(LoadThreadRequest(submission_id=args.submission))

            page_use_case = await request_container.get(GetThreadPageUseCase)
            page = await page_use_case.execute(
                GetThreadPageRequest(
                    submission_id=args.submission, sort=args.sort, limit=args.limit
                )
            )
    finally:
        await container.close()

    print(f"{page.comment_count} comments, sorted by {page.sort.value}")
    for node in page.comments:
        print_node(node)
    if page.has_more:
        print(f"load more comments ({page.remaining} remaining)")


def main(argv: list[str] | None = None) -> int:
    """Render a thread and log any failure to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        asyncio.run(render(args))
        return 0
    except Exception as e:
        logfire.error(
            "Thread rendering failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
