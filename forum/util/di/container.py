"""Dependency injection container."""

from dishka import AsyncContainer, Provider, make_async_container

from forum.util.di import PROVIDERS, get_provider


def create_container(*overrides: Provider) -> AsyncContainer:
    """Build the production container.

    Settings come from the environment. Providers passed in ``overrides``
    are registered last, so a host can supply its own CommentRepository in
    place of the in-memory default.

    Args:
        overrides: Extra providers taking precedence over the defaults

    Returns:
        Configured DI container
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, *overrides)
