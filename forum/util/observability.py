"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Comments merged", submission_id=42, new_count=3)

    # Manual spans for critical operations
    with logfire.span("comment_thread_service.render", submission_id=42):
        ...
"""

from typing import Any

import logfire

from forum.config import Settings


def should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry leaves the process.

    Priority: explicit setting > token presence > default (False)
    """
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Console output is always on; sending to Logfire cloud requires a token
    (OBSERVABILITY__LOGFIRE_TOKEN) or OBSERVABILITY__SEND_TO_LOGFIRE=true.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings)

    config_kwargs: dict[str, Any] = {
        "service_name": "forum-threads",
        "service_version": "1.0.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )
