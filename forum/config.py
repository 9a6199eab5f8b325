"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from forum.domain.value import CommentSortOrder


class CommentSettings(BaseModel):
    """Comment thread configuration."""

    # Comments revealed per "load more" step (and on first render)
    # Can be set via COMMENTS__PAGE_SIZE env var
    page_size: int = Field(default=50, gt=0)

    # Sort applied when the client doesn't pick one
    default_sort: CommentSortOrder = CommentSortOrder.TOP

    # Nesting depth after which a thread collapses into "continue this thread";
    # Capped at 100 levels
    max_depth: int = Field(default=10, ge=0, le=100)


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nested values:

        ENVIRONMENT=production
        COMMENTS__PAGE_SIZE=25
        COMMENTS__DEFAULT_SORT=new
        OBSERVABILITY__LOGFIRE_TOKEN=...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows COMMENTS__PAGE_SIZE syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    comments: CommentSettings = CommentSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
