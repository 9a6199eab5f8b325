"""Shared base for comment-engine records."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable record as handed over by the comment source.

    Records are never edited in place; a newer fetch replaces them.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
