"""Shared model configuration."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes so they store cleanly in TIMESTAMPTZ columns."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
