"""Training log data models."""

from datetime import datetime

from pydantic import Field, field_validator

from .common import CamelModel, ensure_utc


class TrainingLogCreate(CamelModel):
    """Request to record a training session.

    ``user`` defaults to the authenticated user when omitted.
    """

    date: datetime
    description: str
    hours: float = Field(..., gt=0, allow_inf_nan=False, description="Hours spent training")
    animal: str = Field(..., description="Animal id")
    user: str | None = Field(default=None, description="User id")
    training_log_video: str | None = Field(default=None, description="Video URL")

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class TrainingLog(CamelModel):
    """Stored training log record."""

    id: str
    date: datetime
    description: str
    hours: float
    animal: str
    user: str
    training_log_video: str | None = None
