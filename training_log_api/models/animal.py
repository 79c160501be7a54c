"""Animal data models."""

from datetime import datetime

from pydantic import Field, field_validator

from .common import CamelModel, ensure_utc


class AnimalCreate(CamelModel):
    """Request to create an animal.

    ``owner`` defaults to the authenticated user when omitted.
    """

    name: str = Field(..., examples=["Rex"])
    hours_trained: float = Field(
        default=0, ge=0, allow_inf_nan=False, description="Cumulative hours trained"
    )
    owner: str | None = Field(default=None, description="Owning user id")
    date_of_birth: datetime | None = None
    profile_picture: str | None = Field(default=None, description="Profile image URL")

    @field_validator("date_of_birth")
    @classmethod
    def normalize_date_of_birth(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v)


class Animal(CamelModel):
    """Stored animal record."""

    id: str
    name: str
    hours_trained: float = 0
    owner: str
    date_of_birth: datetime | None = None
    profile_picture: str | None = None
