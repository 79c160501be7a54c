"""Response models for API endpoints."""

from enum import Enum

from pydantic import Field

from .common import CamelModel


class UploadType(str, Enum):
    """Kinds of media the upload route can attach to a record."""

    USER_IMAGE = "user-image"
    ANIMAL_IMAGE = "animal-image"
    TRAINING_LOG_VIDEO = "training-log-video"


class UploadResponse(CamelModel):
    """Response for a successful upload."""

    message: str = "uploaded"
    object_key: str
    public_url: str = Field(..., alias="publicURL")


class HealthResponse(CamelModel):
    """Health check response."""

    healthy: bool
    status: str
    version: str
    uptime: str
    database_connected: bool


class FieldError(CamelModel):
    """A single failed field in a rejected request."""

    field: str
    message: str
