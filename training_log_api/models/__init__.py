"""Data models for the training log service."""

from .animal import Animal, AnimalCreate
from .auth import Credentials, LoginResponse, TokenClaims
from .responses import FieldError, HealthResponse, UploadResponse, UploadType
from .training_log import TrainingLog, TrainingLogCreate
from .user import User, UserCreate, UserPublic

__all__ = [
    # User models
    "User",
    "UserCreate",
    "UserPublic",
    # Animal models
    "Animal",
    "AnimalCreate",
    # Training log models
    "TrainingLog",
    "TrainingLogCreate",
    # Auth models
    "Credentials",
    "LoginResponse",
    "TokenClaims",
    # Response models
    "FieldError",
    "HealthResponse",
    "UploadResponse",
    "UploadType",
]
