"""API endpoints for the training log service."""

from .admin import router as admin_router
from .animals import router as animals_router
from .files import router as files_router
from .health import router as health_router
from .identity import router as identity_router
from .training import router as training_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "animals_router",
    "files_router",
    "health_router",
    "identity_router",
    "training_router",
    "users_router",
]
