"""FastAPI dependencies resolving process-wide state from ``app.state``."""

from fastapi import HTTPException, Query, Request

from .auth import TokenService
from .config import Settings
from .errors import Unauthorized
from .models import TokenClaims
from .storage import BlobStore, Database

MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10


def get_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_db(request: Request) -> Database:
    """Database handle opened at startup."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database not available")
    return db


def get_blob_store(request: Request) -> BlobStore:
    """Object store for uploads."""
    store = getattr(request.app.state, "blob_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="File storage not configured")
    return store


def get_token_service(request: Request) -> TokenService:
    """Token service holding the signing key."""
    return request.app.state.token_service


def get_current_user(request: Request) -> TokenClaims:
    """Identity attached by the auth middleware."""
    user = getattr(request.state, "user", None)
    if user is None:
        raise Unauthorized("Unauthorized: no Authorization header")
    return user


class Pagination:
    """Limit/offset window for admin listings."""

    def __init__(
        self,
        count: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
        offset: int = Query(0, ge=0, description="Records to skip"),
    ):
        self.count = count
        self.offset = offset
