"""Request interceptors applied to every route."""

from .auth import AuthMiddleware
from .request_context import RequestContextFilter, RequestContextMiddleware, get_request_id

__all__ = [
    "AuthMiddleware",
    "RequestContextFilter",
    "RequestContextMiddleware",
    "get_request_id",
]
