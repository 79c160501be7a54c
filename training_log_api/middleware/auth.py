"""Authentication middleware for bearer token verification."""

import logging
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from ..auth import TokenService
from ..errors import Unauthorized

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware gating every non-public route behind a bearer token.

    Each request runs through an ordered chain:
    1. Public path check -> forward untouched
    2. Authorization: Bearer <token> extraction -> 401 if absent
    3. Token verification -> 401 if invalid
    4. Forward with the claims on request.state.user

    Sets on request.state:
    - user: TokenClaims recovered from the token
    """

    # Paths that don't require authentication
    PUBLIC_PATHS = [
        "/api/health",
        "/api/users",  # Registration
        "/docs",
        "/redoc",
        "/openapi.json",
    ]

    # Current-user routes authenticate with credentials in the body
    PUBLIC_PREFIXES = ["/api/user/"]

    def __init__(self, app: ASGIApp, token_service: TokenService):
        super().__init__(app)
        self.token_service = token_service

    def is_public(self, path: str) -> bool:
        """Whether ``path`` bypasses authentication."""
        if (path.rstrip("/") or "/") in self.PUBLIC_PATHS:
            return True
        return any(path.startswith(prefix) for prefix in self.PUBLIC_PREFIXES)

    @staticmethod
    def extract_bearer_token(request: Request) -> str:
        """Pull the token out of the Authorization header.

        Raises:
            Unauthorized: If the header is missing or not a Bearer credential.
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            raise Unauthorized("Unauthorized: no Authorization header")

        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise Unauthorized("Unauthorized: no Authorization header")

        return token.strip()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request through authentication."""
        if self.is_public(request.url.path):
            return await call_next(request)

        try:
            token = self.extract_bearer_token(request)
            claims = self.token_service.verify(token)
        except Unauthorized as e:
            logger.info(f"Rejected {request.method} {request.url.path}: {e.detail}")
            return JSONResponse(status_code=e.status_code, content={"detail": e.detail})

        request.state.user = claims
        logger.debug(f"Authenticated request: user_id={claims.id}")
        return await call_next(request)
