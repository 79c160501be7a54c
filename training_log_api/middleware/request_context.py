"""
Request Context and Correlation IDs

Assigns each request a correlation ID, keeps it in a context variable so log
records emitted while handling the request can carry it, and logs the outcome
of every request with its duration.
"""

import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Correlation ID of the request being handled, or ``-`` outside a request."""
    return _request_id.get()


class RequestContextFilter(logging.Filter):
    """Logging filter that stamps records with the current correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that tracks request IDs and logs request outcomes."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        # Honour an upstream ID so traces line up across services
        request_id = request.headers.get("X-Request-ID") or generate_correlation_id()
        token = _request_id.set(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"{request.method} {request.url.path} failed after {duration_ms:.1f}ms: "
                f"{type(e).__name__}: {e}"
            )
            raise
        else:
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({duration_ms:.1f}ms)"
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            _request_id.reset(token)
