"""Main FastAPI application for the training log service."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from . import __version__
from .api import (
    admin_router,
    animals_router,
    files_router,
    health_router,
    identity_router,
    training_router,
    users_router,
)
from .auth import TokenService
from .config import Settings, settings
from .errors import TrainingLogError
from .middleware import AuthMiddleware, RequestContextFilter, RequestContextMiddleware
from .models import FieldError
from .storage import BlobStore, Database

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def configure_logging(level: str) -> None:
    """Send logs to stdout, stamped with the current request ID."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        handlers=[handler],
    )


configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup and shutdown."""
    config: Settings = app.state.settings
    logger.info("Starting training log service...")
    logger.info(f"Service version: {app.version}")
    logger.info(f"Host: {config.service_host}:{config.service_port}")

    owns_db = app.state.db is None
    if owns_db:
        db = Database(
            config.get_database_url(),
            min_size=config.database_pool_min_size,
            max_size=config.database_pool_max_size,
            command_timeout=config.database_command_timeout,
        )
        await db.connect()
        app.state.db = db
    logger.info("Database initialized")

    if app.state.blob_store is None:
        if config.supabase_url and config.supabase_key:
            app.state.blob_store = BlobStore.from_credentials(
                config.supabase_url, config.supabase_key, config.storage_bucket
            )
            logger.info(f"File storage initialized (bucket={config.storage_bucket})")
        else:
            logger.warning("SUPABASE_URL/SUPABASE_KEY not set - file uploads disabled")

    logger.info("Training log service started successfully")

    yield

    logger.info("Shutting down training log service...")
    if owns_db:
        await app.state.db.disconnect()
        app.state.db = None
    logger.info("Training log service stopped")


async def handle_app_error(request: Request, exc: TrainingLogError) -> JSONResponse:
    """Render domain errors as ``{"detail": ...}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed input with 400 and one entry per failing field."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            message=error["msg"],
        ).model_dump()
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": errors})


def create_app(
    settings: Settings = settings,
    db: Database | None = None,
    blob_store: BlobStore | None = None,
) -> FastAPI:
    """Build the application.

    The signing key, database and blob store live on ``app.state`` and are
    handed to handlers through dependencies. ``db`` and ``blob_store`` may be
    supplied up front; otherwise they are opened in the lifespan.
    """
    token_service = TokenService(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )

    app = FastAPI(
        title="Training Log API",
        description="""
REST API for recording animal training.

## Authentication

Register with `POST /api/users`, then exchange email/password for a token at
`POST /api/user/verify`. Every other route except `/api/health` requires
`Authorization: Bearer <token>`.

## API Endpoints

- `POST /api/users` - Register user
- `POST /api/user/login` - Check credentials
- `POST /api/user/verify` - Check credentials and issue token
- `POST /api/animals` - Create animal
- `POST /api/training` - Record training session
- `GET /api/admin/users|animals|training` - Paged listings (`count`, `offset`)
- `POST /api/file/upload` - Upload image/video and attach it to a record
- `GET /api/health` - Health check
""",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.token_service = token_service
    app.state.db = db
    app.state.blob_store = blob_store

    app.add_exception_handler(TrainingLogError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # Innermost: reject unauthenticated requests before any handler runs
    app.add_middleware(AuthMiddleware, token_service=token_service)

    # Wraps auth so rejected requests are logged with their request ID
    app.add_middleware(RequestContextMiddleware)

    # Outermost: answer CORS preflights without a token
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(identity_router)
    app.include_router(animals_router)
    app.include_router(training_router)
    app.include_router(admin_router)
    app.include_router(files_router)

    return app


app = create_app()


def main() -> None:
    """Main entry point for running the service."""
    import uvicorn

    uvicorn.run(
        "training_log_api.main:app",
        host=settings.service_host,
        port=settings.service_port,
        workers=settings.service_workers,
        log_level=settings.log_level,
        reload=False,
    )


if __name__ == "__main__":
    main()
