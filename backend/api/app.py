"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from shared.config import get_settings
from shared.exceptions import FloeError, StoreError
from modules.auth.routes import router as auth_router
from modules.users.routes import router as users_router, me_router
from modules.workspaces.routes import router as workspaces_router

from .dependencies import get_container
from .middleware.security import SecurityHeadersMiddleware
from .routes import health

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Resolves the signing secret and bootstraps the admin account before
    any request is served. A store failure here aborts startup.
    """
    settings = get_settings()
    container = get_container()

    _ = container.signer
    await run_in_threadpool(container.bootstrap)

    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    logger.info(f"Shutting down {settings.app_name}")


async def floe_error_handler(request: Request, exc: FloeError) -> JSONResponse:
    """Render a FloeError as ``{error, message, details}``."""
    if isinstance(exc, StoreError):
        logger.error(f"Store error on {request.method} {request.url.path}: {exc.__cause__!r}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=StoreError().to_dict())


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant CMS backend: sessions, users and workspaces",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    app.add_exception_handler(FloeError, floe_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(SecurityHeadersMiddleware)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(me_router, prefix="/api/me", tags=["users"])
    app.include_router(workspaces_router, prefix="/api/workspaces", tags=["workspaces"])

    return app


# Application instance for uvicorn
app = create_app()
