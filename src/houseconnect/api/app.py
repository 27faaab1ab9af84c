"""FastAPI application setup."""

from __future__ import annotations

import logging
import math
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from houseconnect import __version__
from houseconnect.api.dependencies import build_services
from houseconnect.api.models import APIResponse
from houseconnect.api.routes import administrators, auth
from houseconnect.config import Settings
from houseconnect.exceptions import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    RateLimitedError,
    UnavailableError,
)
from houseconnect.logging import sanitize_for_log, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings: Settings | None = app.state.settings
    if settings is None:
        settings = Settings.from_env()
        app.state.settings = settings
    if app.state.configure_logging:
        setup_logging(log_dir=settings.log_dir, level=settings.log_level)

    services = build_services(settings)
    app.state.services = services

    yield
    # Shutdown
    app.state.services = None
    services.close()
    logger.info("Services closed")


def create_app(settings: Settings | None = None, configure_logging: bool = False) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings for this app. Read from the environment at startup
            when None.
        configure_logging: Whether to install the rotating file handler at
            startup.
    """
    app = FastAPI(
        title="HouseConnect API",
        description="REST API for HouseConnect - identity and access",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.configure_logging = configure_logging
    app.state.services = None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(_request: Request, exc: InvalidInputError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(_request: Request, exc: ForbiddenError) -> JSONResponse:
        return _error_response(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(DuplicateEmailError)
    async def duplicate_email_handler(_request: Request, exc: DuplicateEmailError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(RateLimitedError)
    async def rate_limited_handler(_request: Request, exc: RateLimitedError) -> JSONResponse:
        retry_after = max(1, math.ceil(exc.retry_after.total_seconds()))
        return _error_response(
            status.HTTP_429_TOO_MANY_REQUESTS,
            str(exc),
            headers={"Retry-After": str(retry_after)},
        )

    @app.exception_handler(UnavailableError)
    async def unavailable_handler(_request: Request, exc: UnavailableError) -> JSONResponse:
        logger.error("Store unavailable: %s", sanitize_for_log(str(exc)))
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable"
        )

    # Include routers
    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(administrators.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app(configure_logging=True)
