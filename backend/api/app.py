"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ChatmateError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from .models import ErrorResponse
from .routes import admin, health, users
from modules.billing.routes import router as subscription_router
from modules.invitations.routes import router as invitations_router
from modules.voice.routes import router as voice_router
from modules.widgets.routes import router as widgets_router

logger = logging.getLogger(__name__)

_ERROR_STATUS = [
    (NotFoundError, 404),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ExternalServiceError, 502),
]


def error_status(exc: ChatmateError) -> int:
    """HTTP status for a domain error that reached the application boundary."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Embeddable voice and chat widget backend",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS; widgets are embedded on arbitrary origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(ChatmateError)
    async def chatmate_error_handler(request: Request, exc: ChatmateError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        body = ErrorResponse.from_error(exc)
        return JSONResponse(body.model_dump(), status_code=status_code)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
    app.include_router(voice_router, prefix="/api/voice", tags=["voice"])
    app.include_router(subscription_router, prefix="/api/subscription", tags=["subscription"])
    app.include_router(widgets_router, prefix="/api/widgets", tags=["widgets"])
    app.include_router(invitations_router, prefix="/api/invitations", tags=["invitations"])

    return app


# Application instance for uvicorn
app = create_app()
