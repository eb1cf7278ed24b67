# Main application entry point
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import auth_router, health_router, notes_router, tenants_router
from .config import Settings, get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.schemas.common import ErrorResponse
from .database import create_tables
from .middleware.gateway import AccessGateway
from .security.jwt import TokenService

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting TenantNotes application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    # tests run against their own engine
    if os.getenv("TENANTNOTES_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to TENANTNOTES_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    logger.info("Shutting down TenantNotes application")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests are client errors; field detail stays in the log."""
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "errors": exc.errors()},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request"},
    )


# every failure body is {"error": message}
ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    The settings and the token service built from them are fixed here and
    kept on ``app.state``; request dependencies read them from there.
    Fails fast when no signing secret is configured.
    """
    settings = settings or get_settings()
    token_service = TokenService.from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant notes API with plan quotas",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_service = token_service

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # added last = runs first, so every response (401s included) is logged
    app.add_middleware(
        AccessGateway,
        token_service=token_service,
        allow_origin=settings.cors_allow_origin,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(LoggingMiddleware)

    for router in (auth_router, notes_router, tenants_router, health_router):
        app.include_router(router, prefix="/api", responses=ERROR_RESPONSES)

    @app.get("/")
    async def root():
        return {"message": "TenantNotes API"}

    return app


# Setup logging first
setup_logging()

app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("tenantnotes.main:app", host=_settings.host, port=_settings.port, reload=_settings.reload)
