"""API server application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from mcp_apiserver.api.config.settings import AppSettings, load_settings
from mcp_apiserver.api.importer.endpoints import router as import_router
from mcp_apiserver.api.importer.importer_service import ImporterService
from mcp_apiserver.api.notifier.factory import create_notifier
from mcp_apiserver.api.notifier.notifier import Notifier
from mcp_apiserver.api.storage.factory import create_store
from mcp_apiserver.api.storage.store import ConfigStore
from mcp_apiserver.utils.health import ServiceHealth


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    service: ImporterService = app.state.service
    try:
        logger.info("Starting API server...")
        await service.start()
        logger.info("API server started successfully")
    except Exception as e:
        # Keep serving in degraded mode, health shows the failed components
        logger.error(f"API server startup failed: {e}")

    yield

    if service.is_running:
        try:
            await service.stop()
            logger.info("API server stopped")
        except Exception as e:
            logger.error(f"Failed to stop API server: {e}")


def create_apiserver_app(
    settings: Optional[AppSettings] = None,
    store: Optional[ConfigStore] = None,
    notifier: Optional[Notifier] = None
) -> FastAPI:
    """Create API server application.

    Args:
        settings: Application settings, loaded from config/config.yaml if omitted
        store: Store to use instead of the configured backend
        notifier: Notifier to use instead of the configured backend

    Returns:
        FastAPI: Application instance
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="MCP API Server",
        description="API for importing OpenAPI documents as MCP server configurations",
        version=settings.version,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors."""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_errors(exc)},
        )

    app.state.settings = settings
    app.state.service = ImporterService(
        store=store or create_store(settings.storage),
        notifier=notifier or create_notifier(settings.notifier),
        version=settings.version
    )
    app.include_router(import_router)

    @app.get("/health", response_model=ServiceHealth)
    async def health() -> ServiceHealth:
        """Get service health status."""
        return await app.state.service.check_health()

    return app


def jsonable_errors(exc: RequestValidationError):
    """Strip non-serializable context from validation errors."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]
