"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from infrastructure.config import settings
from infrastructure.logging import setup_logging
from interfaces.api.routes.backup_routes import router as backup_router
from interfaces.api.routes.migration_routes import router as migration_router

# Configure structured logging
setup_logging("api")

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # noqa: ARG001
    """Handle application startup and shutdown."""
    logger.info("app_starting", env=settings.app_env, backup_provider=settings.backup_provider)
    logger.info("app_ready")

    yield

    logger.info("app_shutting_down")
    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Blob migration and database backup API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(migration_router)
    app.include_router(backup_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Logging is already configured; keep uvicorn from installing its own
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)
