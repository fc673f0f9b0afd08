"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from idistr.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from idistr.api.middleware.error_handler import setup_exception_handlers
from idistr.api.routes import (
    cart_router,
    catalog_router,
    checkout_router,
    health_router,
    receipts_router,
    session_router,
)
from idistr.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Opens the local state database on startup and closes it on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        backend_configured=bool(settings.backend.base_url),
        state_backend=settings.state.backend,
    )
    if not settings.backend.base_url:
        logger.warning("backend_url_missing")

    if settings.state.backend == "sqlite":
        try:
            from idistr.infrastructure.storage.sqlite import get_pool

            await get_pool()
            logger.info("connection_pool_ready", db_path=str(settings.state.db_path))
        except Exception as e:
            logger.error("database_init_failed", error=str(e))
            raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from idistr.infrastructure.storage.sqlite import close_pool

        await close_pool()
    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Order-taking API for field sales reps",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(session_router)
    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(receipts_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "idistr.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
