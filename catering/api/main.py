"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catering import __version__
from catering.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from catering.api.middleware.error_handler import setup_exception_handlers
from catering.api.routes import (
    businesses_router,
    health_router,
    inventory_router,
    menu_router,
    orders_router,
    payments_router,
    purchases_router,
    reports_router,
    roles_router,
    staff_router,
)
from catering.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Runs migrations and opens the connection pool on startup, closes the
    pool and the payment client on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        from catering.infrastructure.storage.sqlite import get_pool
        from catering.infrastructure.storage.sqlite.migrations.migrator import (
            initialize_database,
        )

        await initialize_database()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    from catering.infrastructure.payments import get_payment_processor
    from catering.infrastructure.storage.sqlite import close_pool

    await close_pool()
    logger.info("connection_pool_closed")

    await get_payment_processor().close()

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title="Catering Operations API",
        description="Inventory ledger, purchases, orders and menu costing",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Starlette runs the last added middleware first
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

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
    app.include_router(businesses_router)
    app.include_router(inventory_router)
    app.include_router(purchases_router)
    app.include_router(orders_router)
    app.include_router(payments_router)
    app.include_router(menu_router)
    app.include_router(reports_router)
    app.include_router(roles_router)
    app.include_router(staff_router)

    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
