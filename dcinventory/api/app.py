"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dcinventory import __version__
from dcinventory.api.routers import (
    assets,
    change_logs,
    customers,
    data_centers,
    ip_addresses,
    ip_pools,
    racks,
)
from dcinventory.core.config import get_settings
from dcinventory.core.database import close_engine, get_engine
from dcinventory.core.errors import InventoryError, inventory_error_handler
from dcinventory.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    configure_logging()
    settings = get_settings()
    logger.info("Starting DCInventory", debug=settings.app_debug, version=__version__)

    # Warm up DB connection pool
    get_engine()

    yield

    await close_engine()
    logger.info("DCInventory stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="DCInventory",
        description="Data-center inventory: racks, assets and IP address management",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InventoryError, inventory_error_handler)

    api_prefix = "/api/v1"
    app.include_router(data_centers.router, prefix=api_prefix)
    app.include_router(racks.router, prefix=api_prefix)
    app.include_router(assets.router, prefix=api_prefix)
    app.include_router(customers.router, prefix=api_prefix)
    app.include_router(customers.projects_router, prefix=api_prefix)
    app.include_router(ip_pools.router, prefix=api_prefix)
    app.include_router(ip_addresses.router, prefix=api_prefix)
    app.include_router(change_logs.router, prefix=api_prefix)
    app.include_router(change_logs.dashboard_router, prefix=api_prefix)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
