"""
FastAPI Application Factory

Creates and configures the dashboard API application.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from shop_admin.config import get_settings
from shop_admin.serving.api.errors import register_exception_handlers
from shop_admin.serving.api.middleware import RequestLoggingMiddleware
from shop_admin.serving.api.routes import (
    addresses_router,
    categories_router,
    customers_router,
    health_router,
    orders_router,
    products_router,
    tags_router,
)

settings = get_settings()


def create_api_app(lifespan: Optional[Any] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Store Admin API",
        description="Tables and forms over the store's document database",
        version=settings.version,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api/v1", tags=["Health"])
    app.include_router(customers_router, prefix="/api/v1/customers", tags=["Customers"])
    app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])
    app.include_router(categories_router, prefix="/api/v1/categories", tags=["Categories"])
    app.include_router(products_router, prefix="/api/v1/products", tags=["Products"])
    app.include_router(addresses_router, prefix="/api/v1/addresses", tags=["Addresses"])
    app.include_router(tags_router, prefix="/api/v1/tags", tags=["Tags"])

    # Locally stored product images
    if settings.blobs.backend == "local":
        media_dir = Path(settings.blobs.local_dir)
        media_dir.mkdir(parents=True, exist_ok=True)
        app.mount(settings.blobs.public_base_url, StaticFiles(directory=media_dir), name="media")

    @app.get("/api/v1/info")
    async def api_info() -> Dict[str, str]:
        """API information endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.version,
            "environment": settings.app_env,
            "documentation": "/docs",
        }

    return app
