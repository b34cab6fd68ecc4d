"""
FastAPI Production Application

Main entry point for the Store Admin API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from shop_admin.config import get_settings
from shop_admin.config.logging import configure_logging
from shop_admin.database import init_database, close_database
from shop_admin.serving.api import create_api_app

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()
    logger.info("Starting Store Admin API", environment=settings.app_env)

    await init_database()

    yield

    logger.info("Shutting down...")
    await close_database()


app = create_api_app(lifespan=lifespan)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
