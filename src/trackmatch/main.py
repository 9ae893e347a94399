"""Main FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from trackmatch import __version__
from trackmatch.api import router
from trackmatch.config import settings
from trackmatch.logging_config import setup_logging
from trackmatch.services.registry import get_registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging(settings)
    logger.info("Starting {}...", settings.app_name)
    registry = get_registry()
    logger.info("Loaded {} carriers", len(registry))

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="Shipping carrier detection from tracking numbers",
    version=__version__,
    lifespan=lifespan,
)

# Include routes
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "trackmatch.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
