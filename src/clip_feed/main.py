# src/clip_feed/main.py
"""Main entry point for the Clip Feed application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from clip_feed.api.v1 import feed_router, items_router, votes_router
from clip_feed.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Clip Feed API",
    description="Ranked, cursor-paginated clip feed with weighted voting",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(feed_router, prefix="/api/v1")
app.include_router(items_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")


def configure_logging() -> None:
    """Configure the root logger from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Ranked, cursor-paginated clip feed with weighted voting",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("clip_feed.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
