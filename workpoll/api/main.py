"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from workpoll import __version__
from workpoll.api.middleware import create_metrics_middleware
from workpoll.api.routes import health_router, work_router
from workpoll.config import get_settings
from workpoll.observability.logging import setup_logging
from workpoll.observability.metrics import setup_metrics
from workpoll.observability.tracing import instrument_fastapi, setup_tracing
from workpoll.registry import WorkRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    setup_logging()
    setup_metrics()
    setup_tracing()

    logger.info("Application started")

    yield

    logger.info(
        "Application shutdown",
        extra={"work_items": app.state.registry.count()},
    )


def create_app(registry: WorkRegistry | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        registry: Work registry to serve. A fresh one is built from
            settings when omitted.

    Returns:
        FastAPI: The configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Work Polling API",
        description="Asynchronous work submission answered with 303 See Other and Retry-After",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.registry = registry or WorkRegistry(
        min_duration=settings.work_min_duration_seconds,
        max_duration=settings.work_max_duration_seconds,
        pending_retry_after=settings.work_pending_retry_after_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
    )

    app.add_middleware(
        BaseHTTPMiddleware,
        dispatch=create_metrics_middleware(),
    )

    app.include_router(health_router)
    app.include_router(work_router)

    instrument_fastapi(app)

    return app


def run() -> None:
    """Run the API server."""
    settings = get_settings()
    app = create_app()

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
