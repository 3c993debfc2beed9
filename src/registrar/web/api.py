"""FastAPI application factory.

Main entry point for the Registrar Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from registrar import __version__
from registrar.config.app_config import AppConfig, load_app_config
from registrar.web.routes import (
    analytics_router,
    courses_router,
    enrollments_router,
    health_router,
    reports_router,
    students_router,
)
from registrar.web.state import RecordsStore

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    with app.state.records_store.session() as records:
        logger.info(
            "api_startup",
            students=len(records.registry),
            courses=len(records.catalog),
            enrollments=len(records.engine),
        )
    yield


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Limits and ID offsets; loaded from the config file if None

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Registrar API",
        description="Web API for the academic records system",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.records_store = RecordsStore(config or load_app_config())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(students_router)
    app.include_router(courses_router)
    app.include_router(enrollments_router)
    app.include_router(analytics_router)
    app.include_router(reports_router)

    return app


# Default app instance for uvicorn
app = create_app()
