"""
ASGI entry point for the funding document service.

    uvicorn funding_docs.main:app

Dependencies: fastapi, uvicorn, funding_docs.api, funding_docs.observability
System role: Application assembly
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from funding_docs import __version__
from funding_docs.api import api_router
from funding_docs.boundary.db import create_tables, get_async_engine
from funding_docs.configs import get_settings
from funding_docs.observability.logger import configure_logging
from funding_docs.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, prepare a SQLite schema if needed, dispose the engine on exit."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        f"{__name__}:lifespan - Starting funding-docs {__version__}",
        extra={"environment": settings.environment},
    )

    if settings.database.is_sqlite:
        # Postgres schemas are managed outside the service
        await create_tables()
        logger.info(f"{__name__}:lifespan - SQLite tables created")

    try:
        yield
    finally:
        await get_async_engine().dispose()
        logger.info(f"{__name__}:lifespan - Engine disposed")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Funding Document Ingestion API",
        description="Upload, OCR and index political funding reports",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Starlette runs the last added middleware first
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(CorrelationMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    application.include_router(api_router, prefix=API_PREFIX)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("funding_docs.main:app", host="0.0.0.0", port=8000)
