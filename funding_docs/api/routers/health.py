"""
Liveness and registry database probes.

Routes: GET /health, GET /health/db

Dependencies: fastapi, sqlalchemy, funding_docs.boundary.db
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from funding_docs import __version__
from funding_docs.boundary.db import get_async_db
from funding_docs.models.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    return HealthResponse(status="healthy", message="Service is running", version=__version__)


@router.get(
    "/db",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}},
)
async def database_probe(db: AsyncSession = Depends(get_async_db)):
    """Run a trivial query against the document registry database."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:database_probe - Registry database unreachable: {e}")
        body = HealthResponse(status="unhealthy", message="Database unreachable", version=__version__)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump())
    return HealthResponse(status="healthy", message="Database reachable", version=__version__)
