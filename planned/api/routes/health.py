"""
Health Check API Routes

Liveness/readiness and Prometheus metrics endpoints.
"""

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...core.config import settings
from ...core.observability import get_logger
from ..deps import SessionDep

logger = get_logger(__name__)
router = APIRouter()


@router.get("/health", summary="Liveness probe")
async def get_health() -> dict[str, str]:
    return {"status": "healthy", "service": settings.PROJECT_NAME}


@router.get("/health/ready", summary="Readiness probe")
async def get_readiness(session: SessionDep) -> JSONResponse:
    """Check that the database answers queries."""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Readiness check failed", error=str(e))
        return JSONResponse(
            content={"status": "unhealthy", "database": "unavailable"}, status_code=503
        )
    return JSONResponse(content={"status": "healthy", "database": "ok"})


@router.get("/metrics", summary="Prometheus metrics")
async def get_metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
