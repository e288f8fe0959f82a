"""FastAPI application entrypoint."""

import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from .api.main import api_router
from .core.config import settings
from .core.observability import get_logger, set_correlation_id, setup_structured_logging
from .infrastructure.database.database import create_tables

setup_structured_logging()
logger = get_logger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id to every request and log its outcome."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(
            request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        )
        start_time = time.time()

        response = await call_next(request)

        response.headers["X-Correlation-ID"] = correlation_id
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_seconds=round(time.time() - start_time, 4),
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    if settings.ENVIRONMENT == "local":
        await create_tables()
    logger.info(
        "Application started",
        project_name=settings.PROJECT_NAME,
        environment=settings.ENVIRONMENT,
        cron_enabled=settings.cron_enabled,
    )
    yield
    logger.info("Shutting down application")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Integration sync core of planned.: Asana and TimeTac synchronization.",
    version="0.1.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)
app.add_middleware(CorrelationIdMiddleware)
app.include_router(api_router, prefix=settings.API_PREFIX)
