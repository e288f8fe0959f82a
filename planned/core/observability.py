"""
Observability Infrastructure

Structured logging with correlation ids and Prometheus metrics for sync runs
and outbound API calls.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog
from prometheus_client import Counter, Histogram

from .config import settings

# Context variables for correlation tracking
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

# Prometheus metrics
SYNC_RUNS = Counter(
    "planned_sync_runs_total",
    "Total sync runs",
    ["service", "operation", "status"],
)

SYNC_DURATION = Histogram(
    "planned_sync_run_duration_seconds",
    "Sync run duration",
    ["service", "operation"],
)

SYNC_ITEM_ERRORS = Counter(
    "planned_sync_item_errors_total",
    "Per-item failures accumulated during sync runs",
    ["service", "operation"],
)

EXTERNAL_API_REQUESTS = Counter(
    "planned_external_api_requests_total",
    "Outbound requests to integration APIs",
    ["service", "status"],
)


class CorrelationIdProcessor:
    """Structlog processor to add the correlation id to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        if correlation_id:
            event_dict["correlation_id"] = correlation_id

        return event_dict


def setup_structured_logging() -> None:
    """Configure structured logging with JSON or console output."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    return correlation_id_var.get("")


def record_sync_run(service: str, operation: str, status: str, duration: float) -> None:
    """Record the outcome of one sync run."""
    SYNC_RUNS.labels(service=service, operation=operation, status=status).inc()
    SYNC_DURATION.labels(service=service, operation=operation).observe(duration)


def record_item_error(service: str, operation: str) -> None:
    SYNC_ITEM_ERRORS.labels(service=service, operation=operation).inc()


def record_api_request(service: str, status: int | str) -> None:
    EXTERNAL_API_REQUESTS.labels(service=service, status=str(status)).inc()
