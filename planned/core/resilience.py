"""
Retry policy for outbound integration calls.

Wraps tenacity so that HTTP adapters retry rate limits, server errors and
transport failures with exponential backoff, honouring ``Retry-After`` when
the remote service sends one.
"""

from dataclasses import dataclass

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..domain.shared.exceptions import RetryableHttpError
from .config import settings
from .observability import get_logger

logger = get_logger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503})


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = settings.HTTP_MAX_RETRIES
    base_delay_seconds: float = settings.HTTP_RETRY_BASE_DELAY_SECONDS
    max_delay_seconds: float = 30.0
    exponential_base: int = 2


class wait_retry_after_or_exponential:
    """Use the server's Retry-After hint when present, else exponential backoff."""

    def __init__(self, config: RetryConfig) -> None:
        self._fallback = wait_exponential(
            multiplier=config.base_delay_seconds,
            max=config.max_delay_seconds,
            exp_base=config.exponential_base,
        )
        self._max = config.max_delay_seconds

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            exc = outcome.exception()
            if isinstance(exc, RetryableHttpError) and exc.retry_after is not None:
                return min(exc.retry_after, self._max)
        return self._fallback(retry_state)


def _log_before_sleep(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying external API call",
        attempt=retry_state.attempt_number,
        wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
        error=str(exc),
        error_type=type(exc).__name__,
    )


def build_retrying(config: RetryConfig) -> AsyncRetrying:
    """Create a tenacity controller for one logical request."""
    return AsyncRetrying(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_retry_after_or_exponential(config),
        retry=retry_if_exception_type((RetryableHttpError, httpx.TransportError)),
        before_sleep=_log_before_sleep,
        reraise=True,
    )


def parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None
