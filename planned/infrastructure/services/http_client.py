"""
Shared async HTTP plumbing for the integration adapters.

Each logical request runs inside a tenacity retry loop; transient responses
(429/5xx) are turned into ``RetryableHttpError`` so the retry policy can see
them, everything else is mapped to a service specific error by the subclass.
"""

import asyncio
import time
from typing import Any

import httpx

from ...core.config import settings
from ...core.observability import get_logger, record_api_request
from ...core.resilience import (
    RETRYABLE_STATUS_CODES,
    RetryConfig,
    build_retrying,
    parse_retry_after,
)
from ...domain.shared.exceptions import ExternalServiceError, RetryableHttpError

logger = get_logger(__name__)


class BaseApiClient:
    """Base class for JSON REST clients with retry and optional throttling."""

    service_name = "external"

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        retry_config: RetryConfig | None = None,
        min_request_interval: float = 0.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self._retry_config = retry_config or RetryConfig()
        self._min_request_interval = min_request_interval
        self._transport = transport
        self._throttle_lock = asyncio.Lock()
        self._last_request_at = 0.0

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _throttle(self) -> None:
        if self._min_request_interval <= 0:
            return
        async with self._throttle_lock:
            elapsed = time.monotonic() - self._last_request_at
            if elapsed < self._min_request_interval:
                await asyncio.sleep(self._min_request_interval - elapsed)
            self._last_request_at = time.monotonic()

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Map a non-retryable error response to a domain error."""
        raise ExternalServiceError(
            f"{self.service_name} API error: {response.status_code}",
            self.service_name,
            response.status_code,
        )

    async def _send(
        self,
        method: str,
        url: str,
        token: str | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Send one request with throttling, retries and error mapping.

        Args:
            method: HTTP method
            url: Absolute URL or path relative to the base URL
            token: Bearer token, if any
            params: Query parameters
            json: JSON body
            data: Form-encoded body

        Returns:
            Successful response

        Raises:
            RetryableHttpError: If the retries are exhausted on a transient status
            ExternalServiceError: On any other error status
            httpx.TransportError: If the network keeps failing
        """
        if not url.startswith("http"):
            url = f"{self._base_url}/{url.lstrip('/')}"

        async for attempt in build_retrying(self._retry_config):
            with attempt:
                await self._throttle()
                async with self._client() as client:
                    response = await client.request(
                        method,
                        url,
                        headers=self._headers(token),
                        params=params,
                        json=json,
                        data=data,
                    )
                record_api_request(self.service_name, response.status_code)

                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise RetryableHttpError(
                        f"{self.service_name} API returned {response.status_code}",
                        self.service_name,
                        response.status_code,
                        parse_retry_after(response.headers.get("Retry-After")),
                    )
                if response.is_error:
                    logger.warning(
                        "External API request failed",
                        service=self.service_name,
                        method=method,
                        url=url,
                        status_code=response.status_code,
                    )
                    self._raise_for_error(response)
                return response

        raise AssertionError("unreachable")  # pragma: no cover

    async def _get_json(
        self, path: str, token: str | None, params: dict[str, Any] | None = None
    ) -> Any:
        response = await self._send("GET", path, token=token, params=params)
        return response.json()
