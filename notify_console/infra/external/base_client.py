"""Shared httpx plumbing for upstream API clients.

Subclasses get a pooled ``httpx.AsyncClient``, request/response logging and
retries with exponential backoff on transport errors. HTTP error statuses are
never retried; they surface as ``httpx.HTTPStatusError``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from notify_console.utils.retry import retry

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class BaseHTTPClient:
    """JSON-over-HTTP client base class.

    Example:
        ```python
        class RelayAppsClient(BaseHTTPClient):
            async def list_apps(self) -> dict:
                return await self.get("/admin/apps")

        async with RelayAppsClient("http://notify:8080", timeout=5.0) as client:
            apps = await client.list_apps()
        ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        retry_delay: float = 1.0,
    ) -> None:
        """
        Args:
            base_url: Root URL every request path is joined to.
            timeout: Per-request timeout in seconds.
            max_retries: Attempts per request, the first one included.
            headers: Headers sent with every request.
            transport: Transport override, ``httpx.MockTransport`` in tests.
            retry_delay: Delay before the first retry, doubled per attempt.
        """
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers or {},
            transport=transport,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=50),
        )
        self._send = retry(
            max_attempts=max_retries,
            initial_delay=retry_delay,
            max_delay=10.0,
            exceptions=RETRYABLE_ERRORS,
        )(self._send_once)

    async def __aenter__(self) -> BaseHTTPClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def _send_once(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self.client.request(method, path, **kwargs)
        logger.info(
            "%s %s%s -> %d",
            method,
            self.base_url,
            path,
            response.status_code,
            extra={"method": method, "path": path, "status_code": response.status_code},
        )
        return response

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode its JSON body; None for an empty body.

        Raises:
            httpx.HTTPStatusError: The response has a 4xx or 5xx status.
            RetryError: Every attempt failed with a transport error.
        """
        response = await self._send(method, path, **kwargs)
        response.raise_for_status()
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)
