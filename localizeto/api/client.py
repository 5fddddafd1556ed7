"""Thin async HTTP transport for the localize.to REST API.

Every call returns the decoded JSON body.  The HTTP status code is not
inspected: the API reports logical failures as ``{"error": "..."}``
bodies and those must reach the loader intact.  Anything that prevents
getting a JSON body out of the server is raised as ``TransportError``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import httpx

from localizeto.core.errors import TransportError

logger = logging.getLogger(__name__)

BASE_URL = "https://localize.to/api"

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
}


class LocalizeClient:
    """Facade over a shared ``httpx.AsyncClient``.

    Args:
        base_url: Prefix for relative URLs (no trailing slash).
        timeout: Request timeout in seconds.
        headers: Extra headers merged over ``DEFAULT_HEADERS``.
        client: Pre-built ``httpx.AsyncClient``; the caller keeps
            ownership and must close it.
        transport: Custom httpx transport (e.g. ``httpx.MockTransport``)
            for the internally created client.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_url(self, url: str) -> str:
        """Absolute URLs pass through; anything else is joined to the base."""
        return url if url.startswith("http") else self._base_url + url

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP verb.
            url: Absolute URL or path relative to the base URL.
            body: JSON-serialisable request body, omitted when ``None``.
            params: Query string parameters.
            headers: Per-call headers merged over the client defaults.

        Raises:
            TransportError: Network failure or a body that is not JSON.
        """
        full_url = self.build_url(url)
        merged = {**self._headers, **(headers or {})}
        started = time.monotonic()
        try:
            response = await self._client.request(
                method,
                full_url,
                params=params,
                headers=merged,
                json=body,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {full_url} failed: {exc}") from exc

        latency_ms = int((time.monotonic() - started) * 1000)
        logger.debug(
            "%s %s -> %s",
            method,
            full_url,
            response.status_code,
            extra={
                "event": "http_request",
                "method": method,
                "url": full_url,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
            },
        )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {full_url} returned a non-JSON body "
                f"(status {response.status_code})"
            ) from exc

    async def get(self, url: str, **kwargs: Any) -> Any:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", url, body=body, **kwargs)

    async def patch(self, url: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PATCH", url, body=body, **kwargs)

    async def put(self, url: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", url, body=body, **kwargs)

    async def delete(self, url: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("DELETE", url, body=body, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> LocalizeClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
