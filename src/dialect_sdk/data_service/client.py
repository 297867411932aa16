"""HTTP transport for the Dialect Cloud REST API."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

import httpx

from ..auth.token_provider import TokenProvider
from ..errors import ApiError, AuthenticationError, RateLimitError

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 5


def parse_retry_after(value: Optional[str], default: int = DEFAULT_RETRY_AFTER) -> int:
    """Seconds to wait from a ``Retry-After`` header, delay-seconds or HTTP-date."""
    if value is None:
        return default
    try:
        return max(0, int(value))
    except ValueError:
        pass
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max(0, int((retry_at - datetime.now(timezone.utc)).total_seconds()))


class DataServiceClient:
    """
    Authenticated async client for Dialect Cloud.

    Every request carries a bearer token from the token provider. Rate
    limits and transport failures are retried with exponential backoff.
    A 401 discards the cached token so the next request signs a fresh
    one; other error responses are raised as ``ApiError``.

    Args:
        base_url: Dialect Cloud base URL
        token_provider: Source of auth tokens
        timeout: Request timeout in seconds (default: 30)
        max_retries: Maximum attempts per request (default: 3)
        retry_backoff: Base backoff in seconds, doubled per attempt
    """

    DEFAULT_TIMEOUT = 30
    DEFAULT_MAX_RETRIES = 3
    USER_AGENT = "dialect-sdk-python/0.1.0"

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_backoff: float = 1.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._retry_backoff = retry_backoff
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": self.USER_AGENT,
                },
                timeout=self._timeout,
            )
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Make an authenticated request with retry logic."""
        client = await self._get_client()
        token = await self._token_provider.get()
        headers = {"Authorization": f"Bearer {token.raw}"}

        for attempt in range(self._max_retries):
            last_attempt = attempt == self._max_retries - 1
            try:
                response = await client.request(
                    method=method,
                    url=path,
                    params=params,
                    json=json,
                    headers=headers,
                )
            except (httpx.TimeoutException, httpx.RequestError) as e:
                if last_attempt:
                    raise
                logger.warning("%s %s failed (%s), retrying", method, path, e)
                await asyncio.sleep(self._retry_backoff * 2 ** attempt)
                continue

            if response.status_code == 429:
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                if not last_attempt:
                    await asyncio.sleep(min(retry_after, self._retry_backoff * 2 ** attempt))
                    continue
                raise RateLimitError("Rate limit exceeded", retry_after=retry_after)

            if response.status_code == 401:
                self._token_provider.invalidate()
                raise AuthenticationError()

            if response.status_code >= 400:
                try:
                    body = response.json()
                except ValueError:
                    body = {"message": response.text}
                if not isinstance(body, dict):
                    body = {"message": body}
                raise ApiError.from_response(response.status_code, body)

            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, json=data)

    async def patch(self, path: str, data: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("PATCH", path, json=data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
