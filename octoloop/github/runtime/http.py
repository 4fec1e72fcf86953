"""HTTP transport."""

from __future__ import annotations

from typing import Any, Protocol

import aiohttp

from ..models.response import RawResponse


class Transport(Protocol):
    """Contract for the HTTP layer used by the executor.

    Implementations must return fully-read responses for every status code
    (never raise on 4xx/5xx), raise ``aiohttp.ClientError`` or
    ``asyncio.TimeoutError`` on network failure, and abort cleanly when the
    awaiting task is cancelled.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: aiohttp.BasicAuth | None = None,
        json_body: Any = None,
    ) -> RawResponse: ...

    async def close(self) -> None: ...


class HTTPClient:
    """Async HTTP client wrapper around a lazily created aiohttp session."""

    def __init__(
        self,
        timeout: float = 60.0,
        *,
        connections_per_host: int = 4,
        user_agent: str | None = None,
    ) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.connections_per_host = connections_per_host
        self.user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            headers = {"User-Agent": self.user_agent} if self.user_agent else None
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers=headers,
                connector=aiohttp.TCPConnector(limit_per_host=self.connections_per_host),
            )
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: aiohttp.BasicAuth | None = None,
        json_body: Any = None,
    ) -> RawResponse:
        """Send a request and read the whole body."""
        async with self.session.request(
            method,
            url,
            headers=headers,
            auth=auth,
            json=json_body,
        ) as response:
            body = await response.read()
            return RawResponse(
                url=str(response.url),
                status=response.status,
                headers=response.headers,
                body=body,
                reason=response.reason,
            )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
