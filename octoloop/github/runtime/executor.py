"""Request execution: auth, conditional GET, decoding and error classification.

Request Flow (GET):
    1. Resolve auth (fails synchronously with AuthError if none configured)
    2. Attach If-None-Match / If-Modified-Since from the cached copy, if any
    3. Send through the transport (network failure -> TransportError)
    4. Update the rate limit tracker from response headers (any status)
    5. 304 with a cached copy -> substitute the cached response
    6. 2xx -> store in the cache
    7. 204 / 3xx -> ({}, response) without decoding
    8. >= 400 -> UpstreamError
    9. Decode JSON (failure -> DecodeError)

Non-GET requests follow the same path without touching the cache.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ..core.config import DEFAULT_MIME_TYPE
from ..core.exceptions import AuthError, DecodeError, TransportError, UpstreamError
from ..models.response import RawResponse
from .cache import ResponseCache
from .http import Transport
from .rate_limit import RateLimitTracker
from .telemetry import log_request, log_request_failed, log_response

logger = logging.getLogger(__name__)

Result = tuple[Any, RawResponse]


@dataclass(frozen=True)
class AuthInfo:
    """Credentials to apply to a request: basic auth or extra headers."""

    basic: aiohttp.BasicAuth | None = None
    headers: dict[str, str] = field(default_factory=dict)


def auth_from_credentials(api_key: str | None = None, token: str | None = None) -> AuthInfo:
    """Build AuthInfo, preferring the api key (basic auth, empty password).

    Raises:
        AuthError: If neither credential is configured
    """
    if api_key:
        return AuthInfo(basic=aiohttp.BasicAuth(api_key, ""))
    if token:
        return AuthInfo(headers={"Authorization": f"token {token}"})
    raise AuthError("need some form of auth, try passing a token or api_key")


class RequestExecutor:
    """Executes single requests against the API."""

    def __init__(
        self,
        transport: Transport,
        *,
        auth: Callable[[], AuthInfo],
        cache: ResponseCache | None = None,
        rate_limit: RateLimitTracker | None = None,
        mime_type: str = DEFAULT_MIME_TYPE,
    ) -> None:
        """Initialize executor.

        Args:
            transport: HTTP transport
            auth: Callable returning the AuthInfo for each request
            cache: Optional response cache for conditional GETs
            rate_limit: Optional tracker updated from every response
            mime_type: Default Accept header
        """
        self._transport = transport
        self._auth = auth
        self._cache = cache
        self._rate_limit = rate_limit
        self._mime_type = mime_type

    @property
    def cache(self) -> ResponseCache | None:
        return self._cache

    @property
    def rate_limit(self) -> RateLimitTracker | None:
        return self._rate_limit

    def auth_info(self) -> AuthInfo:
        """Resolve credentials for a request (raises AuthError if none)."""
        return self._auth()

    def _build_headers(self, auth: AuthInfo, headers: Mapping[str, str] | None) -> dict[str, str]:
        merged = {"Accept": self._mime_type}
        merged.update(auth.headers)
        if headers:
            merged.update(headers)
        return merged

    def get(self, uri: Any, *, headers: Mapping[str, str] | None = None) -> Awaitable[Result]:
        """Perform a GET request.

        Auth is resolved before the coroutine is created, so a missing
        credential raises AuthError at call time with no network activity.

        Returns:
            Awaitable resolving to (decoded body, raw response)
        """
        auth = self._auth()
        return self._execute("GET", str(uri), self._build_headers(auth, headers), auth.basic, None)

    def send(
        self,
        method: str,
        uri: Any,
        *,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Awaitable[Result]:
        """Perform a request with an arbitrary method (POST, PATCH, ...)."""
        auth = self._auth()
        return self._execute(
            method.upper(), str(uri), self._build_headers(auth, headers), auth.basic, json_body
        )

    async def _execute(
        self,
        method: str,
        uri: str,
        headers: dict[str, str],
        basic: aiohttp.BasicAuth | None,
        json_body: Any,
    ) -> Result:
        cached: RawResponse | None = None
        if method == "GET" and self._cache is not None:
            cached = self._cache.get(uri)
            if cached is not None:
                if etag := cached.header("ETag"):
                    headers["If-None-Match"] = etag
                if last_modified := cached.header("Last-Modified"):
                    headers["If-Modified-Since"] = last_modified

        log_request(method=method, uri=uri, conditional=cached is not None)
        try:
            response = await self._transport.request(
                method, uri, headers=headers, auth=basic, json_body=json_body
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log_request_failed(
                method=method, uri=uri, error_type=type(e).__name__, error_message=str(e)
            )
            raise TransportError(f"{method} {uri} failed: {e}", method=method, uri=uri) from e

        if self._rate_limit is not None:
            self._rate_limit.update_from_headers(response.headers)

        from_cache = False
        if cached is not None and response.status == 304:
            response = cached
            from_cache = True
        elif method == "GET" and response.ok and self._cache is not None:
            logger.debug(f"Caching [{uri}] with {len(response.body)} byte response")
            self._cache.set(uri, response)

        log_response(method=method, uri=uri, response=response, cached=from_cache)

        if response.status == 204 or response.is_redirect:
            return {}, response

        if response.status >= 400:
            error = UpstreamError(f"{method} {uri} returned HTTP {response.status}", response)
            log_request_failed(
                method=method,
                uri=uri,
                error_type=type(error).__name__,
                error_message=str(error),
                response=response,
            )
            raise error

        try:
            data = response.json()
        except ValueError as e:
            log_request_failed(
                method=method,
                uri=uri,
                error_type="DecodeError",
                error_message=f"JSON decoding error {e}",
                response=response,
            )
            raise DecodeError(f"JSON decoding error from {uri}: {e}", response, e) from e
        return data, response
