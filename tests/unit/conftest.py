"""Shared fixtures for unit tests: an in-memory transport and response builder."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

import pytest

from octoloop.github.models import RawResponse
from octoloop.github.runtime import (
    RateLimitTracker,
    RequestExecutor,
    ResponseCache,
    auth_from_credentials,
)


def build_response(
    url: str,
    status: int = 200,
    body: Any = None,
    headers: dict[str, str] | list[tuple[str, str]] | None = None,
    raw: bytes | None = None,
) -> RawResponse:
    if raw is None:
        raw = b"" if body is None else json.dumps(body).encode()
    return RawResponse(url=url, status=status, headers=headers or {}, body=raw)


class FakeTransport:
    """Transport double answering from a per-URL script.

    Each route holds a list of outcomes consumed in order (the last one
    repeats). An outcome is a RawResponse, an exception to raise, or a
    coroutine function whose result is returned.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[Any]] = {}
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def add(self, url: str, *outcomes: Any) -> None:
        self.routes.setdefault(url, []).extend(outcomes)

    def urls(self) -> list[str]:
        return [call["url"] for call in self.calls]

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        auth: Any = None,
        json_body: Any = None,
    ) -> RawResponse:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers or {}),
                "auth": auth,
                "json": json_body,
                "time": asyncio.get_running_loop().time(),
            }
        )
        script = self.routes.get(url)
        if not script:
            raise AssertionError(f"Unexpected request {method} {url}")
        outcome = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return await outcome()
        return outcome

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_response() -> Callable[..., RawResponse]:
    """Factory for RawResponse objects with a JSON body."""
    return build_response


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def cache() -> ResponseCache:
    return ResponseCache(capacity=10)


@pytest.fixture
def tracker() -> RateLimitTracker:
    return RateLimitTracker()


@pytest.fixture
def executor(transport, cache, tracker) -> RequestExecutor:
    """Executor with token auth wired to the fake transport."""
    return RequestExecutor(
        transport,
        auth=lambda: auth_from_credentials(token="secret"),
        cache=cache,
        rate_limit=tracker,
    )
