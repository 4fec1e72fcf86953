"""Raw HTTP response model shared by the transport, cache and executor."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from multidict import CIMultiDict, CIMultiDictProxy

PREVIEW_LIMIT = 512


def _freeze_headers(headers: Any) -> CIMultiDictProxy[str]:
    if isinstance(headers, CIMultiDictProxy):
        return headers
    if isinstance(headers, Mapping) or hasattr(headers, "items"):
        return CIMultiDictProxy(CIMultiDict(headers))
    return CIMultiDictProxy(CIMultiDict(headers or ()))


@dataclass(frozen=True)
class RawResponse:
    """A fully-read HTTP response.

    Headers are case-insensitive and keep repeated values (several ``Link``
    headers, for example) in arrival order.
    """

    url: str
    status: int
    headers: CIMultiDictProxy[str] = field(default_factory=lambda: _freeze_headers(()))
    body: bytes = b""
    reason: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze_headers(self.headers))

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400

    def header(self, name: str) -> str | None:
        return self.headers.get(name)

    def header_all(self, name: str) -> list[str]:
        return self.headers.getall(name, [])

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON (raises ValueError on malformed input)."""
        return json.loads(self.body)

    def preview(self, limit: int = PREVIEW_LIMIT) -> str:
        """Body text truncated for log output."""
        text = self.text()
        if len(text) <= limit:
            return text
        return f"{text[:limit]}... ({len(self.body)} bytes)"

    def __repr__(self) -> str:
        return f"RawResponse(status={self.status}, url={self.url!r}, bytes={len(self.body)})"
