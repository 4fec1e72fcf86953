"""Request execution and pagination runtime.

Architecture:
    - cache.py: LRU response cache for conditional GETs
    - rate_limit.py: observable rate limit state
    - http.py: aiohttp transport
    - executor.py: single-request policy (auth, cache, decode, errors)
    - gate.py: pacing of state-modifying calls
    - pending.py: registry of in-flight streams
    - pagination.py: Link-header pagination into cancellable item streams
    - telemetry.py: structured log events
"""

from __future__ import annotations

from .cache import ResponseCache
from .executor import AuthInfo, RequestExecutor, auth_from_credentials
from .gate import UpdateGate
from .http import HTTPClient, Transport
from .pagination import PageStream, Paginator, StreamState, parse_next_links
from .pending import PendingRequest, PendingRequestRegistry
from .rate_limit import RateLimitTracker

__all__ = [
    "AuthInfo",
    "HTTPClient",
    "PageStream",
    "Paginator",
    "PendingRequest",
    "PendingRequestRegistry",
    "RateLimitTracker",
    "RequestExecutor",
    "ResponseCache",
    "StreamState",
    "Transport",
    "UpdateGate",
    "auth_from_credentials",
    "parse_next_links",
]
