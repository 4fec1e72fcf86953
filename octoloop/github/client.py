"""GitHub REST API client.

The client owns every piece of per-client state and creates each one on first
use: response cache, rate limit tracker, HTTP transport, request executor,
update gate, pending request registry and paginator. Nothing is process-wide;
two clients never share a cache or rate limit state.

Reads go straight through the executor (at most ``connections_per_host``
connections at once). State-modifying calls additionally pass through the
UpdateGate, one at a time and at least ``update_interval`` seconds apart.

Example:
    >>> async with GithubClient(token="...") as gh:
    ...     async for repo in gh.repos():
    ...         print(repo.full_name)
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from .core.config import FULL_MIME_TYPE, ClientConfig
from .core.endpoints import EndpointCatalog
from .core.exceptions import ValidationError
from .core.validation import validate_args
from .models.base import ClientRef, GithubObject, ItemFactory, model_factory
from .models.rate_limit import RateLimit
from .models.repository import Repository
from .models.response import RawResponse
from .models.user import User
from .runtime.cache import ResponseCache
from .runtime.executor import AuthInfo, RequestExecutor, auth_from_credentials
from .runtime.gate import UpdateGate
from .runtime.http import HTTPClient, Transport
from .runtime.pagination import PageStream, Paginator
from .runtime.pending import PendingRequestRegistry
from .runtime.rate_limit import RateLimitTracker

logger = logging.getLogger(__name__)

T = TypeVar("T")


def raw_item(data: Any, extra: Mapping[str, Any], client_ref: ClientRef) -> Any:
    """Default item factory.

    JSON objects become a GithubObject carrying every field, the extra fields
    and the client back-reference. Other elements are returned unchanged.
    """
    if isinstance(data, Mapping):
        return GithubObject.from_api(data, extra, client_ref)
    return data


def _require(**kwargs: Any) -> None:
    for name, value in kwargs.items():
        if value is None or value == "":
            raise ValidationError(f"needs {name}", field=name, value=value)


async def _transform(
    fetch: Awaitable[tuple[Any, RawResponse]], build: Callable[[Any], T] | None = None
) -> Any:
    data, _ = await fetch
    return build(data) if build is not None else data


class GithubClient:
    """Asynchronous client for the GitHub REST API (v3)."""

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        endpoints: EndpointCatalog | Mapping[str, str] | None = None,
        http: Transport | None = None,
        **settings: Any,
    ) -> None:
        """Initialize client.

        Args:
            config: Full configuration; keyword ``settings`` override its fields
            endpoints: Endpoint catalog or ``name -> URI template`` mapping
            http: Transport to use instead of the default aiohttp client
            **settings: ClientConfig fields (token, api_key, page_cache_size, ...)
        """
        if config is None:
            config = ClientConfig(**settings)
        elif settings:
            config = ClientConfig(**{**config.model_dump(), **settings})
        self.config = config

        self._endpoints_arg = endpoints
        self._endpoints: EndpointCatalog | None = None
        self._http = http
        self._owns_http = http is None

        self._page_cache: ResponseCache | None = None
        self._core_rate_limit: RateLimitTracker | None = None
        self._executor: RequestExecutor | None = None
        self._update_gate: UpdateGate | None = None
        self._pending_requests: PendingRequestRegistry | None = None
        self._paginator: Paginator | None = None
        self._closed = False

    # ----------------------
    # Configuration accessors
    # ----------------------
    @property
    def api_key(self) -> str | None:
        return self.config.api_key

    @property
    def token(self) -> str | None:
        return self.config.token

    @property
    def mime_type(self) -> str:
        return self.config.mime_type

    @property
    def base_uri(self) -> str:
        return self.config.base_uri

    @property
    def page_cache_size(self) -> int:
        return self.config.page_cache_size

    @property
    def closed(self) -> bool:
        return self._closed

    def auth_info(self) -> AuthInfo:
        """Authentication applied to every request.

        Raises:
            AuthError: If neither api_key nor token is configured
        """
        return auth_from_credentials(api_key=self.api_key, token=self.token)

    # ----------------------
    # Lazily created state
    # ----------------------
    @property
    def endpoints(self) -> EndpointCatalog:
        if self._endpoints is None:
            if isinstance(self._endpoints_arg, EndpointCatalog):
                self._endpoints = self._endpoints_arg
            else:
                self._endpoints = EndpointCatalog(self._endpoints_arg, base_uri=self.base_uri)
        return self._endpoints

    def endpoint(self, name: str, **variables: Any) -> str:
        """Expand the named endpoint template into an absolute URI."""
        return self.endpoints.resolve(name, **variables)

    @property
    def http(self) -> Transport:
        if self._http is None:
            self._http = HTTPClient(
                timeout=self.config.timeout,
                connections_per_host=self.config.connections_per_host,
                user_agent=self.config.user_agent,
            )
        return self._http

    @property
    def page_cache(self) -> ResponseCache:
        if self._page_cache is None:
            self._page_cache = ResponseCache(self.page_cache_size)
        return self._page_cache

    @property
    def core_rate_limit(self) -> RateLimitTracker:
        if self._core_rate_limit is None:
            self._core_rate_limit = RateLimitTracker()
        return self._core_rate_limit

    @property
    def executor(self) -> RequestExecutor:
        if self._executor is None:
            self._executor = RequestExecutor(
                self.http,
                auth=self.auth_info,
                cache=self.page_cache,
                rate_limit=self.core_rate_limit,
                mime_type=self.mime_type,
            )
        return self._executor

    @property
    def update_gate(self) -> UpdateGate:
        if self._update_gate is None:
            self._update_gate = UpdateGate(self.config.update_interval)
        return self._update_gate

    @property
    def pending_requests(self) -> PendingRequestRegistry:
        if self._pending_requests is None:
            self._pending_requests = PendingRequestRegistry()
        return self._pending_requests

    @property
    def paginator(self) -> Paginator:
        if self._paginator is None:
            self._paginator = Paginator(
                self.executor,
                registry=self.pending_requests,
                client_ref=weakref.ref(self),
            )
        return self._paginator

    # ----------------------
    # Request primitives
    # ----------------------
    def validate_args(self, **kwargs: Any) -> None:
        """Validate owner/repo/branch parameters (raises ValidationError)."""
        validate_args(**kwargs)

    def http_get(
        self, uri: str, *, headers: Mapping[str, str] | None = None
    ) -> Awaitable[tuple[Any, RawResponse]]:
        """GET a URI; resolves to (decoded body, raw response)."""
        return self.executor.get(uri, headers=headers)

    def api_get_list(
        self,
        *,
        endpoint: str | None = None,
        uri: str | None = None,
        endpoint_args: Mapping[str, Any] | None = None,
        factory: ItemFactory | None = None,
        extra: Mapping[str, Any] | None = None,
        label: str | None = None,
    ) -> PageStream:
        """Stream every item of a paginated listing.

        Args:
            endpoint: Endpoint catalog name to start from
            uri: Path (relative to base_uri) or absolute URI, if no endpoint
            endpoint_args: Template variables for ``endpoint``
            factory: Builds an item from (element, extra, client_ref)
            extra: Static fields merged into every item
            label: Name used in logs and the pending request registry
        """
        if endpoint:
            start = self.endpoint(endpoint, **(endpoint_args or {}))
            label = label or f"Github[{endpoint}]"
        elif uri:
            start = f"{self.base_uri}{uri}" if uri.startswith("/") else uri
            label = label or f"Github[{uri}]"
        else:
            raise ValidationError("needs endpoint or uri", field="endpoint")
        return self.paginator.paginate(start, factory or raw_item, extra=extra, label=label)

    async def modify(
        self,
        method: str,
        uri: str,
        *,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a state-modifying request through the update gate."""
        async with self.update_gate.slot():
            data, _ = await self.executor.send(method, uri, json_body=json_body, headers=headers)
        return data

    # ----------------------
    # Endpoint operations
    # ----------------------
    def current_user(self) -> Awaitable[User]:
        """The authenticated user."""
        return _transform(
            self.http_get(self.endpoint("current_user")),
            lambda data: User.from_api(data, client_ref=weakref.ref(self)),
        )

    def repos(self, **endpoint_args: Any) -> PageStream:
        """Repositories of the authenticated user, as a stream of Repository."""
        return self.api_get_list(
            endpoint="current_user_repositories",
            endpoint_args=endpoint_args,
            factory=model_factory(Repository),
        )

    def rate_limit(self) -> Awaitable[RateLimit]:
        """Full rate limit status across all resources."""
        return _transform(self.http_get(self.endpoint("rate_limit")), RateLimit.model_validate)

    async def refresh_core_rate_limit(self) -> RateLimitTracker:
        """Populate ``core_rate_limit`` from the rate_limit endpoint."""

        async def fetch() -> Any:
            data, _ = await self.http_get(self.endpoint("rate_limit"))
            return data

        await self.core_rate_limit.refresh(fetch)
        return self.core_rate_limit

    def pr(self, *, owner: str, repo: str, id: int | str) -> Awaitable[Any]:
        """Information about a pull request."""
        _require(owner=owner, repo=repo, id=id)
        self.validate_args(owner=owner, repo=repo)
        uri = self.endpoint("pull_request", owner=owner, repo=repo, id=id)
        return _transform(self.http_get(uri, headers={"Accept": FULL_MIME_TYPE}))

    def head(self, *, owner: str, repo: str, branch: str) -> Awaitable[Any]:
        """The ref (head commit) of a branch."""
        _require(owner=owner, repo=repo, branch=branch)
        self.validate_args(owner=owner, repo=repo, branch=branch)
        uri = self.endpoint("branch_head", owner=owner, repo=repo, branch=branch)
        return _transform(self.http_get(uri, headers={"Accept": FULL_MIME_TYPE}))

    def reopen(self, *, owner: str, repo: str, id: int | str) -> Awaitable[Any]:
        """Reopen a pull request."""
        _require(owner=owner, repo=repo, id=id)
        self.validate_args(owner=owner, repo=repo)
        self.auth_info()
        uri = self.endpoint("pull_request", owner=owner, repo=repo, id=id)
        return self.modify(
            "PATCH", uri, json_body={"state": "open"}, headers={"Accept": FULL_MIME_TYPE}
        )

    def update(self, *, owner: str, repo: str, branch: str, head: str) -> Awaitable[Any]:
        """Merge ``head`` into ``branch``."""
        _require(owner=owner, repo=repo, branch=branch, head=head)
        self.validate_args(owner=owner, repo=repo, branch=branch)
        self.auth_info()
        uri = self.endpoint("merges", owner=owner, repo=repo)
        return self.modify(
            "POST",
            uri,
            json_body={
                "head": head,
                "base": branch,
                "commit_message": f"Merge branch 'master' into {branch}",
            },
            headers={"Accept": FULL_MIME_TYPE},
        )

    # ----------------------
    # Lifecycle
    # ----------------------
    async def close(self) -> None:
        """Cancel pending streams and close the transport we created."""
        if self._closed:
            return
        self._closed = True
        if self._pending_requests is not None:
            streams = [entry.stream for entry in self._pending_requests if entry.stream]
            self._pending_requests.cancel_all()
            for stream in streams:
                await stream.aclose()
        if self._http is not None and self._owns_http:
            await self._http.close()
        logger.debug("GithubClient closed")

    async def __aenter__(self) -> GithubClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
