"""Octoloop GitHub - asyncio client core for the GitHub REST API."""

from .client import GithubClient, raw_item
from .core import (
    DEFAULT_ENDPOINTS,
    AuthError,
    ClientConfig,
    DecodeError,
    EndpointCatalog,
    EndpointError,
    GithubError,
    ResponseError,
    TransportError,
    UpstreamError,
    ValidationError,
    validate_args,
    validate_branch_name,
    validate_owner_name,
    validate_repo_name,
)
from .models import (
    GithubObject,
    Observable,
    RateLimit,
    RateLimitSnapshot,
    RawResponse,
    Repository,
    User,
    model_factory,
)
from .runtime import (
    HTTPClient,
    PageStream,
    Paginator,
    PendingRequest,
    PendingRequestRegistry,
    RateLimitTracker,
    RequestExecutor,
    ResponseCache,
    StreamState,
    UpdateGate,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "GithubClient",
    "ClientConfig",
    "raw_item",
    # Endpoints
    "DEFAULT_ENDPOINTS",
    "EndpointCatalog",
    # Runtime
    "HTTPClient",
    "PageStream",
    "Paginator",
    "PendingRequest",
    "PendingRequestRegistry",
    "RateLimitTracker",
    "RequestExecutor",
    "ResponseCache",
    "StreamState",
    "UpdateGate",
    # Models
    "GithubObject",
    "Observable",
    "RateLimit",
    "RateLimitSnapshot",
    "RawResponse",
    "Repository",
    "User",
    "model_factory",
    # Validation
    "validate_args",
    "validate_owner_name",
    "validate_repo_name",
    "validate_branch_name",
    # Exceptions
    "GithubError",
    "ValidationError",
    "AuthError",
    "EndpointError",
    "TransportError",
    "ResponseError",
    "DecodeError",
    "UpstreamError",
]
