"""Core components."""

from .config import (
    DEFAULT_BASE_URI,
    DEFAULT_MIME_TYPE,
    FULL_MIME_TYPE,
    ClientConfig,
)
from .endpoints import DEFAULT_ENDPOINTS, EndpointCatalog, expand_template
from .exceptions import (
    AuthError,
    DecodeError,
    EndpointError,
    GithubError,
    ResponseError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from .validation import (
    is_valid_branch_name,
    is_valid_owner_name,
    validate_args,
    validate_branch_name,
    validate_owner_name,
    validate_repo_name,
)

__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URI",
    "DEFAULT_MIME_TYPE",
    "FULL_MIME_TYPE",
    # Endpoints
    "DEFAULT_ENDPOINTS",
    "EndpointCatalog",
    "expand_template",
    # Exceptions
    "GithubError",
    "ValidationError",
    "AuthError",
    "EndpointError",
    "TransportError",
    "ResponseError",
    "DecodeError",
    "UpstreamError",
    # Validation
    "validate_args",
    "validate_owner_name",
    "validate_repo_name",
    "validate_branch_name",
    "is_valid_owner_name",
    "is_valid_branch_name",
]
