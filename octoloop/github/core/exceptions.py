"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.response import RawResponse


class GithubError(Exception):
    """Base exception for all library errors."""

    pass


class ValidationError(GithubError):
    """Malformed identifier supplied by the caller.

    Raised synchronously, before any network activity takes place.
    """

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class AuthError(GithubError):
    """No usable credential is configured."""

    pass


class EndpointError(GithubError):
    """Unknown endpoint name or unresolvable URI template."""

    pass


class TransportError(GithubError):
    """Network or connection failure while talking to the API."""

    def __init__(self, message: str, *, method: str, uri: str) -> None:
        super().__init__(message)
        self.method = method
        self.uri = uri


class ResponseError(GithubError):
    """Base for failures that carry the raw HTTP response."""

    def __init__(self, message: str, response: RawResponse) -> None:
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status


class DecodeError(ResponseError):
    """Successful status but the body could not be decoded."""

    def __init__(
        self,
        message: str,
        response: RawResponse,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, response)
        self.cause = cause


class UpstreamError(ResponseError):
    """API answered with an error status (4xx/5xx)."""

    pass
