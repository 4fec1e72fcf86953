"""Structured logging for request execution and pagination.

Each helper emits one event name as the log message with the details in
``extra`` so log pipelines can index them. Logging never affects control flow.
"""

from __future__ import annotations

import logging

from ..models.response import RawResponse

logger = logging.getLogger(__name__)


def log_request(*, method: str, uri: str, conditional: bool = False) -> None:
    """Log an outgoing request.

    Args:
        method: HTTP method
        uri: Target URI
        conditional: Whether validators from the cache were attached
    """
    logger.debug(
        "request_sent",
        extra={"method": method, "uri": uri, "conditional": conditional},
    )


def log_response(*, method: str, uri: str, response: RawResponse, cached: bool = False) -> None:
    """Log a received response.

    Args:
        method: HTTP method
        uri: Target URI
        response: Raw response
        cached: Whether the cached copy was substituted (304)
    """
    logger.debug(
        "response_received",
        extra={
            "method": method,
            "uri": uri,
            "status": response.status,
            "bytes": len(response.body),
            "served_from_cache": cached,
        },
    )


def log_request_failed(
    *,
    method: str,
    uri: str,
    error_type: str,
    error_message: str,
    response: RawResponse | None = None,
) -> None:
    """Log a failed request with the response status and a truncated body.

    Args:
        method: HTTP method
        uri: Target URI
        error_type: Exception class name
        error_message: Exception message
        response: Raw response, if one was received
    """
    logger.error(
        "request_failed",
        extra={
            "method": method,
            "uri": uri,
            "error_type": error_type,
            "error_message": error_message,
            "status": response.status if response is not None else None,
            "body": response.preview() if response is not None else None,
        },
    )


def log_page_fetched(
    *,
    label: str,
    uri: str,
    page_index: int,
    items: int,
    has_next: bool,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page.

    Args:
        label: Stream label
        uri: Page URI
        page_index: Zero-based index of the page within the stream
        items: Number of items emitted from the page
        has_next: Whether a next-page link was found
        latency_ms: Fetch latency in milliseconds
    """
    logger.debug(
        "page_fetched",
        extra={
            "label": label,
            "uri": uri,
            "page_index": page_index,
            "items": items,
            "has_next": has_next,
            "latency_ms": latency_ms,
        },
    )


def log_stream_closed(*, label: str, state: str, pages: int, items: int) -> None:
    """Log a stream reaching its terminal state."""
    logger.info(
        "stream_closed",
        extra={"label": label, "state": state, "pages": pages, "items": items},
    )
