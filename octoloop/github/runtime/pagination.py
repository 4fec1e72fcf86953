"""Link-header pagination as a cancellable asynchronous item stream.

Architecture:
    A PageStream owns one producer task and an item queue. The producer keeps
    a FIFO of page URIs seeded with the start URI and, for each page:

    1. fetches it through the RequestExecutor
    2. enqueues every ``<URL>; rel="next"`` found in the Link headers
    3. builds one item per element of the decoded JSON array, in array order,
       and puts it on the item queue

    The queue holds at most one page. The producer fetches the next page only
    once the consumer has taken every item of the current page and asks for
    another. Past the first page nothing is fetched ahead of demand.

    The consumer reads items with ``async for``. Terminal states:

    - finished: the page FIFO is exhausted without failure
    - failed: a page fetch (or item construction) raised; the remaining FIFO
      is abandoned and the error is raised to the consumer once it has read
      the items emitted before the failure
    - cancelled: the consumer lost interest (``cancel()``/``aclose()``/
      leaving ``async with``); the in-flight page fetch is cancelled and
      iteration ends without an error. Items already emitted stay readable.

    Every stream is tracked in the PendingRequestRegistry from start until its
    producer task completes. Leaving an ``async for`` with ``break`` stops
    further fetches but keeps the stream registered; use ``async with`` or
    ``aclose()`` to release it.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections import deque
from collections.abc import Mapping
from enum import Enum
from time import perf_counter
from typing import Any

from ..core.exceptions import DecodeError
from ..models.base import ClientRef, ItemFactory
from ..models.response import RawResponse
from .cache import ResponseCache
from .executor import RequestExecutor
from .pending import PendingRequest, PendingRequestRegistry
from .telemetry import log_page_fetched, log_stream_closed

logger = logging.getLogger(__name__)

_NEXT_LINK = re.compile(r'<([^>]+)>\s*;\s*rel="next"', re.IGNORECASE)
_LINK_SPLIT = re.compile(r"\s*,\s*(?=<)")

_END = object()


def _no_client() -> None:
    return None


def parse_next_links(response: RawResponse) -> list[str]:
    """Extract next-page URLs from all Link headers of a response.

    Example header:
        Link: <https://api.github.com/user/repos?page=2>; rel="next"
    """
    links: list[str] = []
    for header in response.header_all("Link"):
        for part in _LINK_SPLIT.split(header.strip()):
            match = _NEXT_LINK.search(part)
            if match:
                links.append(match.group(1))
    return links


class StreamState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in (StreamState.FINISHED, StreamState.FAILED, StreamState.CANCELLED)


class PageStream:
    """Lazy, finite, non-restartable stream of items built from paginated pages."""

    def __init__(
        self,
        executor: RequestExecutor,
        start_uri: str,
        factory: ItemFactory,
        *,
        extra: Mapping[str, Any] | None = None,
        client_ref: ClientRef | None = None,
        label: str | None = None,
        registry: PendingRequestRegistry | None = None,
    ) -> None:
        self._executor = executor
        self._start_uri = str(start_uri)
        self._factory = factory
        self._extra = dict(extra or {})
        self._client_ref = client_ref or _no_client
        self._label = label or f"PageStream[{self._start_uri}]"
        self._registry = registry

        self._pending: deque[str] = deque([self._start_uri])
        # normalized keys of every page fetched or queued
        self._seen: set[str] = {ResponseCache.normalize_key(self._start_uri)}
        self._items: asyncio.Queue[Any] = asyncio.Queue()
        self._done = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self._state = StreamState.PENDING
        self._error: BaseException | None = None
        self._error_raised = False
        self._handed_out = False

        self.pages_fetched = 0
        self.items_emitted = 0

    @property
    def label(self) -> str:
        return self._label

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    @property
    def done(self) -> bool:
        return self._state.terminal

    # ----------------------
    # Lifecycle
    # ----------------------
    def start(self) -> PageStream:
        """Start fetching pages; idempotent. Requires a running event loop."""
        if self._task is not None or self._state is not StreamState.PENDING:
            return self
        loop = asyncio.get_running_loop()
        self._state = StreamState.RUNNING
        self._task = loop.create_task(self._run(), name=self._label)
        if self._registry is not None:
            registry = self._registry
            request_id = id(self)
            registry.add(
                PendingRequest(
                    id=request_id,
                    stream=self,
                    uri=self._start_uri,
                    task=self._task,
                    label=self._label,
                )
            )
            self._task.add_done_callback(lambda _t: registry.remove(request_id))
        return self

    def cancel(self) -> bool:
        """Signal disinterest; cancels the in-flight page fetch.

        Returns:
            False if the stream had already reached a terminal state
        """
        if self._state.terminal:
            return False
        if self._task is not None and not self._task.done():
            logger.debug(f"Finishing HTTP request early for {self._label}, stream cancelled")
            self._task.cancel()
        self._finish(StreamState.CANCELLED)
        return True

    async def aclose(self) -> None:
        """Cancel the stream and wait for the producer task to wind down."""
        self.cancel()
        if self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def wait_closed(self) -> StreamState:
        """Wait until the stream reaches a terminal state."""
        await self._done.wait()
        return self._state

    def _finish(self, state: StreamState) -> None:
        if self._state.terminal:
            return
        self._state = state
        self._items.put_nowait(_END)
        self._done.set()
        log_stream_closed(
            label=self._label,
            state=state.value,
            pages=self.pages_fetched,
            items=self.items_emitted,
        )

    # ----------------------
    # Producer
    # ----------------------
    def _enqueue(self, uri: str) -> None:
        key = ResponseCache.normalize_key(uri)
        if key in self._seen:
            logger.warning(f"{self._label}: skipping repeated page link {uri}")
            return
        self._seen.add(key)
        self._pending.append(uri)

    async def _run(self) -> None:
        try:
            while self._pending:
                if self.pages_fetched:
                    # wait until the previous page has been consumed
                    await self._items.join()
                uri = self._pending.popleft()
                started = perf_counter()

                data, response = await self._executor.get(uri)

                next_links = parse_next_links(response)
                for link in next_links:
                    self._enqueue(link)

                if not isinstance(data, list):
                    raise DecodeError(
                        f"Expected a JSON array from {uri}, got {type(data).__name__}",
                        response,
                    )

                for element in data:
                    item = self._factory(element, self._extra, self._client_ref)
                    self._items.put_nowait(item)
                    self.items_emitted += 1

                log_page_fetched(
                    label=self._label,
                    uri=uri,
                    page_index=self.pages_fetched,
                    items=len(data),
                    has_next=bool(next_links),
                    latency_ms=(perf_counter() - started) * 1000.0,
                )
                self.pages_fetched += 1
        except asyncio.CancelledError:
            self._finish(StreamState.CANCELLED)
            raise
        except Exception as e:
            logger.warning(f"{self._label} failed with error {e}")
            self._error = e
            self._finish(StreamState.FAILED)
        else:
            self._finish(StreamState.FINISHED)

    # ----------------------
    # Consumer
    # ----------------------
    def __aiter__(self) -> PageStream:
        return self

    async def __anext__(self) -> Any:
        if self._task is None and self._state is StreamState.PENDING:
            self.start()
        if self._handed_out:
            # asking for the next item acknowledges the previous one
            self._handed_out = False
            self._items.task_done()
        item = await self._items.get()
        if item is _END:
            # keep the marker so later calls also stop
            self._items.put_nowait(_END)
            error = self._error
            if error is not None and not self._error_raised:
                self._error_raised = True
                raise error
            raise StopAsyncIteration
        self._handed_out = True
        return item

    async def collect(self) -> list[Any]:
        """Drain the stream into a list (raises if the stream fails)."""
        return [item async for item in self]

    async def __aenter__(self) -> PageStream:
        if self._state is StreamState.PENDING:
            self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"PageStream(label={self._label!r}, state={self._state.value}, "
            f"pages={self.pages_fetched}, items={self.items_emitted})"
        )


class Paginator:
    """Creates PageStreams bound to one executor, registry and client."""

    def __init__(
        self,
        executor: RequestExecutor,
        *,
        registry: PendingRequestRegistry | None = None,
        client_ref: ClientRef | None = None,
    ) -> None:
        self._executor = executor
        self._registry = registry
        self._client_ref = client_ref

    def paginate(
        self,
        start_uri: str,
        factory: ItemFactory,
        *,
        extra: Mapping[str, Any] | None = None,
        label: str | None = None,
    ) -> PageStream:
        """Create a stream over all pages reachable from ``start_uri``.

        Auth is checked immediately (AuthError before any network activity).
        When called inside a running event loop the first page fetch starts
        right away; otherwise the stream starts on first iteration.
        """
        self._executor.auth_info()
        stream = PageStream(
            self._executor,
            str(start_uri),
            factory,
            extra=extra,
            client_ref=self._client_ref,
            label=label,
            registry=self._registry,
        )
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return stream
        return stream.start()
