"""Bounded LRU cache of GET responses used for conditional requests."""

from __future__ import annotations

import logging
from collections import OrderedDict

from yarl import URL

from ..models.response import RawResponse

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000


class ResponseCache:
    """Least-recently-used store of URI -> RawResponse.

    Only successful (2xx) responses are stored. A capacity of 0 disables the
    cache entirely: ``get`` always misses and ``set`` does nothing.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError("Cache capacity must be >= 0")
        self._capacity = capacity
        self._entries: OrderedDict[str, RawResponse] = OrderedDict()

    @staticmethod
    def normalize_key(uri: str | URL) -> str:
        return str(URL(str(uri)))

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: str | URL) -> RawResponse | None:
        if not self._capacity:
            return None
        k = self.normalize_key(key)
        entry = self._entries.get(k)
        if entry is not None:
            self._entries.move_to_end(k)
        return entry

    def set(self, key: str | URL, response: RawResponse) -> None:
        if not self._capacity:
            return
        if not response.ok:
            logger.debug(f"Not caching [{key}] due to status {response.status}")
            return
        k = self.normalize_key(key)
        self._entries[k] = response
        self._entries.move_to_end(k)
        while len(self._entries) > self._capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted [{evicted}] from response cache")

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, URL)):
            return False
        return self.normalize_key(key) in self._entries
