"""Unit tests for ResponseCache."""

import pytest

from octoloop.github.models import RawResponse
from octoloop.github.runtime import ResponseCache


def _ok(url: str, body: bytes = b"[]") -> RawResponse:
    return RawResponse(url=url, status=200, body=body)


class TestResponseCache:
    def test_get_missing(self):
        assert ResponseCache().get("https://api.github.com/user") is None

    def test_set_then_get(self):
        cache = ResponseCache(capacity=2)
        response = _ok("https://api.github.com/user")
        cache.set("https://api.github.com/user", response)
        assert cache.get("https://api.github.com/user") is response

    def test_set_overwrites(self):
        cache = ResponseCache(capacity=2)
        cache.set("u", _ok("u", b"1"))
        cache.set("u", _ok("u", b"2"))
        assert cache.get("u").body == b"2"
        assert len(cache) == 1

    def test_capacity_zero_disables(self):
        cache = ResponseCache(capacity=0)
        for i in range(5):
            cache.set(f"https://api.github.com/{i}", _ok(f"{i}"))
        assert all(cache.get(f"https://api.github.com/{i}") is None for i in range(5))
        assert len(cache) == 0

    def test_evicts_least_recently_used(self):
        cache = ResponseCache(capacity=2)
        cache.set("a", _ok("a"))
        cache.set("b", _ok("b"))
        cache.get("a")  # a is now most recent
        cache.set("c", _ok("c"))

        assert "b" not in cache
        assert "a" in cache
        assert "c" in cache

    @pytest.mark.parametrize("status", [201, 204, 299])
    def test_stores_any_2xx(self, status):
        cache = ResponseCache()
        cache.set("u", RawResponse(url="u", status=status))
        assert cache.get("u") is not None

    @pytest.mark.parametrize("status", [301, 304, 404, 500])
    def test_never_stores_non_2xx(self, status):
        cache = ResponseCache()
        cache.set("u", RawResponse(url="u", status=status))
        assert cache.get("u") is None
        assert len(cache) == 0

    def test_keys_normalized(self):
        cache = ResponseCache()
        cache.set("https://api.github.com/search/a b", _ok("u"))
        assert cache.get("https://api.github.com/search/a%20b") is not None

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            ResponseCache(capacity=-1)

    def test_clear(self):
        cache = ResponseCache()
        cache.set("u", _ok("u"))
        cache.clear()
        assert len(cache) == 0
