"""Tests for the in-memory cache and adapter selection."""
from pastemd.cache import build_cache
from pastemd.cache.memcached import MemcachedCache, _key
from pastemd.cache.memory import MemoryCache
from pastemd.core.config import Settings


async def test_get_set_remove() -> None:
    cache = MemoryCache()
    assert await cache.get("k") is None

    await cache.set("k", "v")
    assert await cache.get("k") == "v"

    await cache.remove("k")
    assert await cache.get("k") is None


async def test_remove_missing_key_is_not_an_error() -> None:
    await MemoryCache().remove("missing")


async def test_increment_reports_previous_existence() -> None:
    cache = MemoryCache()
    assert await cache.increment("views") is False
    assert await cache.increment("views") is True
    assert await cache.increment("views") is True
    assert await cache.get("views") == "3"


async def test_evicts_least_recently_used() -> None:
    cache = MemoryCache(max_entries=2)
    await cache.set("a", "1")
    await cache.set("b", "2")
    await cache.get("a")
    await cache.set("c", "3")

    assert await cache.get("b") is None
    assert await cache.get("a") == "1"
    assert len(cache) == 2


async def test_clear() -> None:
    cache = MemoryCache()
    await cache.set("a", "1")
    await cache.clear()
    assert await cache.get("a") is None


def test_build_cache_selects_adapter() -> None:
    assert isinstance(build_cache(Settings(cache_backend="memory")), MemoryCache)
    memcached = build_cache(Settings(cache_backend="memcached", memcached_servers="10.0.0.1:11211, 10.0.0.2:11211"))
    assert isinstance(memcached, MemcachedCache)
    assert memcached.servers == ["10.0.0.1:11211", "10.0.0.2:11211"]


def test_memcached_keys_are_safe() -> None:
    key = _key("paste:has space\nand newline" + "x" * 300)
    assert len(key) < 250
    assert " " not in key and "\n" not in key
    assert _key("paste:a") == _key("paste:a")
