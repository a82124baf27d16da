"""Memcached cache (non-persistent, in RAM on the memcached servers)."""
import asyncio
import hashlib
import logging
from typing import List, Optional

import memcache

from pastemd.core.errors import store_errors

logger = logging.getLogger(__name__)

KEY_PREFIX = "pastemd:"


def _key(key: str) -> str:
    # memcached keys are limited to 250 bytes without spaces or control characters
    return KEY_PREFIX + hashlib.sha1(key.encode("utf-8")).hexdigest()


class MemcachedCache:
    """Cache stored on memcached servers; client calls run in a worker thread"""

    def __init__(self, servers: Optional[List[str]] = None, debug: int = 0):
        self.servers = servers or ["127.0.0.1:11211"]
        self._mc = memcache.Client(self.servers, debug=debug)

    async def get(self, key: str) -> Optional[str]:
        with store_errors("cache get"):
            value = await asyncio.to_thread(self._mc.get, _key(key))
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    async def set(self, key: str, value: str) -> None:
        with store_errors("cache set"):
            if not await asyncio.to_thread(self._mc.set, _key(key), value):
                raise OSError(f"memcached refused to store {key!r}")

    async def remove(self, key: str) -> None:
        with store_errors("cache remove"):
            if not await asyncio.to_thread(self._mc.delete, _key(key)):
                raise OSError(f"memcached failed to delete {key!r}")

    async def increment(self, key: str) -> bool:
        with store_errors("cache increment"):
            return await asyncio.to_thread(self._increment, _key(key))

    def _increment(self, key: str) -> bool:
        if self._mc.incr(key) is not None:
            return True
        if self._mc.add(key, "1"):
            return False
        # another client created the counter in between
        if self._mc.incr(key) is not None:
            return True
        raise OSError(f"memcached failed to increment {key!r}")

    async def clear(self) -> None:
        with store_errors("cache clear"):
            await asyncio.to_thread(self._mc.flush_all)
        logger.info("Flushed memcached servers %s", ", ".join(self.servers))

    async def close(self) -> None:
        await asyncio.to_thread(self._mc.disconnect_all)
