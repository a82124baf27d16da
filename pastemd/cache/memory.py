import asyncio
import logging
from typing import Optional

from cachetools import LRUCache

logger = logging.getLogger(__name__)


class MemoryCache:
    """Process-local cache; the least recently used entries are evicted when full"""

    def __init__(self, max_entries: int = 10000):
        self._entries: LRUCache = LRUCache(maxsize=max_entries)
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            return self._entries.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            self._entries[key] = value

    async def remove(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def increment(self, key: str) -> bool:
        async with self._lock:
            current = self._entries.get(key)
            if current is None:
                self._entries[key] = "1"
                return False
            self._entries[key] = str(int(current) + 1)
            return True

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
        logger.info("Cleared the in-memory cache")

    async def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._entries)
