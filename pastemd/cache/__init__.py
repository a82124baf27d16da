import logging

from pastemd.cache.base import Cache
from pastemd.cache.memory import MemoryCache
from pastemd.core.config import Settings

logger = logging.getLogger(__name__)


def build_cache(settings: Settings) -> Cache:
    """Cache adapter selected by ``settings.cache_backend``"""
    if settings.cache_backend == "memcached":
        from pastemd.cache.memcached import MemcachedCache

        logger.info("Using memcached at %s", settings.memcached_servers)
        return MemcachedCache(settings.memcached_server_list)

    logger.info("Using the in-memory cache (%s entries)", settings.cache_max_entries)
    return MemoryCache(max_entries=settings.cache_max_entries)


__all__ = ["Cache", "MemoryCache", "build_cache"]
