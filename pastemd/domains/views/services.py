import enum
import logging
from typing import TYPE_CHECKING, Optional

from pastemd.core.errors import AlreadyExists, InvalidValue
from pastemd.domains.identity.entities import Identity

if TYPE_CHECKING:
    from pastemd.cache.base import Cache
    from pastemd.db.repositories.base import ViewStore

logger = logging.getLogger(__name__)


class ViewMode(enum.Enum):
    # every read counts, counter lives only in the cache
    OPEN_MULTIPLE = "open_multiple"
    # one durable record per (url, username), anonymous reads are ignored
    AUTHENTICATED_ONCE = "authenticated_once"


def view_key(url: str) -> str:
    return f"paste_views:{url}"


class ViewCounter:
    """Per-url view counting in one of the two modes"""

    def __init__(self, mode: ViewMode, cache: "Cache", store: Optional["ViewStore"] = None):
        if mode is ViewMode.AUTHENTICATED_ONCE and store is None:
            raise ValueError("authenticated view counting needs a view store")
        self.mode = mode
        self.cache = cache
        self.store = store

    async def increment(self, url: str, identity: Optional[Identity] = None) -> None:
        """Count one view of ``url`` (already normalized)."""
        if self.mode is ViewMode.OPEN_MULTIPLE:
            await self.cache.increment(view_key(url))
            return

        if identity is None:
            return

        if await self.store.exists(url, identity.username):
            return

        try:
            await self.store.add(url, identity.username)
        except AlreadyExists:
            return

        if not await self.cache.increment(view_key(url)):
            # the counter was cold, so a fresh "1" undercounts; let the next
            # read rebuild it from the durable records
            await self.cache.remove(view_key(url))

    async def get(self, url: str) -> int:
        cached = await self.cache.get(view_key(url))
        if cached is not None:
            try:
                return int(cached)
            except ValueError:
                logger.warning("Discarding a malformed view counter for %s", url)
                await self.cache.remove(view_key(url))

        if self.mode is ViewMode.OPEN_MULTIPLE:
            return 0

        count = await self.store.count(url)
        await self.cache.set(view_key(url), str(count))
        return count

    async def purge(self, url: str) -> None:
        """Forget every view of ``url``."""
        try:
            if self.store is not None:
                await self.store.delete_by_url(url)
        finally:
            await self.cache.remove(view_key(url))

    async def rename(self, old_url: str, new_url: str) -> None:
        """Move the views of a paste whose url changed."""
        if old_url == new_url:
            return

        if self.mode is ViewMode.AUTHENTICATED_ONCE:
            try:
                await self.store.rename(old_url, new_url)
            finally:
                # rebuilt from the moved records on the next read
                await self.cache.remove(view_key(old_url))
                await self.cache.remove(view_key(new_url))
            return

        cached = await self.cache.get(view_key(old_url))
        if cached is None:
            await self.cache.remove(view_key(new_url))
        else:
            await self.cache.set(view_key(new_url), cached)
        await self.cache.remove(view_key(old_url))


def parse_view_mode(value: str) -> ViewMode:
    try:
        return ViewMode(value)
    except ValueError:
        raise InvalidValue(f"Unknown view mode: {value}")
