import logging
from typing import TYPE_CHECKING, Optional, Tuple

from pastemd.core.errors import AlreadyExists, NotFound, PasswordIncorrect
from pastemd.core.security import generate_secret, get_password_hash, verify_password
from pastemd.domains.identity.entities import Identity, may_bypass_password
from pastemd.domains.pastes.entities import Paste, PasteMetadata
from pastemd.domains.pastes.rules import normalize_url, validate_content, validate_slug
from pastemd.domains.views.services import ViewCounter

if TYPE_CHECKING:
    from pastemd.cache.base import Cache
    from pastemd.db.repositories.base import PasteStore

logger = logging.getLogger(__name__)


def paste_key(url: str) -> str:
    return f"paste:{url}"


class PasteService:
    """Create, read, update and delete pastes.

    Reads go through the cache and fall back to the store on a miss; every
    write goes to the store and then removes the cached copy.
    """

    def __init__(self, store: "PasteStore", cache: "Cache", views: ViewCounter):
        self.store = store
        self.cache = cache
        self.views = views

    async def create_paste(
        self,
        url: str,
        content: str,
        password: str = "",
        metadata: Optional[PasteMetadata] = None,
    ) -> Tuple[str, Paste]:
        """Create a paste.

        Returns the plaintext edit password (generated when none was given)
        and the stored paste with that plaintext in its ``password`` field.
        This is the only time the plaintext is available.
        """
        url = normalize_url(url)
        if not url:
            url = normalize_url(generate_secret())

        # fast path for a friendly error, the unique index is the real guard
        if await self.store.exists(url):
            raise AlreadyExists()

        validate_slug(url)
        validate_content(content)

        if not password:
            password = generate_secret()

        paste = Paste.create_paste(
            url=url,
            content=content,
            password_hash=get_password_hash(password),
            metadata=metadata,
        )
        created = await self.store.create(paste)
        logger.info("Created paste %s", created.url)

        return password, created.copy(password=password)

    async def clone_paste(self, source_url: str, url: str = "", password: str = "") -> Tuple[str, Paste]:
        """Create a new paste holding the content of an existing one"""
        source = await self.get_paste(source_url)
        return await self.create_paste(url, source.content, password)

    async def get_paste(self, url: str) -> Paste:
        url = normalize_url(url)

        cached = await self.cache.get(paste_key(url))
        if cached is not None:
            try:
                return Paste.from_json(cached)
            except (ValueError, KeyError, TypeError):
                logger.warning("Dropping an unreadable cache entry for %s", url)
                await self.cache.remove(paste_key(url))

        logger.debug("Cache miss for %s", url)
        paste = await self.store.get_by_url(url)
        if paste is None:
            raise NotFound()

        await self.cache.set(paste_key(url), paste.to_json())
        return paste

    async def get_public_paste(self, url: str, view_password: str = "") -> Paste:
        """Paste without its password hash, honouring ``metadata.view_password``"""
        paste = await self.get_paste(url)

        if paste.metadata.view_password and paste.metadata.view_password != view_password:
            raise PasswordIncorrect("This paste requires a view password.")

        return paste.copy(password="")

    async def delete_paste(self, url: str, password: str, requester: Optional[Identity] = None) -> None:
        paste = await self.get_paste(url)
        self._authorize(paste, password, requester)

        if not await self.store.delete(paste.id):
            # removed by a concurrent request after our read
            await self.cache.remove(paste_key(paste.url))
            raise NotFound()

        # the row is gone, so its view state goes too even if the cache fails
        try:
            await self.views.purge(paste.url)
        finally:
            await self.cache.remove(paste_key(paste.url))
        logger.info("Deleted paste %s", paste.url)

    async def edit_paste(
        self,
        url: str,
        password: str,
        new_content: str,
        new_url: str = "",
        new_password: str = "",
        requester: Optional[Identity] = None,
    ) -> None:
        """Replace content, and optionally url and password, of a paste.

        Empty ``new_url``/``new_password`` keep the current value.
        """
        paste = await self.get_paste(url)
        self._authorize(paste, password, requester)

        password_hash = get_password_hash(new_password) if new_password else paste.password

        old_url = paste.url
        target_url = old_url
        if new_url:
            target_url = normalize_url(new_url)
            validate_slug(target_url)
            if target_url != old_url and await self.store.exists(target_url):
                raise AlreadyExists()

        validate_content(new_content)

        paste.edit(content=new_content, url=target_url, password_hash=password_hash)
        await self.store.update(paste)

        try:
            if target_url != old_url:
                await self.views.rename(old_url, target_url)
        finally:
            # the new key is filled by the next read
            await self.cache.remove(paste_key(old_url))
        logger.info("Edited paste %s", old_url if old_url == target_url else f"{old_url} -> {target_url}")

    async def edit_paste_metadata(
        self,
        url: str,
        password: str,
        metadata: PasteMetadata,
        requester: Optional[Identity] = None,
    ) -> None:
        paste = await self.get_paste(url)
        self._authorize(paste, password, requester)

        await self.store.update_metadata(paste.id, metadata)

        await self.cache.remove(paste_key(paste.url))
        logger.info("Edited metadata of paste %s", paste.url)

    async def increment_view(self, url: str, identity: Optional[Identity] = None) -> None:
        paste = await self.get_paste(url)
        await self.views.increment(paste.url, identity)

    async def get_view_count(self, url: str) -> int:
        return await self.views.get(normalize_url(url))

    def _authorize(self, paste: Paste, password: str, requester: Optional[Identity]) -> None:
        if may_bypass_password(paste.metadata.owner, requester):
            return

        if not verify_password(password, paste.password):
            raise PasswordIncorrect()
