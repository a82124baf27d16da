import logging
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pastemd.core.errors import AlreadyExists, store_errors
from pastemd.db.models.paste import Paste as PasteModel, View as ViewModel
from pastemd.domains.pastes.entities import Paste, PasteMetadata

logger = logging.getLogger(__name__)


class PasteRepository:
    """SQL storage for pastes"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_url(self, url: str) -> Optional[Paste]:
        with store_errors("get paste"):
            result = await self.session.execute(select(PasteModel).where(PasteModel.url == url))
            db_paste = result.scalar_one_or_none()
            return self._to_domain(db_paste) if db_paste else None

    async def exists(self, url: str) -> bool:
        with store_errors("check paste"):
            result = await self.session.execute(
                select(func.count()).select_from(PasteModel).where(PasteModel.url == url)
            )
            return result.scalar() > 0

    async def create(self, paste: Paste) -> Paste:
        """Insert a paste; the unique index on url is the final duplicate guard"""
        db_paste = PasteModel(
            id=paste.id,
            url=paste.url,
            password=paste.password,
            content=paste.content,
            date_published=paste.date_published,
            date_edited=paste.date_edited,
            metadata_json=paste.metadata.model_dump(),
        )

        with store_errors("create paste"):
            self.session.add(db_paste)
            try:
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                raise AlreadyExists()
            await self.session.refresh(db_paste)
            return self._to_domain(db_paste)

    async def update(self, paste: Paste) -> None:
        """Persist content, url, password and edit date of an existing paste"""
        stmt = (
            update(PasteModel)
            .where(PasteModel.id == paste.id)
            .values(
                url=paste.url,
                content=paste.content,
                password=paste.password,
                date_edited=paste.date_edited,
            )
        )

        with store_errors("update paste"):
            try:
                await self.session.execute(stmt)
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                raise AlreadyExists()

    async def update_metadata(self, paste_id: str, metadata: PasteMetadata) -> None:
        stmt = (
            update(PasteModel)
            .where(PasteModel.id == paste_id)
            .values(metadata_json=metadata.model_dump())
        )

        with store_errors("update paste metadata"):
            await self.session.execute(stmt)
            await self.session.commit()

    async def delete(self, paste_id: str) -> bool:
        with store_errors("delete paste"):
            result = await self.session.execute(delete(PasteModel).where(PasteModel.id == paste_id))
            await self.session.commit()
            return result.rowcount > 0

    def _to_domain(self, db_paste: PasteModel) -> Paste:
        return Paste(
            id=db_paste.id,
            url=db_paste.url,
            content=db_paste.content,
            password=db_paste.password,
            date_published=db_paste.date_published,
            date_edited=db_paste.date_edited,
            metadata=PasteMetadata.model_validate(db_paste.metadata_json or {}),
        )


class ViewRepository:
    """SQL storage for counted (url, username) views"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, url: str, username: str) -> bool:
        with store_errors("check view"):
            result = await self.session.execute(
                select(func.count())
                .select_from(ViewModel)
                .where(ViewModel.url == url, ViewModel.username == username)
            )
            return result.scalar() > 0

    async def add(self, url: str, username: str) -> None:
        with store_errors("add view"):
            self.session.add(ViewModel(url=url, username=username))
            try:
                await self.session.commit()
            except IntegrityError:
                # a concurrent request counted this identity first
                await self.session.rollback()
                raise AlreadyExists("This view has already been counted.")

    async def count(self, url: str) -> int:
        with store_errors("count views"):
            result = await self.session.execute(
                select(func.count()).select_from(ViewModel).where(ViewModel.url == url)
            )
            return result.scalar() or 0

    async def delete_by_url(self, url: str) -> int:
        with store_errors("delete views"):
            result = await self.session.execute(delete(ViewModel).where(ViewModel.url == url))
            await self.session.commit()
            logger.debug("Removed %s view records for %s", result.rowcount, url)
            return result.rowcount

    async def rename(self, old_url: str, new_url: str) -> int:
        """Re-key the views of ``old_url``; stale records under ``new_url`` are dropped"""
        with store_errors("rename views"):
            await self.session.execute(delete(ViewModel).where(ViewModel.url == new_url))
            result = await self.session.execute(
                update(ViewModel).where(ViewModel.url == old_url).values(url=new_url)
            )
            await self.session.commit()
            return result.rowcount
