from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pastemd.cache.base import Cache
from pastemd.core.config import Settings
from pastemd.core.db import get_db
from pastemd.db.repositories import DocumentRepository, PasteRepository, ViewRepository
from pastemd.domains.documents.services import DocumentService
from pastemd.domains.pastes.services import PasteService
from pastemd.domains.views.services import ViewCounter, parse_view_mode


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> Cache:
    return request.app.state.cache


async def get_paste_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> PasteService:
    views = ViewCounter(parse_view_mode(settings.view_mode), cache, ViewRepository(db))
    return PasteService(PasteRepository(db), cache, views)


async def get_document_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
) -> DocumentService:
    return DocumentService(DocumentRepository(db), cache)
