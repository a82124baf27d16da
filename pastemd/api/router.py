from fastapi import APIRouter

from pastemd.api.http import documents_router, pastes_router
from pastemd.core.config import Settings


def build_api_router(settings: Settings) -> APIRouter:
    api_router = APIRouter(prefix="/api")
    # registered first so "/api/documents/..." never resolves to a paste url
    if settings.documents_enabled:
        api_router.include_router(documents_router)
    api_router.include_router(pastes_router)
    return api_router
