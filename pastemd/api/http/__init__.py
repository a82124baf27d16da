from pastemd.api.http.documents import router as documents_router
from pastemd.api.http.pastes import router as pastes_router

__all__ = [
    "pastes_router",
    "documents_router",
]
