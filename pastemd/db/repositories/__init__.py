from pastemd.db.repositories.base import DocumentStore, PasteStore, ViewStore
from pastemd.db.repositories.document_repository import DocumentRepository
from pastemd.db.repositories.memory import (
    MemoryDocumentRepository, MemoryPasteRepository, MemoryViewRepository
)
from pastemd.db.repositories.paste_repository import PasteRepository, ViewRepository

__all__ = [
    "PasteStore",
    "ViewStore",
    "DocumentStore",
    "PasteRepository",
    "ViewRepository",
    "DocumentRepository",
    "MemoryPasteRepository",
    "MemoryViewRepository",
    "MemoryDocumentRepository",
]
