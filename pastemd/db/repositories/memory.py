"""In-process stores with the same contract as the SQL repositories.

State is shared between all users of one instance and guarded by an
``asyncio.Lock``; entities are copied in and out so callers never hold a
reference to stored state.
"""
import asyncio
from typing import Dict, List, Optional, Set, Tuple

from pastemd.core.errors import AlreadyExists
from pastemd.domains.documents.entities import Document
from pastemd.domains.pastes.entities import Paste, PasteMetadata


def _copy_document(document: Document) -> Document:
    return Document.from_json(document.to_json())


class MemoryPasteRepository:
    def __init__(self):
        self._pastes: Dict[str, Paste] = {}
        self._lock = asyncio.Lock()

    def _find(self, url: str) -> Optional[Paste]:
        for paste in self._pastes.values():
            if paste.url == url:
                return paste
        return None

    async def get_by_url(self, url: str) -> Optional[Paste]:
        async with self._lock:
            paste = self._find(url)
            return paste.copy() if paste else None

    async def exists(self, url: str) -> bool:
        async with self._lock:
            return self._find(url) is not None

    async def create(self, paste: Paste) -> Paste:
        async with self._lock:
            if paste.id in self._pastes or self._find(paste.url) is not None:
                raise AlreadyExists()
            self._pastes[paste.id] = paste.copy()
            return paste.copy()

    async def update(self, paste: Paste) -> None:
        async with self._lock:
            if paste.id not in self._pastes:
                return
            other = self._find(paste.url)
            if other is not None and other.id != paste.id:
                raise AlreadyExists()
            stored = self._pastes[paste.id]
            self._pastes[paste.id] = stored.copy(
                url=paste.url,
                content=paste.content,
                password=paste.password,
                date_edited=paste.date_edited,
            )

    async def update_metadata(self, paste_id: str, metadata: PasteMetadata) -> None:
        async with self._lock:
            stored = self._pastes.get(paste_id)
            if stored is None:
                return
            self._pastes[paste_id] = stored.copy(metadata=metadata.model_dump())

    async def delete(self, paste_id: str) -> bool:
        async with self._lock:
            return self._pastes.pop(paste_id, None) is not None


class MemoryViewRepository:
    def __init__(self):
        self._views: Set[Tuple[str, str]] = set()
        self._lock = asyncio.Lock()

    async def exists(self, url: str, username: str) -> bool:
        async with self._lock:
            return (url, username) in self._views

    async def add(self, url: str, username: str) -> None:
        async with self._lock:
            if (url, username) in self._views:
                raise AlreadyExists("This view has already been counted.")
            self._views.add((url, username))

    async def count(self, url: str) -> int:
        async with self._lock:
            return sum(1 for view_url, _ in self._views if view_url == url)

    async def delete_by_url(self, url: str) -> int:
        async with self._lock:
            removed = {view for view in self._views if view[0] == url}
            self._views -= removed
            return len(removed)

    async def rename(self, old_url: str, new_url: str) -> int:
        async with self._lock:
            moved = {view for view in self._views if view[0] == old_url}
            self._views = {view for view in self._views if view[0] not in (old_url, new_url)}
            self._views |= {(new_url, username) for _, username in moved}
            return len(moved)


class MemoryDocumentRepository:
    def __init__(self):
        self._documents: Dict[Tuple[str, str], Document] = {}
        self._lock = asyncio.Lock()

    async def get(self, document_id: str, namespace: str) -> Optional[Document]:
        async with self._lock:
            document = self._documents.get((document_id, namespace))
            return _copy_document(document) if document else None

    async def create(self, document: Document) -> Document:
        async with self._lock:
            key = (document.id, document.namespace)
            if key in self._documents:
                raise AlreadyExists("A document with this id already exists in this namespace.")
            self._documents[key] = _copy_document(document)
            return _copy_document(document)

    async def update(self, document: Document) -> None:
        async with self._lock:
            key = (document.id, document.namespace)
            if key in self._documents:
                self._documents[key] = _copy_document(document)

    async def delete(self, document_id: str, namespace: str) -> bool:
        async with self._lock:
            return self._documents.pop((document_id, namespace), None) is not None

    async def list_by_namespace(self, namespace: str, limit: int = 100, offset: int = 0) -> List[Document]:
        async with self._lock:
            documents = [d for d in self._documents.values() if d.namespace == namespace]
        documents.sort(key=lambda d: d.timestamp, reverse=True)
        return [_copy_document(d) for d in documents[offset:offset + limit]]

    async def count_by_namespace(self, namespace: str) -> int:
        async with self._lock:
            return sum(1 for d in self._documents.values() if d.namespace == namespace)
