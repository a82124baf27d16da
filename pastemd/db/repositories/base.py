from typing import List, Optional, Protocol

from pastemd.domains.documents.entities import Document
from pastemd.domains.pastes.entities import Paste, PasteMetadata


class PasteStore(Protocol):
    """Durable storage for pastes; ``url`` is unique across live pastes"""

    async def get_by_url(self, url: str) -> Optional[Paste]: ...

    async def exists(self, url: str) -> bool: ...

    async def create(self, paste: Paste) -> Paste: ...

    async def update(self, paste: Paste) -> None: ...

    async def update_metadata(self, paste_id: str, metadata: PasteMetadata) -> None: ...

    async def delete(self, paste_id: str) -> bool: ...


class ViewStore(Protocol):
    """Durable (url, username) records used by authenticated view counting"""

    async def exists(self, url: str, username: str) -> bool: ...

    async def add(self, url: str, username: str) -> None: ...

    async def count(self, url: str) -> int: ...

    async def delete_by_url(self, url: str) -> int: ...

    async def rename(self, old_url: str, new_url: str) -> int: ...


class DocumentStore(Protocol):
    """Generic namespaced documents keyed by (id, namespace)"""

    async def get(self, document_id: str, namespace: str) -> Optional[Document]: ...

    async def create(self, document: Document) -> Document: ...

    async def update(self, document: Document) -> None: ...

    async def delete(self, document_id: str, namespace: str) -> bool: ...

    async def list_by_namespace(self, namespace: str, limit: int = 100, offset: int = 0) -> List[Document]: ...

    async def count_by_namespace(self, namespace: str) -> int: ...


__all__ = ["PasteStore", "ViewStore", "DocumentStore"]
