import json
import logging
from typing import TYPE_CHECKING, Any, List, Optional

from pastemd.core.errors import InvalidValue, NotFound
from pastemd.domains.documents.entities import Document

if TYPE_CHECKING:
    from pastemd.cache.base import Cache
    from pastemd.db.repositories.base import DocumentStore

logger = logging.getLogger(__name__)

NAMESPACE_MAX_LENGTH = 255


def document_key(document_id: str, namespace: str) -> str:
    # json keeps the two parts apart whatever characters they contain
    return "document:" + json.dumps([namespace, document_id])


class DocumentService:
    """Plain CRUD for namespaced documents.

    No ownership or password checks happen here; callers decide who may
    touch a document. Reads are cached and writes invalidate like pastes.
    """

    def __init__(self, store: "DocumentStore", cache: "Cache"):
        self.store = store
        self.cache = cache

    async def create_document(
        self, namespace: str, content: Any, metadata: Any = None, id: Optional[str] = None
    ) -> Document:
        if not namespace or len(namespace) > NAMESPACE_MAX_LENGTH:
            raise InvalidValue(f"Namespace must be between 1 and {NAMESPACE_MAX_LENGTH} characters long.")

        document = Document.create_document(namespace=namespace, content=content, metadata=metadata, id=id)
        created = await self.store.create(document)
        logger.info("Created document %s in %s", created.id, created.namespace)
        return created

    async def get_document(self, document_id: str, namespace: str) -> Document:
        key = document_key(document_id, namespace)

        cached = await self.cache.get(key)
        if cached is not None:
            try:
                return Document.from_json(cached)
            except (ValueError, TypeError):
                await self.cache.remove(key)

        document = await self.store.get(document_id, namespace)
        if document is None:
            raise NotFound("No document with this id has been found.")

        await self.cache.set(key, document.to_json())
        return document

    async def edit_document(self, document_id: str, namespace: str, content: Any) -> None:
        document = await self.get_document(document_id, namespace)
        document.update_content(content)
        await self.store.update(document)
        await self.cache.remove(document_key(document_id, namespace))

    async def edit_document_metadata(self, document_id: str, namespace: str, metadata: Any) -> None:
        document = await self.get_document(document_id, namespace)
        document.update_metadata(metadata)
        await self.store.update(document)
        await self.cache.remove(document_key(document_id, namespace))

    async def delete_document(self, document_id: str, namespace: str) -> None:
        deleted = await self.store.delete(document_id, namespace)
        await self.cache.remove(document_key(document_id, namespace))

        if not deleted:
            raise NotFound("No document with this id has been found.")
        logger.info("Deleted document %s in %s", document_id, namespace)

    async def list_documents(self, namespace: str, limit: int = 100, offset: int = 0) -> List[Document]:
        return await self.store.list_by_namespace(namespace, limit, offset)

    async def count_documents(self, namespace: str) -> int:
        return await self.store.count_by_namespace(namespace)
