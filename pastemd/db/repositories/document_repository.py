from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pastemd.core.errors import AlreadyExists, store_errors
from pastemd.db.models.document import Document as DocumentModel
from pastemd.domains.documents.entities import Document


class DocumentRepository:
    """SQL storage for namespaced documents"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, document_id: str, namespace: str) -> Optional[Document]:
        with store_errors("get document"):
            result = await self.session.execute(
                select(DocumentModel).where(
                    DocumentModel.id == document_id, DocumentModel.namespace == namespace
                )
            )
            db_document = result.scalar_one_or_none()
            return self._to_domain(db_document) if db_document else None

    async def create(self, document: Document) -> Document:
        db_document = DocumentModel(
            id=document.id,
            namespace=document.namespace,
            content=document.content,
            timestamp=document.timestamp,
            metadata_json=document.metadata,
        )

        with store_errors("create document"):
            self.session.add(db_document)
            try:
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                raise AlreadyExists("A document with this id already exists in this namespace.")
            await self.session.refresh(db_document)
            return self._to_domain(db_document)

    async def update(self, document: Document) -> None:
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == document.id, DocumentModel.namespace == document.namespace)
            .values(
                content=document.content,
                timestamp=document.timestamp,
                metadata_json=document.metadata,
            )
        )

        with store_errors("update document"):
            await self.session.execute(stmt)
            await self.session.commit()

    async def delete(self, document_id: str, namespace: str) -> bool:
        stmt = delete(DocumentModel).where(
            DocumentModel.id == document_id, DocumentModel.namespace == namespace
        )

        with store_errors("delete document"):
            result = await self.session.execute(stmt)
            await self.session.commit()
            return result.rowcount > 0

    async def list_by_namespace(self, namespace: str, limit: int = 100, offset: int = 0) -> List[Document]:
        with store_errors("list documents"):
            result = await self.session.execute(
                select(DocumentModel)
                .where(DocumentModel.namespace == namespace)
                .order_by(DocumentModel.timestamp.desc())
                .offset(offset)
                .limit(limit)
            )
            return [self._to_domain(doc) for doc in result.scalars().all()]

    async def count_by_namespace(self, namespace: str) -> int:
        with store_errors("count documents"):
            result = await self.session.execute(
                select(func.count()).select_from(DocumentModel).where(DocumentModel.namespace == namespace)
            )
            return result.scalar() or 0

    def _to_domain(self, db_document: DocumentModel) -> Document:
        return Document(
            id=db_document.id,
            namespace=db_document.namespace,
            content=db_document.content,
            timestamp=db_document.timestamp,
            metadata=db_document.metadata_json,
        )
