from pastemd.domains.documents.entities import Document
from pastemd.domains.documents.schemas import (
    DocumentCreate, DocumentEdit, DocumentEditMetadata, DocumentListResponse, DocumentResponse
)
from pastemd.domains.documents.services import DocumentService, document_key

__all__ = [
    "Document",
    "DocumentCreate", "DocumentEdit", "DocumentEditMetadata",
    "DocumentResponse", "DocumentListResponse",
    "DocumentService", "document_key",
]
