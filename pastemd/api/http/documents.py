from fastapi import APIRouter, Depends, Query, status

from pastemd.api.deps import get_document_service
from pastemd.domains.documents.schemas import (
    DocumentCreate, DocumentEdit, DocumentEditMetadata, DocumentListResponse, DocumentResponse
)
from pastemd.domains.documents.services import DocumentService
from pastemd.domains.pastes.schemas import DefaultReturn

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DefaultReturn[DocumentResponse], status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    service: DocumentService = Depends(get_document_service),
):
    """Create a new document"""
    document = await service.create_document(
        document_data.namespace,
        document_data.content,
        metadata=document_data.metadata,
        id=document_data.id,
    )
    return DefaultReturn(
        success=True, message="Document created", payload=DocumentResponse.model_validate(document)
    )


@router.get("/{namespace}", response_model=DefaultReturn[DocumentListResponse])
async def list_documents(
    namespace: str,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: DocumentService = Depends(get_document_service),
):
    """Documents of a namespace, newest first"""
    documents = await service.list_documents(namespace, limit, offset)
    total = await service.count_documents(namespace)

    return DefaultReturn(
        success=True,
        message="Documents found",
        payload=DocumentListResponse(
            documents=[DocumentResponse.model_validate(d) for d in documents],
            total=total,
            limit=limit,
            offset=offset,
        ),
    )


@router.get("/{namespace}/{document_id}", response_model=DefaultReturn[DocumentResponse])
async def get_document(
    namespace: str,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
):
    document = await service.get_document(document_id, namespace)
    return DefaultReturn(
        success=True, message="Document exists", payload=DocumentResponse.model_validate(document)
    )


@router.post("/{namespace}/{document_id}/edit", response_model=DefaultReturn[None])
async def edit_document(
    namespace: str,
    document_id: str,
    edit_data: DocumentEdit,
    service: DocumentService = Depends(get_document_service),
):
    await service.edit_document(document_id, namespace, edit_data.content)
    return DefaultReturn(success=True, message="Document updated")


@router.post("/{namespace}/{document_id}/metadata", response_model=DefaultReturn[None])
async def edit_document_metadata(
    namespace: str,
    document_id: str,
    edit_data: DocumentEditMetadata,
    service: DocumentService = Depends(get_document_service),
):
    await service.edit_document_metadata(document_id, namespace, edit_data.metadata)
    return DefaultReturn(success=True, message="Document updated")


@router.post("/{namespace}/{document_id}/delete", response_model=DefaultReturn[None])
async def delete_document(
    namespace: str,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
):
    await service.delete_document(document_id, namespace)
    return DefaultReturn(success=True, message="Document deleted")
