from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentCreate(BaseModel):
    """Body for creating a document"""
    id: Optional[str] = Field(None, min_length=1, max_length=64)
    namespace: str = Field(..., min_length=1, max_length=255)
    content: Any = None
    metadata: Any = None


class DocumentEdit(BaseModel):
    content: Any = None


class DocumentEditMetadata(BaseModel):
    metadata: Any = None


class DocumentResponse(BaseModel):
    id: str
    namespace: str
    content: Any = None
    timestamp: int
    metadata: Any = None

    model_config = ConfigDict(from_attributes=True)


class DocumentListResponse(BaseModel):
    documents: List[DocumentResponse]
    total: int
    limit: int
    offset: int
