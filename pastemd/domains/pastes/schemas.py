from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from pastemd.domains.pastes.entities import Paste, PasteMetadata

T = TypeVar("T")


class DefaultReturn(BaseModel, Generic[T]):
    """Response envelope shared by every endpoint"""
    success: bool
    message: str
    payload: Optional[T] = None


class PasteCreate(BaseModel):
    """Body for creating a paste"""
    url: str = ""
    content: str
    password: str = ""
    metadata: Optional[PasteMetadata] = None


class PasteClone(BaseModel):
    """Body for cloning an existing paste"""
    source: str
    url: str = ""
    password: str = ""


class PasteDelete(BaseModel):
    password: str = ""


class PasteEdit(BaseModel):
    """Body for editing a paste; empty fields keep their current value"""
    password: str = ""
    new_content: str
    new_url: str = ""
    new_password: str = ""


class PasteEditMetadata(BaseModel):
    password: str = ""
    metadata: PasteMetadata = Field(default_factory=PasteMetadata)


class PasteResponse(BaseModel):
    """A paste as returned to its creator, password is the plaintext"""
    id: str
    url: str
    content: str
    password: str
    date_published: int
    date_edited: int
    metadata: PasteMetadata

    model_config = ConfigDict(from_attributes=True)


class CreatedPaste(BaseModel):
    password: str
    paste: PasteResponse


class PublicPaste(BaseModel):
    """A paste without any credentials"""
    id: str
    url: str
    content: str
    date_published: int
    date_edited: int
    metadata: PasteMetadata

    @classmethod
    def from_paste(cls, paste: Paste) -> "PublicPaste":
        metadata = paste.metadata.model_copy(update={"view_password": ""})
        return cls(
            id=paste.id,
            url=paste.url,
            content=paste.content,
            date_published=paste.date_published,
            date_edited=paste.date_edited,
            metadata=metadata,
        )
