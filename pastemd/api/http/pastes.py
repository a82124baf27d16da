from typing import Optional

from fastapi import APIRouter, Depends, Query

from pastemd.api.deps import get_paste_service, get_settings
from pastemd.core.auth import get_optional_identity
from pastemd.core.config import Settings
from pastemd.core.errors import InvalidValue
from pastemd.domains.identity.entities import Identity
from pastemd.domains.pastes.entities import PasteMetadata
from pastemd.domains.pastes.rules import normalize_url
from pastemd.domains.pastes.schemas import (
    CreatedPaste, DefaultReturn, PasteClone, PasteCreate, PasteDelete, PasteEdit,
    PasteEditMetadata, PasteResponse, PublicPaste
)
from pastemd.domains.pastes.services import PasteService

router = APIRouter(tags=["pastes"])

# first path segments taken by the documents router when it is enabled
RESERVED_URLS = frozenset({"documents"})


def _check_reserved(url: str, settings: Settings) -> None:
    if url and settings.documents_enabled and normalize_url(url) in RESERVED_URLS:
        raise InvalidValue("This URL is reserved.")


def _owned_metadata(
    metadata: Optional[PasteMetadata], identity: Optional[Identity], settings: Settings
) -> Optional[PasteMetadata]:
    """Owner is always the requester when ownership is on, never client supplied"""
    if not settings.paste_ownership:
        return metadata

    metadata = metadata or PasteMetadata()
    owner = identity.username if identity else ""
    return metadata.model_copy(update={"owner": owner})


@router.post("/new", response_model=DefaultReturn[CreatedPaste])
async def create_paste(
    paste_data: PasteCreate,
    service: PasteService = Depends(get_paste_service),
    identity: Optional[Identity] = Depends(get_optional_identity),
    settings: Settings = Depends(get_settings),
):
    """Create a new paste"""
    _check_reserved(paste_data.url, settings)
    password, paste = await service.create_paste(
        paste_data.url,
        paste_data.content,
        paste_data.password,
        metadata=_owned_metadata(paste_data.metadata, identity, settings),
    )

    return DefaultReturn(
        success=True,
        message="Paste created",
        payload=CreatedPaste(password=password, paste=PasteResponse.model_validate(paste)),
    )


@router.post("/clone", response_model=DefaultReturn[CreatedPaste])
async def clone_paste(
    clone_data: PasteClone,
    service: PasteService = Depends(get_paste_service),
    settings: Settings = Depends(get_settings),
):
    """Clone an existing paste"""
    _check_reserved(clone_data.url, settings)
    password, paste = await service.clone_paste(clone_data.source, clone_data.url, clone_data.password)

    return DefaultReturn(
        success=True,
        message="Paste cloned",
        payload=CreatedPaste(password=password, paste=PasteResponse.model_validate(paste)),
    )


@router.get("/{url}", response_model=DefaultReturn[PublicPaste])
async def get_paste_by_url(
    url: str,
    view_password: str = Query(""),
    service: PasteService = Depends(get_paste_service),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    """Get an existing paste; counts as one view"""
    paste = await service.get_public_paste(url, view_password)
    await service.increment_view(paste.url, identity)

    return DefaultReturn(success=True, message="Paste exists", payload=PublicPaste.from_paste(paste))


@router.get("/{url}/views", response_model=DefaultReturn[int])
async def get_paste_views(
    url: str,
    service: PasteService = Depends(get_paste_service),
):
    """View count of a paste"""
    paste = await service.get_paste(url)
    count = await service.get_view_count(paste.url)

    return DefaultReturn(success=True, message="Views counted", payload=count)


@router.post("/{url}/delete", response_model=DefaultReturn[None])
async def delete_paste_by_url(
    url: str,
    delete_data: PasteDelete,
    service: PasteService = Depends(get_paste_service),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    """Delete an existing paste"""
    await service.delete_paste(url, delete_data.password, requester=identity)
    return DefaultReturn(success=True, message="Paste deleted")


@router.post("/{url}/edit", response_model=DefaultReturn[None])
async def edit_paste_by_url(
    url: str,
    edit_data: PasteEdit,
    service: PasteService = Depends(get_paste_service),
    identity: Optional[Identity] = Depends(get_optional_identity),
    settings: Settings = Depends(get_settings),
):
    """Edit an existing paste"""
    _check_reserved(edit_data.new_url, settings)
    await service.edit_paste(
        url,
        edit_data.password,
        edit_data.new_content,
        new_url=edit_data.new_url,
        new_password=edit_data.new_password,
        requester=identity,
    )
    return DefaultReturn(success=True, message="Paste updated")


@router.post("/{url}/metadata", response_model=DefaultReturn[None])
async def edit_paste_metadata_by_url(
    url: str,
    edit_data: PasteEditMetadata,
    service: PasteService = Depends(get_paste_service),
    identity: Optional[Identity] = Depends(get_optional_identity),
    settings: Settings = Depends(get_settings),
):
    """Edit an existing paste's metadata"""
    await service.edit_paste_metadata(
        url,
        edit_data.password,
        _owned_metadata(edit_data.metadata, identity, settings),
        requester=identity,
    )
    return DefaultReturn(success=True, message="Paste updated")
