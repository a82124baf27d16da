"""Tests for the paste engine on both the in-memory and the sqlite stores."""
import pytest

from pastemd.core.errors import AlreadyExists, ErrorKind, InvalidValue, NotFound, PasswordIncorrect
from pastemd.core.security import get_password_hash, verify_password
from pastemd.domains.identity.entities import MANAGE_PASTES, Identity
from pastemd.domains.pastes.entities import PasteMetadata
from pastemd.domains.pastes.rules import normalize_url
from pastemd.domains.pastes.services import paste_key


async def test_create_and_read(paste_service) -> None:
    password, paste = await paste_service.create_paste("hello", "content", "pw")

    assert password == "pw"
    assert paste.password == "pw"
    assert paste.url == "hello"
    assert paste.date_published == paste.date_edited

    stored = await paste_service.get_paste("hello")
    assert stored.content == "content"
    assert stored.id == paste.id
    assert stored.password == get_password_hash("pw")


async def test_create_generates_password(paste_service) -> None:
    password, paste = await paste_service.create_paste("generated", "content", "")

    assert len(password) == 10
    assert password.isalnum()
    stored = await paste_service.get_paste("generated")
    assert verify_password(password, stored.password)
    assert stored.password != password


async def test_create_generates_url(paste_service) -> None:
    _, paste = await paste_service.create_paste("", "content", "pw")

    assert len(paste.url) == 10
    assert paste.url == normalize_url(paste.url)
    assert (await paste_service.get_paste(paste.url)).content == "content"


async def test_create_normalizes_url(paste_service) -> None:
    await paste_service.create_paste("MixedCase", "content", "pw")
    assert (await paste_service.get_paste("mixedcase")).content == "content"
    assert (await paste_service.get_paste("MIXEDCASE")).url == "mixedcase"


async def test_create_non_ascii_url(paste_service) -> None:
    _, paste = await paste_service.create_paste("grüße", "content", "pw")
    assert paste.url.isascii()
    assert (await paste_service.get_paste("grüße")).id == paste.id


async def test_create_duplicate_url(paste_service) -> None:
    await paste_service.create_paste("taken", "content", "pw")

    with pytest.raises(AlreadyExists) as exc:
        await paste_service.create_paste("TAKEN", "other", "pw")
    assert exc.value.kind is ErrorKind.ALREADY_EXISTS


@pytest.mark.parametrize("content", ["", "x" * 200_001])
async def test_create_rejects_content_length(paste_service, content) -> None:
    with pytest.raises(InvalidValue):
        await paste_service.create_paste("sized", content, "pw")
    with pytest.raises(NotFound):
        await paste_service.get_paste("sized")


@pytest.mark.parametrize("url", ["ab", "has space", "x" * 251])
async def test_create_rejects_url(paste_service, url) -> None:
    with pytest.raises(InvalidValue):
        await paste_service.create_paste(url, "content", "pw")


async def test_create_with_metadata(paste_service) -> None:
    await paste_service.create_paste("owned", "content", "pw", metadata=PasteMetadata(owner="alice"))
    assert (await paste_service.get_paste("owned")).metadata.owner == "alice"


async def test_read_missing(paste_service) -> None:
    with pytest.raises(NotFound) as exc:
        await paste_service.get_paste("missing")
    assert exc.value.status_code == 404


async def test_read_populates_cache(paste_service, cache) -> None:
    await paste_service.create_paste("cached", "content", "pw")
    assert await cache.get(paste_key("cached")) is None

    await paste_service.get_paste("cached")
    assert await cache.get(paste_key("cached")) is not None


async def test_read_survives_cache_clear(paste_service, cache) -> None:
    await paste_service.create_paste("cold", "content", "pw")
    await paste_service.get_paste("cold")
    await cache.clear()

    assert (await paste_service.get_paste("cold")).content == "content"


async def test_delete(paste_service, cache) -> None:
    await paste_service.create_paste("doomed", "content", "pw")
    await paste_service.get_paste("doomed")

    await paste_service.delete_paste("doomed", "pw")

    assert await cache.get(paste_key("doomed")) is None
    with pytest.raises(NotFound):
        await paste_service.get_paste("doomed")
    with pytest.raises(NotFound):
        await paste_service.delete_paste("doomed", "pw")


async def test_delete_wrong_password(paste_service) -> None:
    await paste_service.create_paste("kept", "content", "pw")

    with pytest.raises(PasswordIncorrect) as exc:
        await paste_service.delete_paste("kept", "wrong")
    assert exc.value.status_code == 401

    assert (await paste_service.get_paste("kept")).content == "content"


async def test_delete_by_manager(paste_service) -> None:
    await paste_service.create_paste("moderated", "content", "pw")
    await paste_service.delete_paste("moderated", "", requester=Identity("mod", {MANAGE_PASTES}))

    with pytest.raises(NotFound):
        await paste_service.get_paste("moderated")


async def test_edit_content(paste_service) -> None:
    _, created = await paste_service.create_paste("editable", "before", "pw")

    await paste_service.edit_paste("editable", "pw", "after", "", "", None)

    paste = await paste_service.get_paste("editable")
    assert paste.content == "after"
    assert paste.date_edited > paste.date_published
    assert paste.date_published == created.date_published
    assert verify_password("pw", paste.password)


async def test_edit_invalidates_cache(paste_service, cache) -> None:
    await paste_service.create_paste("stale", "before", "pw")
    await paste_service.get_paste("stale")

    await paste_service.edit_paste("stale", "pw", "after")

    assert await cache.get(paste_key("stale")) is None
    assert (await paste_service.get_paste("stale")).content == "after"


async def test_edit_url_and_password(paste_service, cache) -> None:
    await paste_service.create_paste("old-url", "content", "pw")
    await paste_service.get_paste("old-url")

    await paste_service.edit_paste("old-url", "pw", "content", new_url="New-Url", new_password="pw2")

    assert await cache.get(paste_key("old-url")) is None
    assert await cache.get(paste_key("new-url")) is None
    with pytest.raises(NotFound):
        await paste_service.get_paste("old-url")

    paste = await paste_service.get_paste("new-url")
    assert verify_password("pw2", paste.password)

    with pytest.raises(PasswordIncorrect):
        await paste_service.delete_paste("new-url", "pw")
    await paste_service.delete_paste("new-url", "pw2")


async def test_edit_url_onto_existing_paste(paste_service) -> None:
    await paste_service.create_paste("first", "content", "pw")
    await paste_service.create_paste("second", "content", "pw")

    with pytest.raises(AlreadyExists):
        await paste_service.edit_paste("first", "pw", "content", new_url="second")

    assert (await paste_service.get_paste("first")).url == "first"


async def test_edit_validates_content(paste_service) -> None:
    await paste_service.create_paste("strict", "content", "pw")

    with pytest.raises(InvalidValue):
        await paste_service.edit_paste("strict", "pw", "")
    assert (await paste_service.get_paste("strict")).content == "content"


async def test_edit_wrong_password(paste_service) -> None:
    await paste_service.create_paste("locked", "content", "pw")

    with pytest.raises(PasswordIncorrect):
        await paste_service.edit_paste("locked", "wrong", "changed")
    assert (await paste_service.get_paste("locked")).content == "content"


async def test_edit_missing(paste_service) -> None:
    with pytest.raises(NotFound):
        await paste_service.edit_paste("missing", "pw", "content")


async def test_owner_edits_without_password(paste_service) -> None:
    await paste_service.create_paste("mine", "content", "pw", metadata=PasteMetadata(owner="alice"))

    await paste_service.edit_paste("mine", "wrong", "changed", requester=Identity("alice"))
    assert (await paste_service.get_paste("mine")).content == "changed"

    with pytest.raises(PasswordIncorrect):
        await paste_service.edit_paste("mine", "wrong", "again", requester=Identity("bob"))


async def test_manager_edits_without_password(paste_service) -> None:
    await paste_service.create_paste("theirs", "content", "pw", metadata=PasteMetadata(owner="alice"))

    await paste_service.edit_paste("theirs", "", "moderated", requester=Identity("mod", {MANAGE_PASTES}))
    assert (await paste_service.get_paste("theirs")).content == "moderated"


async def test_edit_metadata(paste_service, cache) -> None:
    await paste_service.create_paste("meta", "content", "pw")
    await paste_service.get_paste("meta")

    await paste_service.edit_paste_metadata("meta", "pw", PasteMetadata(owner="alice", view_password="peek"))

    assert await cache.get(paste_key("meta")) is None
    paste = await paste_service.get_paste("meta")
    assert paste.metadata.owner == "alice"
    assert paste.metadata.view_password == "peek"
    assert paste.content == "content"

    with pytest.raises(PasswordIncorrect):
        await paste_service.edit_paste_metadata("meta", "wrong", PasteMetadata())

    await paste_service.edit_paste_metadata("meta", "wrong", PasteMetadata(), requester=Identity("alice"))
    assert (await paste_service.get_paste("meta")).metadata.owner == ""


async def test_metadata_keeps_extra_fields(paste_service) -> None:
    await paste_service.create_paste("extra", "content", "pw")
    await paste_service.edit_paste_metadata("extra", "pw", PasteMetadata(title="Notes"))

    assert (await paste_service.get_paste("extra")).metadata.model_dump()["title"] == "Notes"


async def test_public_paste_hides_password(paste_service) -> None:
    await paste_service.create_paste("public", "content", "pw")
    assert (await paste_service.get_public_paste("public")).password == ""


async def test_public_paste_view_password(paste_service) -> None:
    await paste_service.create_paste("private", "content", "pw", metadata=PasteMetadata(view_password="peek"))

    with pytest.raises(PasswordIncorrect):
        await paste_service.get_public_paste("private")
    assert (await paste_service.get_public_paste("private", "peek")).content == "content"


async def test_clone(paste_service) -> None:
    await paste_service.create_paste("original", "shared content", "pw")

    password, clone = await paste_service.clone_paste("original", "copy", "")

    assert clone.url == "copy"
    assert clone.content == "shared content"
    assert len(password) == 10

    with pytest.raises(NotFound):
        await paste_service.clone_paste("missing", "copy2")


async def test_edit_metadata_keeps_edit_date(paste_service) -> None:
    _, created = await paste_service.create_paste("dated", "content", "pw")

    await paste_service.edit_paste_metadata("dated", "pw", PasteMetadata(view_password="peek"))

    paste = await paste_service.get_paste("dated")
    assert paste.metadata.view_password == "peek"
    assert paste.date_edited == created.date_edited
