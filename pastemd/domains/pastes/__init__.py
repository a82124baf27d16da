from pastemd.domains.pastes.entities import Paste, PasteMetadata, unix_timestamp
from pastemd.domains.pastes.rules import normalize_url, validate_content, validate_slug
from pastemd.domains.pastes.services import PasteService, paste_key

__all__ = [
    "Paste", "PasteMetadata", "unix_timestamp",
    "normalize_url", "validate_content", "validate_slug",
    "PasteService", "paste_key",
]
