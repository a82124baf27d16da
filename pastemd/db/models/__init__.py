from pastemd.db.models.document import Document
from pastemd.db.models.paste import Paste, View

__all__ = [
    "Paste",
    "View",
    "Document",
]
