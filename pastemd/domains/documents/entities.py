import json
import uuid
from typing import Any, Dict, Optional

from pastemd.domains.pastes.entities import unix_timestamp


class Document:
    """Generic namespaced record; content and metadata are any JSON value"""

    def __init__(
        self,
        id: str,
        namespace: str,
        content: Any = None,
        timestamp: Optional[int] = None,
        metadata: Any = None,
    ):
        self.id = id
        self.namespace = namespace
        self.content = content
        self.timestamp = timestamp if timestamp is not None else unix_timestamp()
        self.metadata = metadata

    @classmethod
    def create_document(
        cls, namespace: str, content: Any, metadata: Any = None, id: Optional[str] = None
    ) -> "Document":
        return cls(id=id or uuid.uuid4().hex, namespace=namespace, content=content, metadata=metadata)

    def update_content(self, content: Any) -> None:
        self.content = content
        self.timestamp = unix_timestamp()

    def update_metadata(self, metadata: Any) -> None:
        self.metadata = metadata
        self.timestamp = unix_timestamp()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "namespace": self.namespace,
            "content": self.content,
            "timestamp": self.timestamp,
            "metadata": self.metadata,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "Document":
        return cls(**json.loads(raw))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id and self.namespace == other.namespace

    def __repr__(self) -> str:
        return f"Document(id={self.id}, namespace={self.namespace})"
