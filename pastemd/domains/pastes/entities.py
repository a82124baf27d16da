import json
import time
import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


def unix_timestamp() -> int:
    """Milliseconds since the unix epoch"""
    return time.time_ns() // 1_000_000


class PasteMetadata(BaseModel):
    """Structured extension record stored alongside a paste"""

    owner: str = ""
    view_password: str = ""

    model_config = ConfigDict(extra="allow")


class Paste:
    """Paste entity"""

    def __init__(
        self,
        id: str,
        url: str,
        content: str,
        password: str,
        date_published: int,
        date_edited: int,
        metadata: Optional[PasteMetadata] = None,
    ):
        self.id = id
        self.url = url
        self.content = content
        self.password = password
        self.date_published = date_published
        self.date_edited = date_edited
        self.metadata = metadata or PasteMetadata()

    @classmethod
    def create_paste(
        cls,
        url: str,
        content: str,
        password_hash: str,
        metadata: Optional[PasteMetadata] = None,
    ) -> "Paste":
        """New paste with a fresh id; both timestamps are the creation time"""
        now = unix_timestamp()
        return cls(
            id=uuid.uuid4().hex,
            url=url,
            content=content,
            password=password_hash,
            date_published=now,
            date_edited=now,
            metadata=metadata,
        )

    def edit(self, content: str, url: str, password_hash: str) -> None:
        self.content = content
        self.url = url
        self.password = password_hash
        self.touch()

    def touch(self) -> None:
        # edit timestamps only ever move forward, even within one millisecond
        self.date_edited = max(unix_timestamp(), self.date_edited + 1)

    def copy(self, **changes: Any) -> "Paste":
        fields = self.to_dict()
        fields.update(changes)
        return Paste.from_dict(fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "content": self.content,
            "password": self.password,
            "date_published": self.date_published,
            "date_edited": self.date_edited,
            "metadata": self.metadata.model_dump(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Paste":
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, PasteMetadata):
            metadata = PasteMetadata.model_validate(metadata)

        return cls(
            id=data["id"],
            url=data["url"],
            content=data["content"],
            password=data["password"],
            date_published=int(data["date_published"]),
            date_edited=int(data["date_edited"]),
            metadata=metadata,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "Paste":
        return cls.from_dict(json.loads(raw))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Paste):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Paste(id={self.id}, url={self.url}, date_edited={self.date_edited})"
