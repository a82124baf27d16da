from typing import Optional, Protocol


class Cache(Protocol):
    """String key/value cache placed in front of the database.

    Entries carry no expiry; they are removed explicitly on every write and
    may disappear at any time, so a miss is never an error.
    """

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def increment(self, key: str) -> bool:
        """Add one to a counter; returns whether the counter already existed."""
        ...

    async def clear(self) -> None: ...

    async def close(self) -> None: ...
