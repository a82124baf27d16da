from typing import FrozenSet, Iterable, Optional

MANAGE_PASTES = "ManagePastes"


class Identity:
    """Authenticated requester as seen by the paste engine"""

    def __init__(self, username: str, permissions: Optional[Iterable[str]] = None):
        self.username = username
        self.permissions: FrozenSet[str] = frozenset(permissions or ())

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def __eq__(self, other) -> bool:
        if not isinstance(other, Identity):
            return False
        return self.username == other.username and self.permissions == other.permissions

    def __hash__(self) -> int:
        return hash((self.username, self.permissions))

    def __repr__(self) -> str:
        return f"Identity(username={self.username}, permissions={sorted(self.permissions)})"


def may_bypass_password(existing_owner: str, requester: Optional[Identity]) -> bool:
    """Whether a mutating request may skip the edit password check.

    True only for a present requester that either owns the paste or holds
    the ``ManagePastes`` permission.
    """
    if requester is None:
        return False

    if existing_owner and requester.username == existing_owner:
        return True

    return requester.has_permission(MANAGE_PASTES)
