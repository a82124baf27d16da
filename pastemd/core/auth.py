import logging
from typing import Optional

from fastapi import Request

from pastemd.core.config import Settings
from pastemd.core.errors import Other
from pastemd.core.security import verify_token
from pastemd.domains.identity.entities import Identity

logger = logging.getLogger(__name__)


def identity_from_token(token: str, settings: Settings) -> Identity:
    """Resolve a session token into an identity"""
    payload = verify_token(token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
    if not payload or not payload.get("sub"):
        logger.info("Rejected an invalid session token")
        raise Other("Could not validate credentials")

    permissions = payload.get("permissions") or ()
    if isinstance(permissions, str):
        permissions = [permissions]
    elif not isinstance(permissions, (list, tuple)):
        logger.info("Rejected a session token with malformed permissions")
        raise Other("Could not validate credentials")

    return Identity(username=payload["sub"], permissions=permissions)


async def get_optional_identity(request: Request) -> Optional[Identity]:
    """Dependency: the requester's identity, ``None`` for anonymous requests."""
    settings: Settings = request.app.state.settings
    if not settings.auth_enabled:
        return None

    token = request.cookies.get(settings.auth_cookie)
    if not token:
        return None

    return identity_from_token(token.strip(), settings)
