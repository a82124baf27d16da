import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.hash import hex_sha256

from pastemd.core.config import settings

GENERATED_SECRET_LENGTH = 10
_ALPHABET = string.ascii_letters + string.digits


def get_password_hash(password: str) -> str:
    """Deterministic one-way hash of an edit password (hex sha256)."""
    return hex_sha256.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Compare the hash of ``plain_password`` with a stored hash.

    Hashing is unsalted, so equal plaintexts always produce equal hashes and
    the comparison is done on the hashes themselves.
    """
    return secrets.compare_digest(get_password_hash(plain_password), hashed_password)


def generate_secret(length: int = GENERATED_SECRET_LENGTH) -> str:
    """Random alphanumeric string, used for generated passwords and urls."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """Issue a signed session token."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(days=7)

    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        secret or settings.jwt_secret,
        algorithm=algorithm or settings.jwt_algorithm,
    )


def verify_token(
    token: str, secret: Optional[str] = None, algorithm: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """Decode a session token, ``None`` if it is invalid or expired."""
    try:
        return jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[algorithm or settings.jwt_algorithm],
        )
    except JWTError:
        return None
