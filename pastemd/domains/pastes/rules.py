"""Url normalization and record validation for pastes.

Every url goes through :func:`normalize_url` before it is stored, looked up
or compared; :func:`validate_slug` and :func:`validate_content` run before
anything is written.
"""
import regex

from pastemd.core.errors import InvalidValue

URL_MIN_LENGTH = 3
URL_MAX_LENGTH = 250
CONTENT_MIN_LENGTH = 1
CONTENT_MAX_LENGTH = 200_000

# Anchors are per line: a multi-line slug is accepted only if each line matches.
SLUG_PATTERN = regex.compile(r"^[\w_\-\.!\p{Extended_Pictographic}]+$", regex.MULTILINE)


def normalize_url(raw: str) -> str:
    """Canonical ascii storage key for a user supplied url.

    The url is punycode encoded and lower-cased. Punycode appends a ``-``
    delimiter to strings with basic code points; that one trailing separator
    is dropped, which keeps the function idempotent.
    """
    encoded = raw.encode("punycode").decode("ascii").lower()
    if encoded.endswith("-"):
        encoded = encoded[:-1]
    return encoded


def validate_slug(slug: str) -> None:
    if not URL_MIN_LENGTH <= len(slug) <= URL_MAX_LENGTH:
        raise InvalidValue(
            f"Paste URL must be between {URL_MIN_LENGTH} and {URL_MAX_LENGTH} characters long."
        )

    if not all(SLUG_PATTERN.match(line) for line in slug.split("\n")):
        raise InvalidValue("Paste URL contains characters that are not allowed.")


def validate_content(content: str) -> None:
    size = len(content.encode("utf-8"))
    if not CONTENT_MIN_LENGTH <= size <= CONTENT_MAX_LENGTH:
        raise InvalidValue(
            f"Paste content must be between {CONTENT_MIN_LENGTH} and {CONTENT_MAX_LENGTH} bytes long."
        )
