"""Tests for url normalization and validation."""
import pytest

from pastemd.core.errors import ErrorKind, InvalidValue
from pastemd.domains.pastes.rules import normalize_url, validate_content, validate_slug


@pytest.mark.parametrize(
    "raw",
    ["hello", "Hello-World", "a-", "über", "ÜBER", "naïve-café", "日本語", "🎉party", "with.dots!", ""],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize_url(raw)
    assert normalize_url(once) == once


def test_normalize_lowercases_ascii() -> None:
    assert normalize_url("MyPaste") == "mypaste"


def test_normalize_keeps_ascii_unchanged() -> None:
    assert normalize_url("my_paste.v2") == "my_paste.v2"


def test_normalize_strips_one_trailing_separator_only() -> None:
    assert normalize_url("abc-") == "abc-"


def test_normalize_encodes_non_ascii() -> None:
    normalized = normalize_url("über")
    assert normalized.isascii()
    assert normalized != "über"


def test_normalize_empty() -> None:
    assert normalize_url("") == ""


@pytest.mark.parametrize("slug", ["abc", "a_b-c.d!", "x" * 250, "🎉🎉🎉", "paste123"])
def test_validate_slug_accepts(slug: str) -> None:
    validate_slug(slug)


@pytest.mark.parametrize("slug", ["ab", "x" * 251, "has space", "slash/es", "what?", "abc\n", "ok\nno way"])
def test_validate_slug_rejects(slug: str) -> None:
    with pytest.raises(InvalidValue) as exc:
        validate_slug(slug)
    assert exc.value.kind is ErrorKind.VALUE_ERROR


def test_validate_slug_checks_every_line() -> None:
    validate_slug("first\nsecond")


def test_invalid_value_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        validate_slug("no")


def test_validate_content_bounds() -> None:
    validate_content("x")
    validate_content("x" * 200_000)

    with pytest.raises(InvalidValue):
        validate_content("")
    with pytest.raises(InvalidValue):
        validate_content("x" * 200_001)


def test_validate_content_counts_bytes() -> None:
    validate_content("é" * 100_000)
    with pytest.raises(InvalidValue):
        validate_content("é" * 100_001)
