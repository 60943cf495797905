"""Shared parsing helpers for configuration values and environment overrides."""

from __future__ import annotations

import re


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "t", "true"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "f", "false"})
_BASE10_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a boolean token case-insensitively and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_base10_int(value: str) -> int | None:
    """Parse a signed base-10 integer within the 64-bit range.

    Only ASCII digits with an optional leading sign are accepted; Python's
    underscore separators and surrounding whitespace are rejected.

    Returns:
        Parsed integer, or `None` when the token is malformed or out of range.
    """

    if not _BASE10_INT_PATTERN.fullmatch(value):
        return None
    parsed = int(value)
    if parsed < INT64_MIN or parsed > INT64_MAX:
        return None
    return parsed
