from __future__ import annotations

import re
from datetime import date

from .enums import Priority
from .errors import EmptyDescriptionError, UnsafeDescriptionError

# Whitespace as browsers define it; narrower than Python's Unicode \s.
_WHITESPACE_RE = re.compile(
    "[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_UNSAFE_RE = re.compile(r"[<>]")


def normalize_description(raw: object) -> str:
    if raw is None:
        return ""
    value = raw if isinstance(raw, str) else str(raw)
    return _WHITESPACE_RE.sub(" ", value).strip(" ")


def is_valid_description(value: str) -> bool:
    # Only angle brackets are rejected; this is not general HTML sanitization.
    return len(value) > 0 and not _UNSAFE_RE.search(value)


def normalize_priority(raw: object) -> Priority:
    try:
        return Priority(raw)
    except ValueError:
        return Priority.HIGH


def normalize_due_date(raw: object) -> str:
    if not isinstance(raw, str) or not _ISO_DATE_RE.fullmatch(raw):
        return ""
    try:
        date.fromisoformat(raw)
    except ValueError:
        return ""
    return raw


def validate_description(raw: object) -> str:
    """Normalize a description and raise the matching error when it cannot be stored."""
    description = normalize_description(raw)
    if not description:
        raise EmptyDescriptionError()
    if not is_valid_description(description):
        raise UnsafeDescriptionError()
    return description
