"""CSV column normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff) and surrounding whitespace
    - Replaces runs of spaces / non-breaking spaces with one underscore
    - Lowercases and drops anything that is not a word character
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    return re.sub(r"[^\w]", "", name, flags=re.UNICODE)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def normalize_email(value: str | None) -> str | None:
    """Lowercase an email address; None unless it looks like one."""
    value = clean_string(value)
    if not value or "@" not in value:
        return None
    return value.lower()
