"""Accent- and case-insensitive text matching for French spreadsheet cells."""

from __future__ import annotations

import unicodedata


def normalize_text(value: object) -> str:
    """Trim, strip diacritics and lowercase; ``None`` becomes ``""``."""
    if value is None:
        return ""
    decomposed = unicodedata.normalize("NFD", str(value).strip())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return folded.lower()


def contains_any(value: object, *keywords: str) -> bool:
    normalized = normalize_text(value)
    return any(keyword in normalized for keyword in keywords)


def equals_any(value: object, *options: str) -> bool:
    return normalize_text(value) in options


def is_yes(value: object) -> bool:
    return normalize_text(value) == "oui"


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    # Spreadsheet readers hand back 0 for cleared numeric cells.
    return value == 0
