"""Charging terminal quantity and type heuristics.

Both parsers read the free-text "Bornes" cell after accent folding,
lowercasing and whitespace removal, so "3 x 22 kW" and "3x22kw" compare equal.
Each one is an ordered list of named rules; the first rule returning a value
wins.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from chargesites.common.text import normalize_text

NOT_PROVIDED_LABEL = "Non renseigné"
UNSPECIFIED_LABEL = "Non spécifié"

_WHITESPACE_RE = re.compile(r"\s+")
_MULTIPLIER_RE = re.compile(r"(\d+)[x×]")
_MULTIPLIED_POWER_RE = re.compile(r"(\d+)[x×](\d+(?:[.,]\d+)?)")
_KW_POWER_RE = re.compile(r"(\d+(?:[.,]\d+)?)kw")
_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")


def compact_text(raw: object) -> str:
    return _WHITESPACE_RE.sub("", normalize_text(raw))


def _power(value: str) -> str:
    return value.replace(",", ".")


# -- quantity -----------------------------------------------------------------


def _quantity_from_multipliers(text: str) -> Optional[int]:
    matches = _MULTIPLIER_RE.findall(text)
    if not matches:
        return None
    return sum(int(match) for match in matches)


def _quantity_from_double(text: str) -> Optional[int]:
    return 2 if "double" in text else None


def _quantity_from_simple(text: str) -> Optional[int]:
    return 1 if "simple" in text else None


def _quantity_from_power_or_digits(text: str) -> Optional[int]:
    if "kw" in text or _NUMBER_RE.search(text):
        return 1
    return None


def _quantity_default(text: str) -> Optional[int]:
    return 1 if text else 0


QUANTITY_RULES: tuple[tuple[str, Callable[[str], Optional[int]]], ...] = (
    ("multiplier", _quantity_from_multipliers),
    ("double", _quantity_from_double),
    ("simple", _quantity_from_simple),
    ("power_or_digits", _quantity_from_power_or_digits),
    ("default", _quantity_default),
)


def count_terminals(raw: object) -> int:
    text = compact_text(raw)
    if not text:
        return 0
    for _name, rule in QUANTITY_RULES:
        quantity = rule(text)
        if quantity is not None:
            return quantity
    return 1


# -- type ---------------------------------------------------------------------


def _type_from_multiplied_power(text: str) -> Optional[str]:
    match = _MULTIPLIED_POWER_RE.search(text)
    if not match:
        return None
    return f"{match.group(1)}x{_power(match.group(2))}kW"


def _type_from_kw_power(text: str) -> Optional[str]:
    match = _KW_POWER_RE.search(text)
    if not match:
        return None
    return f"{_power(match.group(1))} kW"


def _type_from_double(text: str) -> Optional[str]:
    return "Double" if "double" in text else None


def _type_from_simple(text: str) -> Optional[str]:
    return "Simple" if "simple" in text else None


def _type_from_bare_number(text: str) -> Optional[str]:
    match = _NUMBER_RE.search(text)
    if not match:
        return None
    return f"{_power(match.group(0))} kW"


TYPE_RULES: tuple[tuple[str, Callable[[str], Optional[str]]], ...] = (
    ("multiplied_power", _type_from_multiplied_power),
    ("kw_power", _type_from_kw_power),
    ("double", _type_from_double),
    ("simple", _type_from_simple),
    ("bare_number", _type_from_bare_number),
)


def classify_terminal_type(raw: object) -> str:
    text = compact_text(raw)
    if not text:
        return NOT_PROVIDED_LABEL
    for _name, rule in TYPE_RULES:
        label = rule(text)
        if label is not None:
            return label
    return UNSPECIFIED_LABEL
