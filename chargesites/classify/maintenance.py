"""Maintenance visit cell classification.

Rules run in order and the first match wins:

1. empty cell -> UNKNOWN
2. contains "a planifier" -> PLANNED
3. "na", "n/a", "so", "s.o" -> NOT_APPLICABLE
4. mentions "rdm", holds a date, or carries more than 5 characters -> DONE
5. anything else -> UNKNOWN
"""

from __future__ import annotations

from typing import Callable

from chargesites.common.dates import normalize_date
from chargesites.common.models import CellValue, MaintenanceStatus
from chargesites.common.text import contains_any, equals_any, is_blank, normalize_text

NOT_APPLICABLE_VALUES = ("na", "n/a", "so", "s.o")


def _is_empty(cell: CellValue) -> bool:
    return is_blank(cell)


def _is_to_schedule(cell: CellValue) -> bool:
    return contains_any(cell, "a planifier")


def _is_not_applicable(cell: CellValue) -> bool:
    return equals_any(cell, *NOT_APPLICABLE_VALUES)


def _is_handled(cell: CellValue) -> bool:
    if "rdm" in normalize_text(cell):
        return True
    if normalize_date(cell) is not None:
        return True
    return len(str(cell).strip()) > 5


MAINTENANCE_RULES: tuple[tuple[str, Callable[[CellValue], bool], MaintenanceStatus], ...] = (
    ("empty", _is_empty, MaintenanceStatus.UNKNOWN),
    ("to_schedule", _is_to_schedule, MaintenanceStatus.PLANNED),
    ("not_applicable", _is_not_applicable, MaintenanceStatus.NOT_APPLICABLE),
    ("handled", _is_handled, MaintenanceStatus.DONE),
)


def resolve_maintenance_status(cell: CellValue) -> MaintenanceStatus:
    for _name, matches, status in MAINTENANCE_RULES:
        if matches(cell):
            return status
    return MaintenanceStatus.UNKNOWN

