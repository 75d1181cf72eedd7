"""Spreadsheet date decoding.

Cells arrive either as serial numbers (1900 date system) or as French
``jj/mm/aaaa`` strings. Anything else is treated as "no date".
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

EXCEL_UNIX_EPOCH_OFFSET = 25569
SECONDS_PER_DAY = 86400

_UNIX_EPOCH = datetime(1970, 1, 1)
_DMY_RE = re.compile(r"^(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def serial_to_date(serial: float) -> date | None:
    try:
        seconds = round((float(serial) - EXCEL_UNIX_EPOCH_OFFSET) * SECONDS_PER_DAY)
        return (_UNIX_EPOCH + timedelta(seconds=seconds)).date()
    except OverflowError:
        return None


def parse_dmy(text: str) -> date | None:
    match = _DMY_RE.match(text.strip())
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def normalize_date(value: object) -> date | None:
    if value is None or isinstance(value, bool):
        return None
    if _is_number(value):
        if value == 0 or value != value:
            return None
        return serial_to_date(value)
    if isinstance(value, str):
        return parse_dmy(value)
    return None


def format_date(value: date | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def add_years(start: date, years: int) -> date:
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # 29 February on a non-leap target year.
        return start.replace(year=start.year + years, day=28)


def elapsed_years(start: date, as_of: date) -> int:
    """Whole calendar years from ``start`` to ``as_of`` (negative if in the future)."""
    years = as_of.year - start.year
    if (as_of.month, as_of.day) < (start.month, start.day):
        years -= 1
    return years
