"""Row batch loading and construction-status filtering."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from chargesites.common.constants import DATE_FIELDS
from chargesites.common.errors import InputError
from chargesites.common.fs import read_csv_dicts, read_json
from chargesites.common.models import RawRecord
from chargesites.common.text import contains_any, equals_any

EXCLUDED_STATUS_VALUES = ("na", "n/a", "so")

_SERIAL_RE = re.compile(r"^\d+(?:\.\d+)?$")


@dataclass(frozen=True)
class IngestStats:
    rows_in: int
    rows_retained: int


def is_excluded_status(status: object) -> bool:
    return contains_any(status, "annule") or equals_any(status, *EXCLUDED_STATUS_VALUES)


def is_retained_status(status: object) -> bool:
    if is_excluded_status(status):
        return False
    return contains_any(status, "realis", "en cours")


def ingest_rows(
    rows: Iterable[Mapping[str, Any]],
    column_map: Mapping[str, str],
) -> tuple[list[RawRecord], IngestStats]:
    status_column = column_map["construction_status"]
    records: list[RawRecord] = []
    rows_in = 0
    for index, row in enumerate(rows):
        rows_in += 1
        if not is_retained_status(row.get(status_column, "")):
            continue
        records.append(RawRecord.from_row(index, row, column_map))
    return records, IngestStats(rows_in=rows_in, rows_retained=len(records))


def _coerce_serials(row: dict[str, str], column_map: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = dict(row)
    for field in DATE_FIELDS:
        column = column_map.get(field)
        value = out.get(column)
        if isinstance(value, str) and _SERIAL_RE.match(value.strip()):
            out[column] = float(value.strip())
    return out


def load_rows(path: Path, column_map: Mapping[str, str]) -> list[dict[str, Any]]:
    """Read a materialised row batch keyed by column letter.

    JSON input is ``{"rows": [...]}`` or a bare list and keeps numeric serials
    as numbers. CSV input only carries text, so bare numbers in date columns
    are turned back into serials.
    """
    if not path.exists():
        raise InputError(f"Missing input batch: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            payload = read_json(path)
            rows = payload.get("rows", []) if isinstance(payload, dict) else payload
            if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
                raise InputError(f"Input batch must be a list of row objects: {path}")
            return rows
        if suffix == ".csv":
            return [_coerce_serials(row, column_map) for row in read_csv_dicts(path)]
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InputError(f"Unreadable input batch: {path}") from exc
    raise InputError(f"Unsupported input format: {path.suffix or path.name}")
