"""UTC-focused helpers for deterministic run metadata."""

from __future__ import annotations

from datetime import date, datetime, timezone


def utc_today() -> date:
    return datetime.now(tz=timezone.utc).date()


def parse_as_of(value: str | None) -> date:
    """Evaluation date for a run: ISO date string, or today (UTC) when unset."""
    if not value:
        return utc_today()
    return date.fromisoformat(value)


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")
