"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

import re

from chargesites.common.errors import ConfigError
from chargesites.common.models import RawRecord

_COLUMN_LETTER_RE = re.compile(r"^[A-Z]{1,3}$")

CONTRACT_RULE_KEYS = {
    "renewal_years",
    "expiry_years",
    "period1_late_years",
    "period2_late_years",
}


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_columns_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "columns config")
    _assert_required_keys(cfg, {"version", "columns"}, "columns config")
    columns = cfg["columns"]
    _assert_mapping(columns, "columns.columns")

    field_names = set(RawRecord.field_names())
    _assert_required_keys(columns, field_names, "columns.columns")
    _assert_no_unknown_keys(columns, field_names, "columns.columns", allow_unknown)

    letters: list[str] = []
    for name, letter in columns.items():
        if not isinstance(letter, str) or not _COLUMN_LETTER_RE.match(letter):
            raise ConfigError(f"columns.{name} must be a spreadsheet column letter, got {letter!r}")
        letters.append(letter)

    dupes = {letter for letter in letters if letters.count(letter) > 1}
    if dupes:
        raise ConfigError(f"Duplicate column letters: {', '.join(sorted(dupes))}")
    return cfg


def validate_rules_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "rules config")
    _assert_required_keys(cfg, {"contract"}, "rules config")
    contract = cfg["contract"]
    _assert_mapping(contract, "rules.contract")
    _assert_required_keys(contract, CONTRACT_RULE_KEYS, "rules.contract")
    _assert_no_unknown_keys(contract, CONTRACT_RULE_KEYS, "rules.contract", allow_unknown)

    for key in sorted(CONTRACT_RULE_KEYS):
        value = contract[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"rules.contract.{key} must be a non-negative integer")
    if contract["renewal_years"] > contract["expiry_years"]:
        raise ConfigError("rules.contract.renewal_years must not exceed expiry_years")
    return cfg
