"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from chargesites.common.errors import ConfigError
from chargesites.common.fs import read_yaml
from chargesites.common.schema import validate_columns_config, validate_rules_config


@dataclass(frozen=True)
class ContractRules:
    renewal_years: int = 3
    expiry_years: int = 5
    period1_late_years: int = 1
    period2_late_years: int = 2


@dataclass(frozen=True)
class ConfigBundle:
    column_map: dict[str, str]
    contract_rules: ContractRules


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> Any:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_all_configs(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    def _overlay(name: str) -> Path | None:
        return (overlay_config_dir / name) if overlay_config_dir is not None else None

    columns = validate_columns_config(
        _load_yaml_with_overlay(config_dir / "columns.yml", _overlay("columns.yml")),
        allow_unknown=allow_unknown,
    )
    rules = validate_rules_config(
        _load_yaml_with_overlay(config_dir / "rules.yml", _overlay("rules.yml")),
        allow_unknown=allow_unknown,
    )

    contract = rules["contract"]
    return ConfigBundle(
        column_map=dict(columns["columns"]),
        contract_rules=ContractRules(
            renewal_years=contract["renewal_years"],
            expiry_years=contract["expiry_years"],
            period1_late_years=contract["period1_late_years"],
            period2_late_years=contract["period2_late_years"],
        ),
    )
