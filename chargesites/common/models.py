"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum
from typing import Any, Mapping, Union

CellValue = Union[str, int, float]


class MaintenanceStatus(Enum):
    DONE = "Réalisée"
    PLANNED = "À planifier"
    NOT_APPLICABLE = "Sans objet"
    UNKNOWN = "Inconnu"

    @property
    def label(self) -> str:
        return self.value


class ContractStage(Enum):
    ACTIVE = "En cours"
    RENEWAL_DUE = "Reconduction"
    EXPIRED = "Expiré"
    COMPLETED = "Terminé"
    NOT_APPLICABLE = "Sans objet"
    NEEDS_DATA = "À renseigner"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class RawRecord:
    row_index: int
    construction_status: CellValue = ""
    quote: CellValue = ""
    affair: CellValue = ""
    site_name: CellValue = ""
    address: CellValue = ""
    contact: CellValue = ""
    description: CellValue = ""
    brand: CellValue = ""
    terminals: CellValue = ""
    affair_date: CellValue = ""
    construction_end_date: CellValue = ""
    period1: CellValue = ""
    period2: CellValue = ""
    invoice_date: CellValue = ""
    contract_date: CellValue = ""
    invoice: CellValue = ""
    affair_reference: CellValue = ""
    maintenance_flag: CellValue = ""

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.name != "row_index")

    @classmethod
    def from_row(cls, row_index: int, row: Mapping[str, Any], column_map: Mapping[str, str]) -> "RawRecord":
        values: dict[str, CellValue] = {}
        for name in cls.field_names():
            column = column_map.get(name)
            value = row.get(column, "") if column else ""
            if value is None or isinstance(value, bool) or not isinstance(value, (str, int, float)):
                value = "" if value is None else str(value)
            values[name] = value
        return cls(row_index=row_index, **values)


@dataclass(frozen=True)
class ClassifiedSite:
    id: str
    construction_status: str
    has_maintenance_contract: bool
    site_name: str
    address: str
    terminals_raw: str
    description: str
    contact: str
    brand: str
    contract_start: date | None
    construction_end: date | None
    affair_date: date | None
    period1_raw: str
    period2_raw: str
    period1_status: MaintenanceStatus
    period2_status: MaintenanceStatus
    contract_age_years: int
    contract_stage: ContractStage
    maintenance_needed_count: int
    is_late: bool
    terminal_count: int
    terminal_type: str
    region: str
    raw: RawRecord
