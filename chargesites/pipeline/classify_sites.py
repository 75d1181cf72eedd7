"""Turn retained raw records into classified sites."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from chargesites.classify.contract import (
    DEFAULT_RULES,
    contract_age,
    is_late,
    maintenance_needed_count,
    resolve_contract_stage,
    resolve_contract_start,
)
from chargesites.classify.maintenance import resolve_maintenance_status
from chargesites.classify.region import extract_region
from chargesites.classify.terminals import classify_terminal_type, count_terminals
from chargesites.common.config_loader import ContractRules
from chargesites.common.dates import normalize_date
from chargesites.common.models import ClassifiedSite, RawRecord
from chargesites.common.text import is_blank, is_yes


def _text(value: object) -> str:
    if is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def site_id(record: RawRecord) -> str:
    affair = _text(record.affair) or "no-id"
    return f"{record.row_index}-{affair}"


def classify_record(record: RawRecord, as_of: date, rules: ContractRules = DEFAULT_RULES) -> ClassifiedSite:
    has_contract = is_yes(record.maintenance_flag)
    start = resolve_contract_start(record.contract_date, record.invoice_date, has_contract)
    period1 = resolve_maintenance_status(record.period1)
    period2 = resolve_maintenance_status(record.period2)

    return ClassifiedSite(
        id=site_id(record),
        construction_status=_text(record.construction_status),
        has_maintenance_contract=has_contract,
        site_name=_text(record.site_name),
        address=_text(record.address),
        terminals_raw=_text(record.terminals),
        description=_text(record.description),
        contact=_text(record.contact),
        brand=_text(record.brand),
        contract_start=start,
        construction_end=normalize_date(record.construction_end_date),
        affair_date=normalize_date(record.affair_date),
        period1_raw=_text(record.period1),
        period2_raw=_text(record.period2),
        period1_status=period1,
        period2_status=period2,
        contract_age_years=contract_age(start, as_of) if has_contract else 0,
        contract_stage=resolve_contract_stage(has_contract, start, period1, period2, as_of, rules),
        maintenance_needed_count=maintenance_needed_count(period1, period2),
        is_late=is_late(start, period1, period2, as_of, rules),
        terminal_count=count_terminals(record.terminals),
        terminal_type=classify_terminal_type(record.terminals),
        region=extract_region(record.address),
        raw=record,
    )


def classify_records(
    records: Iterable[RawRecord],
    as_of: date,
    rules: ContractRules = DEFAULT_RULES,
) -> list[ClassifiedSite]:
    return [classify_record(record, as_of, rules) for record in records]
