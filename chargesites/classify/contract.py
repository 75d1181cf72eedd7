"""Contract lifecycle, lateness and maintenance-needed derivation."""

from __future__ import annotations

from datetime import date

from chargesites.common.config_loader import ContractRules
from chargesites.common.dates import add_years, elapsed_years, normalize_date
from chargesites.common.models import CellValue, ContractStage, MaintenanceStatus
from chargesites.common.text import contains_any

DEFAULT_RULES = ContractRules()

_SETTLED = (MaintenanceStatus.DONE, MaintenanceStatus.NOT_APPLICABLE)


def resolve_contract_start(
    contract_date: CellValue,
    invoice_date: CellValue,
    has_maintenance_contract: bool,
) -> date | None:
    """Contract start, falling back to the invoice date for maintained sites.

    The fallback applies when the contract cell does not hold a date or says
    "pas de contrat". The contract date is kept if the invoice date is unusable.
    """
    start = normalize_date(contract_date)
    if has_maintenance_contract and (start is None or contains_any(contract_date, "pas de contrat")):
        invoice_start = normalize_date(invoice_date)
        if invoice_start is not None:
            start = invoice_start
    return start


def contract_age(start: date | None, as_of: date) -> int:
    if start is None:
        return 0
    return elapsed_years(start, as_of)


def resolve_contract_stage(
    has_maintenance_contract: bool,
    start: date | None,
    period1: MaintenanceStatus,
    period2: MaintenanceStatus,
    as_of: date,
    rules: ContractRules = DEFAULT_RULES,
) -> ContractStage:
    if not has_maintenance_contract:
        return ContractStage.NOT_APPLICABLE
    if start is None:
        return ContractStage.NEEDS_DATA

    age = elapsed_years(start, as_of)
    if age >= rules.expiry_years:
        return ContractStage.EXPIRED
    if age >= rules.renewal_years:
        return ContractStage.RENEWAL_DUE
    if period1 in _SETTLED and period2 in _SETTLED:
        return ContractStage.COMPLETED
    return ContractStage.ACTIVE


def is_late(
    start: date | None,
    period1: MaintenanceStatus,
    period2: MaintenanceStatus,
    as_of: date,
    rules: ContractRules = DEFAULT_RULES,
) -> bool:
    if start is None:
        return False
    if period1 is MaintenanceStatus.PLANNED and add_years(start, rules.period1_late_years) < as_of:
        return True
    if period2 is MaintenanceStatus.PLANNED and add_years(start, rules.period2_late_years) < as_of:
        return True
    return False


def maintenance_needed_count(period1: MaintenanceStatus, period2: MaintenanceStatus) -> int:
    # Capped at one per line: "is any visit waiting to be scheduled".
    if period1 is MaintenanceStatus.PLANNED:
        return 1
    if period2 is MaintenanceStatus.PLANNED:
        return 1
    return 0
