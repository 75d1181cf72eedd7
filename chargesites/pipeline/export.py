"""Flat display rows and the consolidated CSV export."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from chargesites.common.dates import format_date
from chargesites.common.errors import ContractError
from chargesites.common.fs import read_csv_header, write_csv
from chargesites.common.models import ClassifiedSite

EXPORT_HEADERS = [
    "ID",
    "Site",
    "Adresse",
    "Interlocuteur",
    "Bornes",
    "Marque",
    "Statut Construction",
    "Date Fin Chantier",
    "Contrat Maintenance",
    "Date Début Contrat",
    "Statut Contrat (Calculé)",
    "Maintenance An 2",
    "Date Maint. An 2",
    "Maintenance An 3",
    "Date Maint. An 3",
    "Action Requise",
    "Retard",
]


def _yes_no(value: bool) -> str:
    return "OUI" if value else "NON"


def export_row(site: ClassifiedSite) -> dict[str, str]:
    return {
        "ID": site.id,
        "Site": site.site_name,
        "Adresse": site.address,
        "Interlocuteur": site.contact,
        "Bornes": site.terminals_raw,
        "Marque": site.brand,
        "Statut Construction": site.construction_status,
        "Date Fin Chantier": format_date(site.construction_end),
        "Contrat Maintenance": _yes_no(site.has_maintenance_contract),
        "Date Début Contrat": format_date(site.contract_start),
        "Statut Contrat (Calculé)": site.contract_stage.label,
        "Maintenance An 2": site.period1_status.label,
        "Date Maint. An 2": site.period1_raw,
        "Maintenance An 3": site.period2_status.label,
        "Date Maint. An 3": site.period2_raw,
        "Action Requise": "À PLANIFIER" if site.maintenance_needed_count > 0 else "AUCUNE",
        "Retard": _yes_no(site.is_late),
    }


def _verify_header(path: Path, expected_header: list[str]) -> None:
    actual = read_csv_header(path)
    if actual != expected_header:
        raise ContractError(f"Export header/order mismatch: {actual} != {expected_header}")


def write_sites_csv(path: Path, sites: Iterable[ClassifiedSite]) -> Path:
    # Input order is kept; it is the spreadsheet's own order.
    write_csv(path, EXPORT_HEADERS, (export_row(site) for site in sites))
    _verify_header(path, EXPORT_HEADERS)
    return path
