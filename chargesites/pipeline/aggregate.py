"""Summary counts and groupings over classified sites."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, fields
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping

from chargesites.classify.region import department_coordinates
from chargesites.common.models import ClassifiedSite, ContractStage, MaintenanceStatus


@dataclass(frozen=True)
class SummaryView:
    with_maintenance: int
    without_maintenance: int
    total_sites: int
    maintenance_needed: int
    maintenance_planned_total: int
    maintenance_done_total: int
    renewal_due: int
    expired: int
    late: int
    total_terminals: int
    terminals_by_region: Mapping[str, int]
    sites_by_type: Mapping[str, int]
    terminals_by_year: Mapping[int, int]

    def to_dict(self) -> dict:
        payload = {}
        for field in fields(self):
            value = getattr(self, field.name)
            payload[field.name] = dict(value) if isinstance(value, Mapping) else value
        payload["terminals_by_year"] = {str(year): count for year, count in self.terminals_by_year.items()}
        return payload


def reference_date(site: ClassifiedSite) -> date | None:
    return site.affair_date or site.construction_end or site.contract_start


def _count_status(site: ClassifiedSite, status: MaintenanceStatus) -> int:
    return (site.period1_status is status) + (site.period2_status is status)


def summarize(sites: Iterable[ClassifiedSite]) -> SummaryView:
    with_maintenance = 0
    total_sites = 0
    maintenance_needed = 0
    planned_total = 0
    done_total = 0
    renewal_due = 0
    expired = 0
    late = 0
    total_terminals = 0

    by_region: dict[str, int] = defaultdict(int)
    by_type: Counter[str] = Counter()
    by_year: dict[int, int] = defaultdict(int)

    for site in sites:
        total_sites += 1
        if site.has_maintenance_contract:
            with_maintenance += 1

        maintenance_needed += site.maintenance_needed_count
        planned_total += _count_status(site, MaintenanceStatus.PLANNED)
        done_total += _count_status(site, MaintenanceStatus.DONE)

        if site.contract_stage is ContractStage.RENEWAL_DUE:
            renewal_due += 1
        elif site.contract_stage is ContractStage.EXPIRED:
            expired += 1
        if site.is_late:
            late += 1

        total_terminals += site.terminal_count
        by_region[site.region] += site.terminal_count
        by_type[site.terminal_type] += 1

        year_source = reference_date(site)
        if year_source is not None:
            by_year[year_source.year] += site.terminal_count

    return SummaryView(
        with_maintenance=with_maintenance,
        without_maintenance=total_sites - with_maintenance,
        total_sites=total_sites,
        maintenance_needed=maintenance_needed,
        maintenance_planned_total=planned_total,
        maintenance_done_total=done_total,
        renewal_due=renewal_due,
        expired=expired,
        late=late,
        total_terminals=total_terminals,
        terminals_by_region=MappingProxyType(dict(sorted(by_region.items()))),
        sites_by_type=MappingProxyType(dict(sorted(by_type.items()))),
        terminals_by_year=MappingProxyType(dict(sorted(by_year.items()))),
    )


def region_points(summary: SummaryView) -> list[dict]:
    """Region totals placed on the reference map; unmapped codes are skipped."""
    points = []
    for code, terminals in summary.terminals_by_region.items():
        coords = department_coordinates(code)
        if coords is None:
            continue
        x, y = coords
        points.append({"region": code, "x": x, "y": y, "terminals": terminals})
    return points
