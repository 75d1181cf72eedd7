"""Site list filtering for dashboard and export views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from chargesites.common.models import ClassifiedSite, ContractStage
from chargesites.common.text import normalize_text

MAINTENANCE_CHOICES = ("oui", "non")
TODO_CHOICES = ("todo", "done", "late")


@dataclass(frozen=True)
class SiteFilter:
    stage: ContractStage | None = None
    maintenance: str | None = None
    todo: str | None = None
    region: str | None = None
    search: str | None = None

    def is_empty(self) -> bool:
        return not any((self.stage, self.maintenance, self.todo, self.region, self.search))

    def to_dict(self) -> dict[str, str | None]:
        return {
            "stage": self.stage.name if self.stage else None,
            "maintenance": self.maintenance,
            "todo": self.todo,
            "region": self.region,
            "search": self.search,
        }


def _matches_search(site: ClassifiedSite, needle: str) -> bool:
    haystack = (site.site_name, site.address, site.contact, site.brand, site.id)
    return any(needle in normalize_text(value) for value in haystack)


def matches(site: ClassifiedSite, site_filter: SiteFilter) -> bool:
    if site_filter.stage is not None and site.contract_stage is not site_filter.stage:
        return False

    if site_filter.maintenance == "oui" and not site.has_maintenance_contract:
        return False
    if site_filter.maintenance == "non" and site.has_maintenance_contract:
        return False

    if site_filter.todo == "todo" and site.maintenance_needed_count == 0:
        return False
    if site_filter.todo == "done" and site.maintenance_needed_count > 0:
        return False
    if site_filter.todo == "late" and not site.is_late:
        return False

    if site_filter.region and site.region != site_filter.region:
        return False

    if site_filter.search:
        needle = normalize_text(site_filter.search)
        if needle and not _matches_search(site, needle):
            return False

    return True


def filter_sites(sites: Iterable[ClassifiedSite], site_filter: SiteFilter | None = None) -> list[ClassifiedSite]:
    if site_filter is None or site_filter.is_empty():
        return list(sites)
    return [site for site in sites if matches(site, site_filter)]
