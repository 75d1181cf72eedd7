"""Summary report writer."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from chargesites.common.constants import SUMMARY_FILENAME
from chargesites.common.fs import write_json
from chargesites.pipeline.aggregate import SummaryView, region_points
from chargesites.pipeline.filters import SiteFilter


def write_summary_report(
    data_dir: Path,
    *,
    run_id: str,
    as_of: date,
    summary: SummaryView,
    site_filter: SiteFilter | None = None,
) -> Path:
    summary_path = data_dir / "out" / "reports" / SUMMARY_FILENAME
    payload = {
        "run_id": run_id,
        "as_of": as_of.isoformat(),
        "filter": (site_filter or SiteFilter()).to_dict(),
        "summary": summary.to_dict(),
        "region_points": region_points(summary),
    }
    write_json(summary_path, payload)
    return summary_path
