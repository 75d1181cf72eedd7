"""CLI entrypoint for the charging-site maintenance tracker."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from datetime import date
from pathlib import Path

from chargesites.common.config_loader import ConfigBundle, load_all_configs
from chargesites.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS, SITES_FILENAME
from chargesites.common.errors import PipelineError
from chargesites.common.ids import generate_run_id
from chargesites.common.logging import build_logger, close_logger, log_event
from chargesites.common.models import ClassifiedSite, ContractStage
from chargesites.common.time_utils import parse_as_of
from chargesites.pipeline.aggregate import summarize
from chargesites.pipeline.classify_sites import classify_records
from chargesites.pipeline.export import write_sites_csv
from chargesites.pipeline.filters import MAINTENANCE_CHOICES, TODO_CHOICES, SiteFilter, filter_sites
from chargesites.pipeline.ingest import ingest_rows, load_rows
from chargesites.pipeline.reports import write_summary_report

STAGE_CHOICES = [stage.name.lower() for stage in ContractStage]


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=[*COMMANDS, "all"])
    parser.add_argument("--input", default=None, help="row batch (.json or .csv); defaults to <data-dir>/in/sites.json")
    parser.add_argument("--as-of", default=None, help="evaluation date (YYYY-MM-DD); defaults to today UTC")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--strict", action="store_true")
    parser.add_argument("--stage", default=None, choices=STAGE_CHOICES)
    parser.add_argument("--maintenance", default=None, choices=list(MAINTENANCE_CHOICES))
    parser.add_argument("--todo", default=None, choices=list(TODO_CHOICES))
    parser.add_argument("--region", default=None)
    parser.add_argument("--search", default=None)
    return parser.parse_args(argv)


def build_filter(args: argparse.Namespace) -> SiteFilter:
    return SiteFilter(
        stage=ContractStage[args.stage.upper()] if args.stage else None,
        maintenance=args.maintenance,
        todo=args.todo,
        region=args.region,
        search=args.search,
    )


def load_sites(args: argparse.Namespace, bundle: ConfigBundle, data_dir: Path, as_of: date, logger, run_id: str):
    input_path = Path(args.input) if args.input else data_dir / "in" / "sites.json"
    started = time.monotonic()
    rows = load_rows(input_path, bundle.column_map)
    records, stats = ingest_rows(rows, bundle.column_map)
    sites = classify_records(records, as_of, bundle.contract_rules)
    log_event(
        logger,
        f"ingested {input_path.name}",
        run_id=run_id,
        stage="ingest",
        event="STAGE_END",
        status="ok",
        rows_in=stats.rows_in,
        rows_out=stats.rows_retained,
        duration_ms=round((time.monotonic() - started) * 1000),
    )
    return sites


def execute_command(
    command: str,
    sites: list[ClassifiedSite],
    site_filter: SiteFilter,
    data_dir: Path,
    run_id: str,
    as_of: date,
) -> Path:
    selected = filter_sites(sites, site_filter)
    if command == "classify":
        return write_sites_csv(data_dir / "out" / SITES_FILENAME, selected)
    if command == "summary":
        return write_summary_report(
            data_dir,
            run_id=run_id,
            as_of=as_of,
            summary=summarize(selected),
            site_filter=site_filter,
        )
    raise ValueError(f"Unknown command: {command}")


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    data_dir = Path(args.data_dir)

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    try:
        try:
            as_of = parse_as_of(args.as_of)
            bundle = load_all_configs(config_dir, overlay_config_dir=overlay_config_dir)
            sites = load_sites(args, bundle, data_dir, as_of, logger, run_id)
        except PipelineError as exc:
            log_event(
                logger,
                str(exc),
                run_id=run_id,
                stage="ingest",
                event="STAGE_FAIL",
                status="error",
                error_code=exc.error_code,
            )
            return EXIT_HARD_FAIL
        except Exception as exc:
            log_event(
                logger,
                f"unexpected failure while loading: {exc}",
                level=logging.ERROR,
                run_id=run_id,
                stage="ingest",
                event="STAGE_FAIL",
                status="error",
                error_code="UNEXPECTED_ERROR",
            )
            return EXIT_HARD_FAIL

        site_filter = build_filter(args)
        commands = COMMANDS if args.command == "all" else (args.command,)
        had_partial_failure = False

        for command in commands:
            log_event(logger, "stage start", run_id=run_id, stage=command, event="STAGE_START", status="ok")
            try:
                out_path = execute_command(command, sites, site_filter, data_dir, run_id, as_of)
            except PipelineError as exc:
                had_partial_failure = True
                log_event(
                    logger,
                    f"stage failed: {exc}",
                    run_id=run_id,
                    stage=command,
                    event="STAGE_FAIL",
                    status="error",
                    error_code=exc.error_code,
                )
                if exc.error_code == "CONTRACT_ERROR" or args.strict:
                    return EXIT_HARD_FAIL
                continue
            except Exception as exc:
                had_partial_failure = True
                log_event(
                    logger,
                    f"unexpected failure in {command}: {exc}",
                    level=logging.ERROR,
                    run_id=run_id,
                    stage=command,
                    event="STAGE_FAIL",
                    status="error",
                    error_code="UNEXPECTED_ERROR",
                )
                if args.strict:
                    return EXIT_HARD_FAIL
                continue
            log_event(
                logger,
                f"wrote {out_path.name}",
                run_id=run_id,
                stage=command,
                event="STAGE_END",
                status="ok",
                rows_in=len(sites),
            )

        if had_partial_failure:
            return EXIT_PARTIAL
        return EXIT_SUCCESS
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
