import json
import shutil
from pathlib import Path

import pytest

from chargesites.cli import parse_args, run_command
from chargesites.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS

FIXTURE = Path("tests/fixtures/sites_batch.json")


def _args(command: str, data_dir: Path, *extra: str):
    return parse_args(
        [
            command,
            "--input",
            str(FIXTURE),
            "--config-dir",
            "config",
            "--data-dir",
            str(data_dir),
            "--as-of",
            "2025-06-01",
            "--run-id",
            "run-test",
            *extra,
        ]
    )


@pytest.mark.integration
def test_cli_all_generates_expected_artifacts(tmp_path: Path):
    data_dir = tmp_path / "data"

    exit_code = run_command(_args("all", data_dir))

    assert exit_code == EXIT_SUCCESS
    assert (data_dir / "out" / "sites.csv").exists()
    assert (data_dir / "out" / "reports" / "summary.json").exists()
    assert (data_dir / "run_meta" / "run-test.log.jsonl").exists()


@pytest.mark.integration
def test_cli_summary_counts(tmp_path: Path):
    data_dir = tmp_path / "data"
    assert run_command(_args("summary", data_dir)) == EXIT_SUCCESS

    payload = json.loads((data_dir / "out" / "reports" / "summary.json").read_text(encoding="utf-8"))
    summary = payload["summary"]

    assert payload["as_of"] == "2025-06-01"
    assert summary["total_sites"] == 4
    assert summary["with_maintenance"] == 3
    assert summary["without_maintenance"] == 1
    assert summary["maintenance_needed"] == 2
    assert summary["maintenance_planned_total"] == 3
    assert summary["maintenance_done_total"] == 1
    assert summary["renewal_due"] == 1
    assert summary["expired"] == 1
    assert summary["late"] == 2
    assert summary["total_terminals"] == 8
    assert summary["terminals_by_region"] == {"33": 4, "69": 2, "75": 2, "Unknown": 0}
    assert summary["terminals_by_year"] == {"2019": 4, "2022": 2, "2023": 2}
    assert {point["region"] for point in payload["region_points"]} == {"33", "69", "75"}


@pytest.mark.integration
def test_cancelled_rows_are_absent_everywhere(tmp_path: Path):
    data_dir = tmp_path / "data"
    assert run_command(_args("all", data_dir)) == EXIT_SUCCESS

    sites_csv = (data_dir / "out" / "sites.csv").read_text(encoding="utf-8")
    summary = json.loads((data_dir / "out" / "reports" / "summary.json").read_text(encoding="utf-8"))["summary"]

    assert "AF-102" not in sites_csv
    assert "13" not in summary["terminals_by_region"]


@pytest.mark.integration
def test_cli_filters_apply_to_both_outputs(tmp_path: Path):
    data_dir = tmp_path / "data"
    assert run_command(_args("all", data_dir, "--todo", "late")) == EXIT_SUCCESS

    lines = (data_dir / "out" / "sites.csv").read_text(encoding="utf-8").splitlines()
    payload = json.loads((data_dir / "out" / "reports" / "summary.json").read_text(encoding="utf-8"))

    assert [line.split(",")[0] for line in lines[1:]] == ["1-AF-101", "5-AF-105"]
    assert payload["filter"]["todo"] == "late"
    assert payload["summary"]["total_sites"] == 2


@pytest.mark.integration
def test_cli_missing_input_is_hard_failure(tmp_path: Path):
    args = parse_args(
        [
            "all",
            "--input",
            str(tmp_path / "missing.json"),
            "--config-dir",
            "config",
            "--data-dir",
            str(tmp_path / "data"),
            "--run-id",
            "run-missing",
        ]
    )

    assert run_command(args) == EXIT_HARD_FAIL
    log_lines = (tmp_path / "data" / "run_meta" / "run-missing.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(log_lines[-1])["error_code"] == "INPUT_ERROR"


def _last_log_event(data_dir: Path, run_id: str) -> dict:
    log_lines = (data_dir / "run_meta" / f"{run_id}.log.jsonl").read_text(encoding="utf-8").splitlines()
    return json.loads(log_lines[-1])


@pytest.mark.integration
def test_cli_malformed_rules_yaml_is_logged_hard_failure(tmp_path: Path):
    config_dir = tmp_path / "config"
    shutil.copytree("config", config_dir)
    (config_dir / "rules.yml").write_text("contract: [unclosed\n", encoding="utf-8")
    data_dir = tmp_path / "data"

    exit_code = run_command(_args("all", data_dir, "--config-dir", str(config_dir)))

    assert exit_code == EXIT_HARD_FAIL
    event = _last_log_event(data_dir, "run-test")
    assert event["event"] == "STAGE_FAIL"
    assert event["stage"] == "ingest"
    assert event["error_code"] == "UNEXPECTED_ERROR"


@pytest.mark.integration
def test_cli_invalid_as_of_is_logged_hard_failure(tmp_path: Path):
    data_dir = tmp_path / "data"

    exit_code = run_command(_args("all", data_dir, "--as-of", "01/06/2025"))

    assert exit_code == EXIT_HARD_FAIL
    event = _last_log_event(data_dir, "run-test")
    assert event["event"] == "STAGE_FAIL"
    assert event["error_code"] == "UNEXPECTED_ERROR"


@pytest.mark.integration
def test_cli_out_of_range_serial_date_does_not_abort_run(tmp_path: Path):
    batch = tmp_path / "huge_serial.json"
    huge_serial = "1" + "0" * 400
    batch.write_text(
        '{"rows": ['
        '{"A": "Statut", "D": "Site", "R": "Site avec maintenance"}, '
        '{"A": "Réalisé", "D": "Gare", "E": "2 rue Neuve, 75002 Paris", "I": "2x22kW", '
        f'"L": {huge_serial}, "O": {huge_serial}, "R": "oui"}}'
        "]}",
        encoding="utf-8",
    )
    data_dir = tmp_path / "data"

    exit_code = run_command(_args("all", data_dir, "--input", str(batch)))

    assert exit_code == EXIT_SUCCESS
    payload = json.loads((data_dir / "out" / "reports" / "summary.json").read_text(encoding="utf-8"))
    assert payload["summary"]["total_sites"] == 1
