import json
import logging
from datetime import date
from pathlib import Path

from chargesites.common.ids import generate_run_id
from chargesites.common.logging import JsonLineFormatter, build_logger, close_logger, log_event
from chargesites.common.time_utils import parse_as_of


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("run-")


def test_parse_as_of_defaults_and_iso():
    assert parse_as_of("2025-06-01") == date(2025, 6, 1)
    assert isinstance(parse_as_of(None), date)


def test_json_line_formatter_emits_stable_fields():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "stage end", None, None)
    record.stage = "classify"
    record.rows_out = 3

    payload = json.loads(JsonLineFormatter().format(record))

    assert payload["stage"] == "classify"
    assert payload["rows_out"] == 3
    assert payload["run_id"] is None
    assert payload["message"] == "stage end"


def test_build_logger_writes_jsonl_file(tmp_path: Path):
    logger = build_logger("run-log", data_dir=tmp_path)
    log_event(logger, "hello", run_id="run-log", event="TEST", status="ok")
    close_logger(logger)

    lines = (tmp_path / "run_meta" / "run-log.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["event"] == "TEST"
