import json
import logging
from pathlib import Path

from city_coords.common.constants import JSON_LOG_FIELDS
from city_coords.common.logging import ConsoleFormatter, JsonLineFormatter, build_logger, log_event


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("city_coords.t", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_console_formatter_prefixes_progress():
    record = _record("Wrote 1_US.json with 2 states", progress=50)
    assert ConsoleFormatter().format(record) == "[ 50%] Wrote 1_US.json with 2 states"


def test_console_formatter_plain_message():
    assert ConsoleFormatter().format(_record("Loaded 250 countries")) == "Loaded 250 countries"


def test_json_line_formatter_emits_stable_schema():
    payload = json.loads(JsonLineFormatter().format(_record("hello", run_id="run-1", country_id=4)))
    assert set(payload) == set(JSON_LOG_FIELDS)
    assert payload["run_id"] == "run-1"
    assert payload["country_id"] == 4
    assert payload["message"] == "hello"


def test_build_logger_writes_jsonl_file(tmp_path: Path):
    logger = build_logger("run-log", log_dir=tmp_path / "meta")
    log_event(logger, "Loaded 2 countries", run_id="run-log", event="LOAD_END", rows_out=2)
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "meta" / "run-log.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["rows_out"] == 2


def test_build_logger_without_log_dir_has_only_console(capsys):
    logger = build_logger("run-console", log_dir=None)
    log_event(logger, "Processing complete!")
    assert len(logger.handlers) == 1
    assert "Processing complete!" in capsys.readouterr().out
