import json
import logging
from pathlib import Path

from ogp2gbl.common.fs import expand_inputs
from ogp2gbl.common.logging import build_logger, close_logger, log_event


def test_expand_inputs_sorts_and_dedupes(tmp_path: Path):
    for name in ("b.json", "a.json", "c.txt"):
        (tmp_path / name).write_text("[]", encoding="utf-8")

    pattern = str(tmp_path / "*.json")
    paths = expand_inputs([pattern, str(tmp_path / "a.json")])

    assert paths == [tmp_path / "a.json", tmp_path / "b.json"]


def test_expand_inputs_keeps_missing_literal_paths(tmp_path: Path):
    missing = tmp_path / "missing.json"
    assert expand_inputs([str(missing), str(tmp_path / "*.nothing")]) == [missing]


def test_build_logger_writes_json_lines(tmp_path: Path):
    logger = build_logger("run-log-test", log_dir=tmp_path)
    try:
        log_event(logger, "hello", run_id="run-log-test", stage="run", event="RUN_START", status="ok")
        log_event(logger, "hidden", level=logging.DEBUG, event="RECORD_ACCEPTED")
    finally:
        close_logger(logger)

    lines = (tmp_path / "run-log-test.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["message"] == "hello"
    assert payload["event"] == "RUN_START"
    assert payload["level"] == "INFO"
    assert payload["record_id"] is None
    assert not logger.handlers
