"""Tests for the JSONL logging sink."""

import json
import logging

from rezolver.logging_setup import JsonlHandler
from rezolver.logging_setup import init_json_logging


def read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_records_are_written_as_json_lines(tmp_path):
    log_file = tmp_path / "logs" / "rezolver.log.jsonl"
    init_json_logging(log_file, "debug")

    logger = logging.getLogger("rezolver.loaders.base")
    logger.debug("first")
    logger.warning("second", extra={"event": "resolve:miss", "search_path": "app.yaml"})

    first, second = read_lines(log_file)
    assert first["lvl"] == "DEBUG"
    assert first["logger"] == "rezolver.loaders.base"
    assert first["message"] == "first"
    assert first["schema"] == {"name": "rezolver.log", "ver": "1.0.0"}
    assert "ts" in first
    assert second["event"] == "resolve:miss"
    assert second["search_path"] == "app.yaml"


def test_level_filters_records(tmp_path):
    log_file = tmp_path / "rezolver.log.jsonl"
    init_json_logging(log_file, "WARNING")

    logging.getLogger("rezolver.settings").info("hidden")
    logging.getLogger("rezolver.settings").warning("shown")

    assert [line["message"] for line in read_lines(log_file)] == ["shown"]


def test_exception_is_formatted(tmp_path):
    log_file = tmp_path / "rezolver.log.jsonl"
    init_json_logging(log_file, "ERROR")

    try:
        raise ValueError("boom")
    except ValueError:
        logging.getLogger("rezolver").exception("failed")

    (line,) = read_lines(log_file)
    assert "ValueError: boom" in line["exc"]


def test_repeated_init_keeps_single_handler(tmp_path):
    init_json_logging(tmp_path / "first.jsonl", "INFO")
    handler = init_json_logging(tmp_path / "second.jsonl", "INFO")

    handlers = [h for h in logging.getLogger("rezolver").handlers if isinstance(h, JsonlHandler)]
    assert handlers == [handler]

    logging.getLogger("rezolver").info("only once")
    assert not (tmp_path / "first.jsonl").exists()
    assert len(read_lines(tmp_path / "second.jsonl")) == 1
