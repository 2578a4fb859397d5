import json
import logging
import sys

import pytest

from screen2code.utils.fancy_log import FancyLogger, JsonFormatter


@pytest.fixture
def log_path(tmp_path, monkeypatch):
    path = tmp_path / "logs" / "screen2code.log"
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FILE_ENABLED", "true")
    monkeypatch.setenv("LOG_FILE_PATH", str(path))
    return path


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_json_file_logging_carries_generation_context(log_path, monkeypatch):
    monkeypatch.setenv("LOG_JSON_LOGGING", "true")
    logger = FancyLogger("screen2code.tests.json")

    logger.warning("Generation failed for image abc", extra={"image_id": "abc"})
    logger.info("Normalized output", extra={"code_format": "flutter"})
    _close(logger)

    first, second = [json.loads(line) for line in log_path.read_text().splitlines()]
    assert first["level"] == "WARNING"
    assert first["name"] == "screen2code.tests.json"
    assert first["message"] == "Generation failed for image abc"
    assert first["image_id"] == "abc"
    assert "code_format" not in first
    assert second["code_format"] == "flutter"


def test_plain_file_logging(log_path):
    logger = FancyLogger("screen2code.tests.plain")

    logger.debug("Added image abc")
    _close(logger)

    line = log_path.read_text().strip()
    assert line.endswith(" - screen2code.tests.plain - DEBUG - Added image abc")


def test_file_logging_disabled_by_default(monkeypatch):
    monkeypatch.setenv("LOG_FILE_ENABLED", "false")
    logger = FancyLogger("screen2code.tests.console")

    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    _close(logger)


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad output")
    except ValueError:
        record = logging.LogRecord(
            "screen2code", logging.ERROR, __file__, 1, "Preview failed", None, sys.exc_info()
        )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Preview failed"
    assert "ValueError: bad output" in payload["exception"]
