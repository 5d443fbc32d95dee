"""Tests for logging setup."""

import json
import logging

from keyfinder.utils.logging import (
    StandardFormatter,
    StructuredFormatter,
    get_contextual_logger,
    setup_logging,
)


def _record(message, **extra):
    record = logging.LogRecord("keyfinder.test", logging.INFO, __file__, 10, message, None, None)
    for name, value in extra.items():
        setattr(record, name, value)
    return record


def test_structured_formatter_emits_json():
    line = StructuredFormatter().format(_record("Resolved key"))
    data = json.loads(line)

    assert data["message"] == "Resolved key"
    assert data["level"] == "INFO"
    assert data["logger"] == "keyfinder.test"


def test_structured_formatter_includes_context():
    record = _record("Resolved key", extra_fields={"table": "SALES.ORDERS"})
    data = json.loads(StructuredFormatter().format(record))
    assert data["table"] == "SALES.ORDERS"


def test_standard_formatter():
    line = StandardFormatter().format(_record("Resolved key"))
    assert "keyfinder.test - INFO - Resolved key" in line


def test_contextual_logger_attaches_fields(caplog):
    logger = get_contextual_logger("keyfinder.test", {"table": "EVENTS"})
    with caplog.at_level(logging.INFO, logger="keyfinder.test"):
        logger.info("Resolved key")

    assert caplog.records[-1].extra_fields == {"table": "EVENTS"}


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "keyfinder.log"
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    try:
        setup_logging("DEBUG", structured=True, log_file=str(log_file))
        logging.getLogger("keyfinder.test").debug("probe executed")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert logging.getLogger("teradatasql").level == logging.WARNING
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "probe executed"
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
