from __future__ import annotations

import logging
from io import StringIO
from unittest.mock import patch

import sortable_table.logging.init
from sortable_table.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def _capture(logger: logging.Logger) -> StringIO:
    captured_output = StringIO()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured_output)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    return captured_output


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()

    assert logger.name == "sortable_table"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    """INFO|WARN|ERROR|SUMMARY prefixes."""
    logger = setup_logging()
    captured_output = _capture(logger)

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_engine_module_records_reach_package_handler():
    logger = setup_logging()
    captured_output = _capture(logger)

    logging.getLogger("sortable_table.services.sort_engine").warning("sort ignored")

    assert captured_output.getvalue() == "WARN sort ignored\n"


def test_get_logger_returns_configured_logger():
    setup_logger = setup_logging()
    assert get_logger() is setup_logger
    assert get_logger().name == LOGGER_NAME


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_summary_level_logging():
    logger = setup_logging()
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"

    with patch.object(logger, "_log") as mock_log:
        logger.log(SUMMARY_LEVEL, "tables=1 indexed=1 rows=3 visible=3 elapsed_sec=0.01")
        mock_log.assert_called_once()


def test_log_summary_convenience_function():
    logger = setup_logging()
    captured_output = _capture(logger)

    log_summary("tables=2 indexed=1 rows=3 visible=2 elapsed_sec=0.5")

    assert captured_output.getvalue() == (
        "SUMMARY tables=2 indexed=1 rows=3 visible=2 elapsed_sec=0.5\n"
    )


def test_set_debug_lowers_logger_and_handlers():
    logger = setup_logging()
    set_debug(logger)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)


def test_reset_logging_drops_handlers():
    logger = setup_logging()
    sortable_table.logging.init.reset_logging()
    assert logger.handlers == []
    assert sortable_table.logging.init._logger is None
