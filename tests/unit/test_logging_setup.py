"""Test to check if logging works as per the configured settings"""

import json
import logging

from config.logging import JsonFormatter, setup_logging, get_logger

setup_logging()


def test_logger_level(caplog):
    """Function to test the test logger"""
    logger = get_logger("test")

    # Check that the log level is set to DEBUG as per the config dict
    assert logger.level == logging.DEBUG

    # Check that there is at least one handler attached
    assert logger.handlers

    # Capture log messages with caplog
    with caplog.at_level(logging.DEBUG):
        logger.debug("This is a debug message.")
        logger.info("This is an info message.")
        logger.warning("This is a warning message.")
        logger.error("This is a error message.")

    levels = [rec.levelno for rec in caplog.records]
    messages = [rec.message for rec in caplog.records]

    assert levels == [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR]
    assert "This is a debug message." in messages
    assert "This is a error message." in messages


def test_dead_letter_logger_propagates(caplog):
    """Dead-letter lines reach the root handlers as well as their own file"""
    logger = get_logger("dead_letter")

    assert logger.propagate
    assert logger.handlers

    with caplog.at_level(logging.INFO):
        logger.info("Dead-letter record: test")

    assert "Dead-letter record: test" in caplog.text


def test_dead_letter_lines_are_valid_json():
    """Quotes in a dead-letter payload are escaped in the JSON line"""
    handler = get_logger("dead_letter").handlers[0]
    assert isinstance(handler.formatter, JsonFormatter)

    record = logging.LogRecord(
        "dead_letter", logging.INFO, __file__, 1,
        "Dead-letter record: %s", ('{"driver": "VER"}',), None,
    )
    entry = json.loads(handler.formatter.format(record))

    assert entry["logger"] == "dead_letter"
    assert entry["level"] == "INFO"
    assert entry["message"] == 'Dead-letter record: {"driver": "VER"}'
