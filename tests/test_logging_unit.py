"""Unit tests for structured logging."""

import json
import logging

from curated_reader.logging_config import (
    COMPONENTS,
    ExecutionLogger,
    StructuredFormatter,
    create_execution_logger,
    setup_structured_logging,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "curated_reader.feed_processor", logging.INFO, __file__, 10, "hello %s", ("world",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for JSON log formatting."""

    def test_base_fields(self):
        entry = json.loads(StructuredFormatter().format(make_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "curated_reader.feed_processor"
        assert entry["message"] == "hello world"
        assert "timestamp" in entry

    def test_context_fields_included(self):
        record = make_record(execution_id="exec_1", component="feed_processor", guid="p1")

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["execution_id"] == "exec_1"
        assert entry["component"] == "feed_processor"
        assert entry["guid"] == "p1"

    def test_non_json_values_are_stringified(self):
        entry = json.loads(StructuredFormatter().format(make_record(when=object())))

        assert isinstance(entry["when"], str)


class TestExecutionLogger:
    """Tests for ExecutionLogger context."""

    def test_generates_execution_id(self):
        logger = create_execution_logger("server")

        assert isinstance(logger, ExecutionLogger)
        assert logger.execution_id.startswith("exec_")
        assert logger.logger.name == "curated_reader.server"

    def test_keeps_given_execution_id(self):
        assert create_execution_logger("cli", "run-42").execution_id == "run-42"

    def test_records_carry_context(self, caplog):
        logger = create_execution_logger("feed_processor", "run-1")

        with caplog.at_level(logging.INFO):
            logger.info("Downloading feed content", feed_url="https://example.com")

        record = caplog.records[-1]
        assert record.execution_id == "run-1"
        assert record.component == "feed_processor"
        assert record.feed_url == "https://example.com"

    def test_item_conversion_levels(self, caplog):
        logger = create_execution_logger("feed_processor", "run-1")

        with caplog.at_level(logging.INFO):
            logger.log_item_conversion("p1", "First", success=True)
            logger.log_item_conversion("p2", "Second", success=False)

        assert [r.levelno for r in caplog.records[-2:]] == [logging.INFO, logging.WARNING]
        assert caplog.records[-1].guid == "p2"

    def test_execution_end_reports_duration(self, caplog):
        logger = create_execution_logger("feed_processor", "run-1")

        with caplog.at_level(logging.INFO):
            logger.log_execution_start()
            logger.log_execution_end(success=True, total_items=3)

        record = caplog.records[-1]
        assert record.execution_success is True
        assert record.total_items == 3
        assert record.execution_duration_seconds >= 0


class TestSetupStructuredLogging:
    """Tests for root logger configuration."""

    def test_installs_structured_handler(self):
        root = logging.getLogger()
        original_handlers = root.handlers[:]
        original_level = root.level
        try:
            setup_structured_logging("debug")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
            for component in COMPONENTS:
                logger = logging.getLogger(f"curated_reader.{component}")
                assert logger.level == logging.DEBUG
        finally:
            root.handlers[:] = original_handlers
            root.setLevel(original_level)
