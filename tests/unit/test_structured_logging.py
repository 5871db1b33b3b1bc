"""Unit tests for structured logging functionality."""

import json
import logging

from yelp_loader.shared.logging_config import configure_logging
from yelp_loader.shared.logging_utils import StructuredLogger, get_structured_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_generate_run_id(self):
        """Test run ID generation."""
        logger = get_structured_logger("test")
        run_id = logger.generate_run_id()

        assert run_id.startswith("RUN_")
        assert len(run_id) == 16  # RUN_ + 12 hex chars

    def test_start_and_end_run(self):
        logger = get_structured_logger("test")

        assert logger.run_id is None

        assert logger.start_run("RUN_TEST") == "RUN_TEST"
        assert logger.run_id == "RUN_TEST"

        logger.end_run()
        assert logger.run_id is None

    def test_start_run_generates_id(self):
        logger = get_structured_logger("test")

        run_id = logger.start_run()

        assert run_id.startswith("RUN_")
        assert logger.run_id == run_id

    def test_structured_log_format(self, caplog):
        """Test that logs are formatted as JSON with correct fields."""
        logger = get_structured_logger("test.module")
        logger.start_run("RUN_123")

        with caplog.at_level(logging.INFO):
            logger.info("Creating tables", phase="schema", statements=42)

        assert len(caplog.records) == 1
        log_data = json.loads(caplog.records[0].message)

        assert log_data["level"] == "INFO"
        assert log_data["message"] == "Creating tables"
        assert log_data["run_id"] == "RUN_123"
        assert "timestamp" in log_data
        assert log_data["context"] == {"phase": "schema", "statements": 42}

    def test_log_without_run_id(self, caplog):
        logger = get_structured_logger("test.module")

        with caplog.at_level(logging.INFO):
            logger.info("Outside a run")

        log_data = json.loads(caplog.records[0].message)
        assert log_data["run_id"] == "none"
        assert "context" not in log_data

    def test_different_log_levels(self, caplog):
        """Test all log levels."""
        logger = StructuredLogger("test.levels")

        with caplog.at_level(logging.DEBUG):
            logger.debug("Debug message")
            logger.info("Info message")
            logger.warning("Warning message")
            logger.error("Error message")

        levels = [json.loads(r.message)["level"] for r in caplog.records]
        assert levels == ["DEBUG", "INFO", "WARNING", "ERROR"]
        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
        ]

    def test_non_json_context_values(self, caplog):
        """Context values that are not JSON types are stringified."""
        logger = get_structured_logger("test.module")

        with caplog.at_level(logging.INFO):
            logger.info("Failed", error=ValueError("boom"))

        assert json.loads(caplog.records[0].message)["context"]["error"] == "boom"


class TestConfigureLogging:
    """Test root logging configuration."""

    def test_quiets_library_loggers(self):
        configure_logging(level="DEBUG")

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("aiosqlite").level == logging.WARNING
