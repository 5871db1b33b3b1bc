"""Structured logging utilities for load runs."""
import json
import logging
import uuid
from datetime import UTC, datetime
from typing import Any


class StructuredLogger:
    """Structured logger that tags every event with the current run id."""

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)
        self._run_id: str | None = None

    @property
    def run_id(self) -> str | None:
        return self._run_id

    def start_run(self, run_id: str | None = None) -> str:
        """Begin tagging events with a run id, generating one if needed."""
        self._run_id = run_id or self.generate_run_id()
        return self._run_id

    def end_run(self):
        self._run_id = None

    def generate_run_id(self) -> str:
        """Generate new run id."""
        return f"RUN_{uuid.uuid4().hex[:12]}"

    def _format_message(self, level: str, message: str, **kwargs) -> dict:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            "run_id": self._run_id or "none",
        }

        if kwargs:
            log_entry["context"] = kwargs

        return log_entry

    def _emit(self, level: int, message: str, **kwargs: Any):
        entry = self._format_message(logging.getLevelName(level), message, **kwargs)
        self.logger.log(level, json.dumps(entry, default=str))

    def info(self, message: str, **kwargs):
        self._emit(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._emit(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._emit(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs):
        self._emit(logging.DEBUG, message, **kwargs)


def get_structured_logger(name: str) -> StructuredLogger:
    """Get or create structured logger."""
    return StructuredLogger(name)
