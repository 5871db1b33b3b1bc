"""
Custom exceptions for the business loader.

This module contains specialized exception classes for hashing, partitioning,
record parsing and transactional batch execution.
"""

from pathlib import Path


class YelpLoaderError(Exception):
    """Base exception for all business loader errors."""

    pass


class HashInputError(YelpLoaderError, TypeError):
    """Exception raised when a value that is neither bytes nor str is hashed."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Cannot hash value of type {type(value).__name__}; expected bytes or str"
        )


class InvalidPartitionCountError(YelpLoaderError, ValueError):
    """Exception raised when a partition count is not a positive integer."""

    def __init__(self, partition_count: object):
        self.partition_count = partition_count
        super().__init__(
            f"Partition count must be a positive integer, got {partition_count!r}"
        )


class RecordParseError(YelpLoaderError):
    """Exception raised when an input line cannot be turned into a record."""

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        file_path: Path | None = None,
        original_error: Exception | None = None,
    ):
        self.line_number = line_number
        self.file_path = file_path
        self.original_error = original_error

        error_parts = [message]

        if file_path:
            error_parts.append(f"File: {file_path}")

        if line_number is not None:
            error_parts.append(f"Line: {line_number}")

        if original_error:
            error_parts.append(f"Original error: {original_error}")

        super().__init__(" | ".join(error_parts))


class BatchExecutionError(YelpLoaderError):
    """Exception raised when a statement fails inside a transactional batch.

    The batch has already been rolled back by the time this is raised.
    """

    def __init__(self, phase: str, original_error: Exception):
        self.phase = phase
        self.original_error = original_error
        super().__init__(f"{phase} failed: {original_error}")


class SchemaExecutionError(BatchExecutionError):
    """DDL failure during the schema phase."""

    pass


class DataExecutionError(BatchExecutionError):
    """DML failure during one of the data phase transactions."""

    pass
