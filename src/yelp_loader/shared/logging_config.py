"""Logging configuration for the loader CLI."""
import logging
import sys


def configure_logging(level: str = "INFO", json_format: bool = False):
    """Configure root logging for a load run.

    Structured pipeline events are already JSON encoded, so the JSON format
    prints the bare message.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s" if json_format else "%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stdout,
    )

    # SQL echo is controlled by DatabaseSettings.echo_sql, not the log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
