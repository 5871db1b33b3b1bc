"""
Database configuration constants and settings.

Defines the default database path and the SQLite pragmas applied to every
connection opened by the loader.
"""


class DatabaseConfig:
    """Configuration for the target SQLite database."""

    DB_PATH: str = "data/yelp.db"

    # SQLite pragmas applied on each connection via event listeners
    SQLITE_PRAGMAS: dict[str, str | int] = {
        # Write-Ahead Logging mode
        "journal_mode": "WAL",
        "synchronous": "NORMAL",
        "foreign_keys": 1,
        "temp_store": "MEMORY",
        # Negative value = size in KB (64MB cache)
        "cache_size": -64000,
        # Wait up to 5 seconds when database is locked
        "busy_timeout": 5000,
    }

    ECHO_SQL: bool = False

    @classmethod
    def get_db_url(cls, db_path: str | None = None) -> str:
        """
        Get SQLAlchemy database URL for the loader database.

        Args:
            db_path: Database file path (default DB_PATH)

        Returns:
            Database URL string
        """
        return f"sqlite+aiosqlite:///{db_path or cls.DB_PATH}"

    @classmethod
    def get_pragma_commands(cls, pragmas: dict[str, str | int] | None = None) -> list[str]:
        """
        Get list of PRAGMA commands to execute on each connection.

        Returns:
            List of SQL PRAGMA statements
        """
        pragmas = cls.SQLITE_PRAGMAS if pragmas is None else pragmas
        return [f"PRAGMA {pragma}={value}" for pragma, value in pragmas.items()]
