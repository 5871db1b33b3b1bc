"""
Database engine creation and management.

Provides async SQLAlchemy engines with SQLite pragma enforcement and
transactional DDL.
"""

import logging
from pathlib import Path

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from yelp_loader.db.config import DatabaseConfig

logger = logging.getLogger(__name__)

# Module-level engine cache
_default_engine: AsyncEngine | None = None


def create_engine(
    db_path: str,
    pragmas: dict[str, str | int] | None = None,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create an async SQLAlchemy engine for SQLite with proper configuration.

    This function creates an engine with:
    - aiosqlite async driver
    - StaticPool (appropriate for SQLite's single-file nature)
    - PRAGMA enforcement via connection event listeners
    - An explicit BEGIN on every transaction, so CREATE/DROP TABLE are
      rolled back together with the rest of a failed batch

    Args:
        db_path: Path to SQLite database file
        pragmas: PRAGMA settings to apply on each connection.
                If None, uses DatabaseConfig.SQLITE_PRAGMAS
        echo: If True, log all SQL queries

    Returns:
        Configured AsyncEngine instance

    Example:
        >>> engine = create_engine("data/yelp.db")
        >>> async with engine.begin() as conn:
        ...     await conn.execute(text("SELECT 1"))
    """
    if pragmas is None:
        pragmas = DatabaseConfig.SQLITE_PRAGMAS

    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(
        DatabaseConfig.get_db_url(db_path),
        poolclass=StaticPool,
        echo=echo,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Disable the driver's implicit transactions, then apply PRAGMAs."""
        # Driver autobegin skips DDL; do_begin emits BEGIN instead
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            for command in DatabaseConfig.get_pragma_commands(pragmas):
                cursor.execute(command)
            logger.debug(f"Applied {len(pragmas)} PRAGMAs to connection for {db_path}")
        except Exception as e:
            logger.error(f"Failed to apply PRAGMAs to {db_path}: {e}")
            raise
        finally:
            cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    logger.info(f"Created async engine for database: {db_path}")
    return engine


def get_engine(db_path: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """
    Get or create the default loader engine (singleton).

    Args:
        db_path: Database path used on first creation (default
            DatabaseConfig.DB_PATH)
        echo: SQL echo flag used on first creation

    Returns:
        AsyncEngine for the loader database
    """
    global _default_engine

    if _default_engine is None:
        _default_engine = create_engine(
            db_path=db_path or DatabaseConfig.DB_PATH,
            echo=DatabaseConfig.ECHO_SQL if echo is None else echo,
        )
        logger.info("Initialized loader database engine")

    return _default_engine


async def dispose_engines() -> None:
    """
    Dispose of the default engine and close its connections.

    Should be called before the process exits.
    """
    global _default_engine

    if _default_engine is not None:
        await _default_engine.dispose()
        logger.info("Disposed loader database engine")
        _default_engine = None


async def check_engine_health(engine: AsyncEngine) -> bool:
    """
    Check if a database engine is healthy and can execute queries.

    Args:
        engine: AsyncEngine to check

    Returns:
        True if engine is healthy, False otherwise
    """
    try:
        async with engine.begin() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.scalar()
        return True
    except Exception as e:
        logger.error(f"Engine health check failed: {e}")
        return False
