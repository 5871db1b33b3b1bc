"""
Transaction management for load batches.

Every load batch runs on its own connection inside exactly one transaction.
The connection is owned by the batch until it is committed or rolled back,
and is always closed before the next batch starts.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def get_transaction(engine: AsyncEngine, name: str = "batch") -> AsyncIterator[AsyncConnection]:
    """
    Context manager for one atomic batch with automatic transaction handling.

    This context manager:
    - Opens a new connection and begins a transaction
    - Commits on successful completion
    - Rolls back on any exception and re-raises it
    - Always closes the connection

    Args:
        engine: Engine to connect with
        name: Batch name used in log messages

    Yields:
        AsyncConnection bound to the open transaction

    Example:
        >>> async with get_transaction(engine, "schema") as conn:
        ...     await conn.execute(CreateTable(table))
        ...     # Automatically committed on exit

    Raises:
        Any exception from database operations (after rollback)
    """
    conn = await engine.connect()
    try:
        trans = await conn.begin()
        try:
            yield conn
            await trans.commit()
            logger.debug(f"{name} transaction committed successfully")
        except Exception as e:
            await trans.rollback()
            logger.error(f"{name} transaction rolled back due to error: {e}")
            raise
    finally:
        await conn.close()
        logger.debug(f"{name} connection closed")
