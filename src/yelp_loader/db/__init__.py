"""
Database connection and transaction management for the business loader.

Usage:
    from yelp_loader.db import create_engine, get_transaction

    engine = create_engine("data/yelp.db")
    async with get_transaction(engine, "schema") as conn:
        ...
"""

from yelp_loader.db.config import DatabaseConfig
from yelp_loader.db.engine import (
    check_engine_health,
    create_engine,
    dispose_engines,
    get_engine,
)
from yelp_loader.db.session import get_transaction

__all__ = [
    "DatabaseConfig",
    "create_engine",
    "get_engine",
    "dispose_engines",
    "check_engine_health",
    "get_transaction",
]
