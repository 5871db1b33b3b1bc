"""
Base class for the fixed (non-partitioned) ORM tables.

Partition tables are generated at run time on their own MetaData and are not
declared here.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for the core business tables."""

    pass
