"""
Schema generation for the partition tables.

Partitions become store-agnostic TableDefinitions; the DDL adapter turns them
into statements for a concrete database.
"""

from yelp_loader.schema.ddl import DdlAdapter, SqlAlchemyDdlAdapter, render_ddl
from yelp_loader.schema.definitions import (
    ID_COLUMN,
    ColumnDefinition,
    ColumnType,
    TableDefinition,
)
from yelp_loader.schema.generator import (
    attribute_table_name,
    build_attribute_tables,
    build_category_tables,
    category_table_name,
)
from yelp_loader.schema.naming import normalize_identifier

__all__ = [
    "ID_COLUMN",
    "ColumnDefinition",
    "ColumnType",
    "TableDefinition",
    "DdlAdapter",
    "SqlAlchemyDdlAdapter",
    "render_ddl",
    "attribute_table_name",
    "build_attribute_tables",
    "build_category_tables",
    "category_table_name",
    "normalize_identifier",
]
