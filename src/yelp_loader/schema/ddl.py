"""
DDL adapter for generated table definitions.

The schema generator only knows TableDefinitions; this module is the single
place that maps them onto a concrete store through SQLAlchemy. Swapping the
adapter changes the emitted DDL without touching partitioning.
"""

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import Column, Integer, MetaData, SmallInteger, String, Table, text
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import CreateTable, DropTable, ExecutableDDLElement
from sqlalchemy.types import TypeEngine

from yelp_loader.schema.definitions import ColumnDefinition, ColumnType, TableDefinition

IDENTIFIER_LENGTH = 45
STRING_LENGTH = 255


class DdlAdapter(Protocol):
    """Turns table definitions into store tables and DDL statements."""

    def to_table(self, definition: TableDefinition, metadata: MetaData) -> Table: ...

    def drop_statement(self, table: Table) -> ExecutableDDLElement: ...

    def create_statement(self, table: Table) -> ExecutableDDLElement: ...


class SqlAlchemyDdlAdapter:
    """Default adapter: SQLAlchemy Core tables with DROP IF EXISTS + CREATE."""

    TYPE_MAP: dict[ColumnType, TypeEngine] = {
        ColumnType.IDENTIFIER: String(IDENTIFIER_LENGTH),
        ColumnType.FLAG: SmallInteger(),
        ColumnType.INTEGER: Integer(),
        ColumnType.STRING: String(STRING_LENGTH),
    }

    def column_type(self, column: ColumnDefinition) -> TypeEngine:
        return self.TYPE_MAP[column.type]

    def to_column(self, column: ColumnDefinition) -> Column:
        server_default = None
        if column.default is not None:
            server_default = text(repr(column.default))
        return Column(
            column.name,
            self.column_type(column),
            primary_key=column.primary_key,
            nullable=column.nullable and not column.primary_key,
            server_default=server_default,
        )

    def to_table(self, definition: TableDefinition, metadata: MetaData) -> Table:
        """
        Realize a definition on the given metadata.

        Calling it twice for the same definition returns the existing table.
        """
        if definition.name in metadata.tables:
            return metadata.tables[definition.name]
        return Table(
            definition.name,
            metadata,
            *(self.to_column(c) for c in definition.columns),
        )

    def drop_statement(self, table: Table) -> ExecutableDDLElement:
        return DropTable(table, if_exists=True)

    def create_statement(self, table: Table) -> ExecutableDDLElement:
        return CreateTable(table)


def render_ddl(
    definitions: Iterable[TableDefinition],
    dialect: Dialect,
    adapter: DdlAdapter | None = None,
) -> list[str]:
    """
    Compile drop/create DDL for definitions to SQL text.

    Args:
        definitions: Table definitions to render
        dialect: Target SQLAlchemy dialect, e.g. ``sqlite.dialect()``
        adapter: DDL adapter (default SqlAlchemyDdlAdapter)

    Returns:
        SQL statements, drop before create for each table
    """
    adapter = adapter or SqlAlchemyDdlAdapter()
    metadata = MetaData()
    statements: list[str] = []
    for definition in definitions:
        table = adapter.to_table(definition, metadata)
        for ddl in (adapter.drop_statement(table), adapter.create_statement(table)):
            statements.append(str(ddl.compile(dialect=dialect)).strip() + ";")
    return statements
