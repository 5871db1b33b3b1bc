"""Unit tests for the SQLAlchemy DDL adapter."""

from sqlalchemy import Integer, MetaData, SmallInteger, String
from sqlalchemy.dialects import sqlite

from yelp_loader.schema.ddl import IDENTIFIER_LENGTH, SqlAlchemyDdlAdapter, render_ddl
from yelp_loader.schema.definitions import ColumnDefinition, ColumnType, TableDefinition

CATEGORY_TABLE = TableDefinition(
    name="business_category_3",
    partition=2,
    columns=(
        ColumnDefinition("business_id", ColumnType.IDENTIFIER, nullable=False, primary_key=True),
        ColumnDefinition("bars", ColumnType.FLAG, default=0, source_key="bars"),
        ColumnDefinition("nightlife", ColumnType.FLAG, default=0, source_key="nightlife"),
    ),
)

ATTRIBUTE_TABLE = TableDefinition(
    name="business_attribute_1",
    partition=0,
    columns=(
        ColumnDefinition("business_id", ColumnType.IDENTIFIER, nullable=False, primary_key=True),
        ColumnDefinition("price_range", ColumnType.INTEGER, source_key="Price Range"),
        ColumnDefinition("alcohol", ColumnType.STRING, source_key="Alcohol"),
    ),
)


class TestSqlAlchemyDdlAdapter:
    """Test realization of table definitions as SQLAlchemy tables."""

    def test_to_table(self):
        adapter = SqlAlchemyDdlAdapter()
        table = adapter.to_table(CATEGORY_TABLE, MetaData())

        assert table.name == "business_category_3"
        assert [c.name for c in table.columns] == ["business_id", "bars", "nightlife"]
        assert [c.name for c in table.primary_key.columns] == ["business_id"]
        assert isinstance(table.c.business_id.type, String)
        assert table.c.business_id.type.length == IDENTIFIER_LENGTH
        assert not table.c.business_id.nullable
        assert isinstance(table.c.bars.type, SmallInteger)
        assert table.c.bars.nullable
        assert table.c.bars.server_default is not None

    def test_value_column_types(self):
        table = SqlAlchemyDdlAdapter().to_table(ATTRIBUTE_TABLE, MetaData())

        assert isinstance(table.c.price_range.type, Integer)
        assert isinstance(table.c.alcohol.type, String)
        assert table.c.alcohol.server_default is None

    def test_to_table_reuses_existing(self):
        adapter = SqlAlchemyDdlAdapter()
        metadata = MetaData()

        first = adapter.to_table(CATEGORY_TABLE, metadata)
        second = adapter.to_table(CATEGORY_TABLE, metadata)

        assert first is second


class TestRenderDdl:
    """Test DDL rendering to SQL text."""

    def test_drop_then_create(self):
        statements = render_ddl([CATEGORY_TABLE], sqlite.dialect())

        assert len(statements) == 2
        assert statements[0] == "DROP TABLE IF EXISTS business_category_3;"
        assert statements[1].startswith("CREATE TABLE business_category_3")
        assert statements[1].endswith(";")

    def test_create_statement_contents(self):
        create = render_ddl([CATEGORY_TABLE], sqlite.dialect())[1]

        assert "business_id VARCHAR(45) NOT NULL" in create
        assert "bars SMALLINT DEFAULT 0" in create
        assert "nightlife SMALLINT DEFAULT 0" in create
        assert "PRIMARY KEY (business_id)" in create

    def test_multiple_tables_in_order(self):
        statements = render_ddl([CATEGORY_TABLE, ATTRIBUTE_TABLE], sqlite.dialect())

        assert len(statements) == 4
        assert "business_category_3" in statements[1]
        assert "business_attribute_1" in statements[3]
        assert "price_range INTEGER" in statements[3]
        assert "alcohol VARCHAR(255)" in statements[3]

    def test_custom_adapter(self):
        """A swapped adapter changes the emitted DDL."""

        class WideStringAdapter(SqlAlchemyDdlAdapter):
            TYPE_MAP = {**SqlAlchemyDdlAdapter.TYPE_MAP, ColumnType.STRING: String(1000)}

        statements = render_ddl([ATTRIBUTE_TABLE], sqlite.dialect(), WideStringAdapter())

        assert "alcohol VARCHAR(1000)" in statements[1]
