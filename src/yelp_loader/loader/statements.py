"""
Statement generation for the three load batches.

Each batch is an ordered sequence of executable statements that the pipeline
runs inside one transaction:

- schema: drop-if-exists + create for the core and partition tables
- sparse: per-record category flag rows (and attribute value rows)
- entity: per-record opening-hours rows followed by the business row

Record keys are routed with partition_keys again rather than looked up in the
plan; the plan's tables were generated with the same function, so a key always
lands in a table that has its column.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import MetaData, Table
from sqlalchemy.sql.expression import Executable
from sqlalchemy.sql.dml import Insert

from yelp_loader.db.models import CORE_TABLES, Business, BusinessHour
from yelp_loader.loader.plan import LoadPlan
from yelp_loader.partitioning.partitioner import partition_keys
from yelp_loader.schema.ddl import DdlAdapter, SqlAlchemyDdlAdapter
from yelp_loader.schema.definitions import ID_COLUMN
from yelp_loader.schema.generator import (
    attribute_table_name,
    category_table_name,
    column_name_for,
)
from yelp_loader.shared.models import BusinessRecord, ValueKind

logger = logging.getLogger(__name__)

SCHEMA_BATCH = "schema"
SPARSE_BATCH = "sparse"
ENTITY_BATCH = "entity"

# Stored in a category column when the business carries the category
PRESENT = 1


@dataclass(frozen=True)
class Statement:
    """One executable statement with its bound parameters."""

    sql: Executable
    params: dict[str, Any] | None = None

    @property
    def table_name(self) -> str | None:
        target = getattr(self.sql, "table", None)
        if target is None:
            target = getattr(self.sql, "element", None)
        return getattr(target, "name", None)


@dataclass(frozen=True)
class LoadBatch:
    """Statements executed together inside one atomic transaction."""

    name: str
    statements: tuple[Statement, ...]

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self):
        return iter(self.statements)


class StatementBuilder:
    """
    Builds the schema, sparse and entity batches for a LoadPlan.

    Args:
        plan: Load plan produced by the collect stage
        adapter: DDL adapter that realizes table definitions
    """

    def __init__(self, plan: LoadPlan, adapter: DdlAdapter | None = None):
        self.plan = plan
        self.adapter = adapter or SqlAlchemyDdlAdapter()
        self.metadata = MetaData()
        self._tables: dict[str, Table] = {
            definition.name: self.adapter.to_table(definition, self.metadata)
            for definition in plan.tables
        }
        self._inserts: dict[str, Insert] = {}

    @property
    def partition_tables(self) -> dict[str, Table]:
        return dict(self._tables)

    def _insert(self, table: Table) -> Insert:
        if table.name not in self._inserts:
            self._inserts[table.name] = table.insert()
        return self._inserts[table.name]

    def schema_batch(self) -> LoadBatch:
        """Drop-if-exists then create every core and partition table."""
        statements: list[Statement] = []
        for table in (*CORE_TABLES, *self._tables.values()):
            statements.append(Statement(self.adapter.drop_statement(table)))
            statements.append(Statement(self.adapter.create_statement(table)))
        return LoadBatch(SCHEMA_BATCH, tuple(statements))

    def category_statements(self, record: BusinessRecord) -> list[Statement]:
        """One insert per category partition the record touches."""
        statements = []
        partitions = partition_keys(record.categories, self.plan.partition_count)
        for partition, keys in partitions.items():
            params: dict[str, Any] = {ID_COLUMN: record.business_id}
            for key in keys:
                column = column_name_for(key)
                if column is not None:
                    params[column] = PRESENT
            if len(params) == 1:
                continue

            table = self._tables[category_table_name(partition, self.plan.category_table_prefix)]
            statements.append(Statement(self._insert(table), params))
        return statements

    def attribute_values(self, record: BusinessRecord) -> dict[str, Any]:
        """
        Attribute values of a record that have a column in this plan.

        Values whose kind differs from the key's planned kind are skipped,
        and booleans are stored as 0/1.
        """
        values: dict[str, Any] = {}
        for attribute in record.attributes:
            kind = self.plan.attribute_keys.kind_of(attribute.key)
            if kind is None or attribute.key in values:
                continue
            if attribute.kind is not kind:
                logger.debug(
                    f"Skipping {attribute.key!r} of {record.business_id}: "
                    f"{attribute.kind.value} value for a {kind.value} column"
                )
                continue
            values[attribute.key] = int(attribute.value) if kind is ValueKind.BOOLEAN else attribute.value
        return values

    def attribute_statements(self, record: BusinessRecord) -> list[Statement]:
        """One insert per attribute partition the record touches."""
        statements = []
        values = self.attribute_values(record)
        partitions = partition_keys(values, self.plan.partition_count)
        for partition, keys in partitions.items():
            params: dict[str, Any] = {ID_COLUMN: record.business_id}
            for key in keys:
                column = column_name_for(key)
                if column is not None:
                    params.setdefault(column, values[key])
            if len(params) == 1:
                continue

            table = self._tables[attribute_table_name(partition, self.plan.attribute_table_prefix)]
            statements.append(Statement(self._insert(table), params))
        return statements

    def sparse_batch(self, records: Iterable[BusinessRecord]) -> LoadBatch:
        """Category flag and attribute value rows for every record, in input order."""
        statements: list[Statement] = []
        for record in records:
            statements.extend(self.category_statements(record))
            statements.extend(self.attribute_statements(record))
        return LoadBatch(SPARSE_BATCH, tuple(statements))

    def entity_batch(self, records: Iterable[BusinessRecord]) -> LoadBatch:
        """Opening-hours rows followed by the business row for every record."""
        hour_insert = self._insert(BusinessHour.__table__)
        business_insert = self._insert(Business.__table__)

        statements: list[Statement] = []
        for record in records:
            for hours in record.hours:
                statements.append(
                    Statement(
                        hour_insert,
                        {
                            ID_COLUMN: record.business_id,
                            "day": hours.day,
                            "open": hours.open,
                            "close": hours.close,
                        },
                    )
                )
            statements.append(Statement(business_insert, record.scalar_fields()))
        return LoadBatch(ENTITY_BATCH, tuple(statements))
