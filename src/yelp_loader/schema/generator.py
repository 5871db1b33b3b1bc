"""
Generation of partition table definitions.

One table is generated per non-empty partition. Column names come from
normalize_identifier; the partition index (not the column name) decides
which table a key lives in.
"""

import logging
from collections.abc import Iterable, Mapping

from yelp_loader.partitioning.keysets import AttributeKeyInfo
from yelp_loader.schema.definitions import (
    ID_COLUMN,
    ColumnDefinition,
    ColumnType,
    TableDefinition,
)
from yelp_loader.schema.naming import normalize_identifier
from yelp_loader.shared.models import ValueKind

logger = logging.getLogger(__name__)

CATEGORY_TABLE_PREFIX = "business_category_"
ATTRIBUTE_TABLE_PREFIX = "business_attribute_"

# Attribute value kind -> column type of its value column
ATTRIBUTE_COLUMN_TYPES: dict[ValueKind, ColumnType] = {
    ValueKind.BOOLEAN: ColumnType.FLAG,
    ValueKind.INTEGER: ColumnType.INTEGER,
    ValueKind.STRING: ColumnType.STRING,
}

_ID_COLUMN_DEFINITION = ColumnDefinition(
    name=ID_COLUMN,
    type=ColumnType.IDENTIFIER,
    nullable=False,
    primary_key=True,
)


def category_table_name(partition: int, prefix: str = CATEGORY_TABLE_PREFIX) -> str:
    """Name of the category table for a partition (numbered from 1)."""
    return f"{prefix}{partition + 1}"


def attribute_table_name(partition: int, prefix: str = ATTRIBUTE_TABLE_PREFIX) -> str:
    """Name of the attribute table for a partition (numbered from 1)."""
    return f"{prefix}{partition + 1}"


def column_name_for(key: str) -> str | None:
    """
    Column identifier for a key, or None if the key cannot have a column.

    Keys that normalize to nothing, or onto the identifier column, are
    unusable.
    """
    name = normalize_identifier(key)
    if not name or name == ID_COLUMN:
        return None
    return name


def _build_table(
    name: str,
    partition: int,
    keys: Iterable[str],
    column_for_key,
) -> TableDefinition | None:
    columns: dict[str, ColumnDefinition] = {}
    for key in keys:
        column_name = column_name_for(key)
        if column_name is None:
            logger.warning(f"Key {key!r} has no usable column name; skipped in {name}")
            continue
        if column_name in columns:
            logger.warning(
                f"Key {key!r} collides with {columns[column_name].source_key!r} "
                f"on column {name}.{column_name}; sharing the column"
            )
            continue
        columns[column_name] = column_for_key(key, column_name)

    if not columns:
        return None

    return TableDefinition(
        name=name,
        partition=partition,
        columns=(_ID_COLUMN_DEFINITION, *columns.values()),
    )


def build_category_tables(
    partitions: Mapping[int, Iterable[str]],
    prefix: str = CATEGORY_TABLE_PREFIX,
) -> tuple[TableDefinition, ...]:
    """
    Build one presence-flag table per non-empty category partition.

    Each key gets a nullable small-integer column defaulting to 0.

    Args:
        partitions: Partition index -> category keys
        prefix: Table name prefix

    Returns:
        Table definitions ordered by partition index
    """

    def flag_column(key: str, column_name: str) -> ColumnDefinition:
        return ColumnDefinition(
            name=column_name,
            type=ColumnType.FLAG,
            nullable=True,
            default=0,
            source_key=key,
        )

    tables = []
    for partition in sorted(partitions):
        table = _build_table(
            category_table_name(partition, prefix),
            partition,
            partitions[partition],
            flag_column,
        )
        if table is not None:
            tables.append(table)

    logger.debug(f"Generated {len(tables)} category table definitions")
    return tuple(tables)


def build_attribute_tables(
    partitions: Mapping[int, Iterable[str]],
    attribute_keys: Mapping[str, AttributeKeyInfo],
    prefix: str = ATTRIBUTE_TABLE_PREFIX,
) -> tuple[TableDefinition, ...]:
    """
    Build one value table per non-empty attribute partition.

    Mirrors build_category_tables, except that each column's type follows
    the key's first-seen value kind and has no default (NULL means the
    business does not carry the attribute).

    Args:
        partitions: Partition index -> attribute keys
        attribute_keys: Key -> first-seen info, from collect_attribute_keys
        prefix: Table name prefix

    Returns:
        Table definitions ordered by partition index

    Raises:
        KeyError: If a partitioned key has no info or an unsupported kind
    """

    def value_column(key: str, column_name: str) -> ColumnDefinition:
        kind = attribute_keys[key].kind
        return ColumnDefinition(
            name=column_name,
            type=ATTRIBUTE_COLUMN_TYPES[kind],
            nullable=True,
            source_key=key,
        )

    tables = []
    for partition in sorted(partitions):
        table = _build_table(
            attribute_table_name(partition, prefix),
            partition,
            partitions[partition],
            value_column,
        )
        if table is not None:
            tables.append(table)

    logger.debug(f"Generated {len(tables)} attribute table definitions")
    return tuple(tables)
