"""
Collect stage of a load run.

Scans the complete record corpus, partitions the category and attribute key
sets and generates the partition table definitions. The resulting LoadPlan is
immutable and must be complete before the schema phase starts.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from yelp_loader.partitioning.keysets import (
    AttributeKeySet,
    collect_attribute_keys,
    collect_category_keys,
)
from yelp_loader.partitioning.partitioner import DEFAULT_PARTITION_COUNT, partition_keys
from yelp_loader.schema.definitions import TableDefinition
from yelp_loader.schema.generator import (
    ATTRIBUTE_TABLE_PREFIX,
    CATEGORY_TABLE_PREFIX,
    build_attribute_tables,
    build_category_tables,
)
from yelp_loader.shared.models import BusinessRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadPlan:
    """
    Immutable key -> partition mapping and table definitions for one run.

    Attributes:
        partition_count: Number of partitions per key space
        category_partitions: Partition index -> category keys (all indexes)
        category_tables: Definitions of the non-empty category partitions
        attribute_keys: Supported attribute keys with their first-seen kinds
        attribute_partitions: Partition index -> attribute keys (all indexes)
        attribute_tables: Definitions of the non-empty attribute partitions
    """

    partition_count: int
    category_partitions: Mapping[int, tuple[str, ...]]
    category_tables: tuple[TableDefinition, ...]
    attribute_keys: AttributeKeySet
    attribute_partitions: Mapping[int, tuple[str, ...]]
    attribute_tables: tuple[TableDefinition, ...]
    category_table_prefix: str = CATEGORY_TABLE_PREFIX
    attribute_table_prefix: str = ATTRIBUTE_TABLE_PREFIX

    @property
    def category_keys(self) -> tuple[str, ...]:
        return tuple(k for keys in self.category_partitions.values() for k in keys)

    @property
    def tables(self) -> tuple[TableDefinition, ...]:
        return self.category_tables + self.attribute_tables

    def category_partition_of(self, key: str) -> int:
        """Partition index a category key was assigned to."""
        for partition, keys in self.category_partitions.items():
            if key in keys:
                return partition
        raise KeyError(key)


def _freeze(partitions: dict[int, list[str]]) -> Mapping[int, tuple[str, ...]]:
    return MappingProxyType({i: tuple(keys) for i, keys in partitions.items()})


def build_load_plan(
    records: Sequence[BusinessRecord],
    partition_count: int = DEFAULT_PARTITION_COUNT,
    category_table_prefix: str = CATEGORY_TABLE_PREFIX,
    attribute_table_prefix: str = ATTRIBUTE_TABLE_PREFIX,
    include_attributes: bool = True,
) -> LoadPlan:
    """
    Build the load plan for a fully materialized record corpus.

    Args:
        records: Every record of the run
        partition_count: Number of partitions per key space
        category_table_prefix: Category table name prefix
        attribute_table_prefix: Attribute table name prefix
        include_attributes: If False, no attribute keys are planned

    Returns:
        LoadPlan for the corpus

    Raises:
        InvalidPartitionCountError: If partition_count is not a positive int
    """
    category_keys = collect_category_keys(records)
    category_partitions = partition_keys(category_keys, partition_count)
    category_tables = build_category_tables(category_partitions, category_table_prefix)

    if include_attributes:
        attribute_keys = collect_attribute_keys(records)
    else:
        attribute_keys = AttributeKeySet(keys=MappingProxyType({}))
    attribute_partitions = partition_keys(attribute_keys.keys, partition_count)
    attribute_tables = build_attribute_tables(
        attribute_partitions, attribute_keys.keys, attribute_table_prefix
    )

    logger.info(
        f"Planned {len(category_keys)} categories across {len(category_tables)} tables "
        f"and {len(attribute_keys)} attributes across {len(attribute_tables)} tables "
        f"(N={partition_count})"
    )

    return LoadPlan(
        partition_count=partition_count,
        category_partitions=_freeze(category_partitions),
        category_tables=category_tables,
        attribute_keys=attribute_keys,
        attribute_partitions=_freeze(attribute_partitions),
        attribute_tables=attribute_tables,
        category_table_prefix=category_table_prefix,
        attribute_table_prefix=attribute_table_prefix,
    )
