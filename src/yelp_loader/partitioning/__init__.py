"""
Key-space partitioning.

Deterministically shards the open-ended category and attribute key sets
into a fixed number of buckets so that no generated table grows unboundedly
wide.
"""

from yelp_loader.partitioning.hashing import FNV64_OFFSET_BASIS, FNV64_PRIME, fnv1a_64
from yelp_loader.partitioning.keysets import (
    AttributeKeyInfo,
    AttributeKeySet,
    collect_attribute_keys,
    collect_category_keys,
)
from yelp_loader.partitioning.partitioner import (
    DEFAULT_PARTITION_COUNT,
    assign_partition,
    partition_keys,
)

__all__ = [
    "FNV64_OFFSET_BASIS",
    "FNV64_PRIME",
    "fnv1a_64",
    "DEFAULT_PARTITION_COUNT",
    "assign_partition",
    "partition_keys",
    "AttributeKeyInfo",
    "AttributeKeySet",
    "collect_attribute_keys",
    "collect_category_keys",
]
