"""
Hash-based assignment of keys to a fixed number of partitions.

The same functions are used when generating the partition tables and when
routing a record's keys at insert time; both phases must agree or rows would
target columns that do not exist.
"""

from collections.abc import Iterable

from yelp_loader.partitioning.hashing import fnv1a_64
from yelp_loader.shared.exceptions import InvalidPartitionCountError

DEFAULT_PARTITION_COUNT = 10


def _check_partition_count(partition_count: int) -> None:
    if (
        isinstance(partition_count, bool)
        or not isinstance(partition_count, int)
        or partition_count <= 0
    ):
        raise InvalidPartitionCountError(partition_count)


def assign_partition(key: str, partition_count: int = DEFAULT_PARTITION_COUNT) -> int:
    """
    Return the partition index of a key.

    The raw key is hashed, not its normalized column name, so changes to
    normalization never move a key to another partition.

    Args:
        key: Raw category or attribute key
        partition_count: Number of partitions (N > 0)

    Returns:
        Index in [0, partition_count)

    Raises:
        InvalidPartitionCountError: If partition_count is not a positive int
    """
    _check_partition_count(partition_count)
    return fnv1a_64(key) % partition_count


def partition_keys(
    keys: Iterable[str], partition_count: int = DEFAULT_PARTITION_COUNT
) -> dict[int, list[str]]:
    """
    Group keys by partition index.

    Every index 0..N-1 is present in the result, empty or not. Keys keep the
    iteration order of the input within each partition.

    Args:
        keys: Distinct keys to partition
        partition_count: Number of partitions (N > 0)

    Returns:
        Mapping of partition index to the keys assigned to it

    Raises:
        InvalidPartitionCountError: If partition_count is not a positive int
    """
    _check_partition_count(partition_count)

    partitions: dict[int, list[str]] = {i: [] for i in range(partition_count)}
    for key in keys:
        partitions[fnv1a_64(key) % partition_count].append(key)
    return partitions
