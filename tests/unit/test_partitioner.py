"""Unit tests for hash-based key partitioning."""

import pytest

_hyp = pytest.importorskip("hypothesis")
from hypothesis import given
from hypothesis import strategies as st

from yelp_loader.partitioning.hashing import fnv1a_64
from yelp_loader.partitioning.partitioner import (
    DEFAULT_PARTITION_COUNT,
    assign_partition,
    partition_keys,
)
from yelp_loader.shared.exceptions import InvalidPartitionCountError


class TestAssignPartition:
    """Test single-key partition assignment."""

    def test_default_partition_count(self):
        assert DEFAULT_PARTITION_COUNT == 10
        assert assign_partition("bars") == fnv1a_64("bars") % 10

    def test_single_partition(self):
        """With N=1 every key lands in partition 0."""
        assert assign_partition("anything", 1) == 0

    def test_raw_key_is_hashed(self):
        """The raw key decides the partition, not its column name."""
        assert assign_partition("Arts & Entertainment", 7) == fnv1a_64("Arts & Entertainment") % 7

    @pytest.mark.parametrize("count", [0, -1, -10])
    def test_non_positive_count(self, count):
        """N <= 0 should raise InvalidPartitionCountError."""
        with pytest.raises(InvalidPartitionCountError):
            assign_partition("bars", count)

    @pytest.mark.parametrize("count", [2.0, "10", None, True])
    def test_non_integer_count(self, count):
        with pytest.raises(InvalidPartitionCountError):
            assign_partition("bars", count)

    def test_invalid_count_is_value_error(self):
        with pytest.raises(ValueError, match="positive integer"):
            assign_partition("bars", 0)


class TestPartitionKeys:
    """Test grouping of key sets into partitions."""

    def test_all_partitions_present(self):
        """Every index 0..N-1 is in the result, empty or not."""
        partitions = partition_keys(["bars"], 10)

        assert sorted(partitions) == list(range(10))
        assert sum(len(keys) for keys in partitions.values()) == 1

    def test_empty_key_set(self):
        partitions = partition_keys([], 4)

        assert partitions == {0: [], 1: [], 2: [], 3: []}

    def test_input_order_kept_within_partition(self):
        """Keys keep their input order inside a partition."""
        keys = [f"key_{i}" for i in range(50)]
        partitions = partition_keys(keys, 1)

        assert partitions[0] == keys

    def test_matches_assign_partition(self):
        keys = ["bars", "nightlife", "italian", "Health & Medical"]
        partitions = partition_keys(keys, 10)

        for key in keys:
            assert key in partitions[assign_partition(key, 10)]

    def test_invalid_count(self):
        with pytest.raises(InvalidPartitionCountError):
            partition_keys(["bars"], 0)

    @given(
        keys=st.sets(st.text(min_size=1, max_size=30), min_size=1, max_size=40),
        count=st.integers(min_value=1, max_value=32),
    )
    def test_totality_and_exclusivity(self, keys, count):
        """Each key is in exactly one bucket and the buckets cover the key set."""
        partitions = partition_keys(keys, count)

        placed = [key for bucket in partitions.values() for key in bucket]
        assert len(placed) == len(keys)
        assert set(placed) == keys
        assert all(0 <= index < count for index in partitions)

    @given(
        keys=st.lists(st.text(max_size=20), unique=True, max_size=40),
        count=st.integers(min_value=1, max_value=16),
    )
    def test_stable_across_calls(self, keys, count):
        """Partitioning the same keys twice gives identical buckets."""
        assert partition_keys(keys, count) == partition_keys(list(keys), count)
