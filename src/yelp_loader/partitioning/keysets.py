"""
Key set discovery across the full record corpus.

Partition membership depends on the global key universe, so these functions
must see every record before any table is created.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from yelp_loader.shared.models import BusinessRecord, ValueKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributeKeyInfo:
    """A distinct attribute key and the kind of its first supported value."""

    key: str
    kind: ValueKind


@dataclass(frozen=True)
class AttributeKeySet:
    """
    Distinct attribute keys of a corpus.

    Attributes:
        keys: Key -> info for every key that can produce a column, in
            first-seen order
        dropped: Keys that only ever carry objects, arrays or other
            unsupported values; they are never partitioned
    """

    keys: Mapping[str, AttributeKeyInfo]
    dropped: tuple[str, ...] = ()

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def __len__(self) -> int:
        return len(self.keys)

    def kind_of(self, key: str) -> ValueKind | None:
        info = self.keys.get(key)
        return info.kind if info else None


def collect_category_keys(records: Iterable[BusinessRecord]) -> tuple[str, ...]:
    """
    Return every distinct category tag across all records.

    Args:
        records: Business records to scan

    Returns:
        Distinct categories in first-seen order
    """
    seen: dict[str, None] = {}
    for record in records:
        for category in record.categories:
            seen.setdefault(category, None)
    return tuple(seen)


def collect_attribute_keys(records: Iterable[BusinessRecord]) -> AttributeKeySet:
    """
    Return every distinct attribute key across all records.

    UNSUPPORTED values are skipped before deduplication, so the first
    supported occurrence of a key decides its kind and later occurrences with
    another kind are ignored. Keys that never carry a supported value are
    excluded from the result entirely.

    Args:
        records: Business records to scan

    Returns:
        AttributeKeySet of supported keys plus the dropped key names
    """
    supported: dict[str, AttributeKeyInfo] = {}
    unsupported: dict[str, None] = {}
    for record in records:
        for attribute in record.attributes:
            if attribute.kind is ValueKind.UNSUPPORTED:
                unsupported.setdefault(attribute.key, None)
            elif attribute.key not in supported:
                supported[attribute.key] = AttributeKeyInfo(attribute.key, attribute.kind)

    dropped = [key for key in unsupported if key not in supported]
    if dropped:
        logger.warning(
            f"Dropped {len(dropped)} attribute key(s) with unsupported value types: "
            f"{', '.join(dropped)}"
        )

    logger.debug(f"Collected {len(supported)} attribute keys")
    return AttributeKeySet(keys=MappingProxyType(supported), dropped=tuple(dropped))
