"""Unit tests for category and attribute key set discovery."""

import logging

import pytest

from yelp_loader.partitioning.keysets import (
    AttributeKeyInfo,
    collect_attribute_keys,
    collect_category_keys,
)
from yelp_loader.shared.models import BusinessRecord, ValueKind


def _record(business_id: str, categories=(), attributes=None) -> BusinessRecord:
    return BusinessRecord(
        business_id=business_id,
        categories=categories,
        attributes=[{"key": k, "value": v} for k, v in (attributes or {}).items()],
    )


class TestCollectCategoryKeys:
    """Test collect_category_keys."""

    def test_distinct_in_first_seen_order(self):
        records = [
            _record("b1", ["bars", "nightlife"]),
            _record("b2", ["bars"]),
            _record("b3", ["italian"]),
        ]

        assert collect_category_keys(records) == ("bars", "nightlife", "italian")

    def test_no_records(self):
        assert collect_category_keys([]) == ()

    def test_records_without_categories(self):
        assert collect_category_keys([_record("b1"), _record("b2")]) == ()

    def test_accepts_generator(self):
        records = (_record(f"b{i}", ["bars"]) for i in range(3))

        assert collect_category_keys(records) == ("bars",)


class TestCollectAttributeKeys:
    """Test collect_attribute_keys."""

    def test_supported_kinds(self):
        records = [
            _record("b1", attributes={"good_for_kids": True}),
            _record("b2", attributes={"price_range": "expensive"}),
            _record("b3", attributes={"noise_level": 3}),
        ]

        key_set = collect_attribute_keys(records)

        assert list(key_set.keys) == ["good_for_kids", "price_range", "noise_level"]
        assert key_set.kind_of("good_for_kids") is ValueKind.BOOLEAN
        assert key_set.kind_of("price_range") is ValueKind.STRING
        assert key_set.kind_of("noise_level") is ValueKind.INTEGER
        assert key_set.dropped == ()

    def test_nested_values_are_dropped(self, caplog):
        """Object and array values never reach partitioning."""
        records = [
            _record("b1", attributes={"good_for_kids": True}),
            _record("b2", attributes={"menu": {"appetizers": ["bruschetta"]}}),
            _record("b3", attributes={"payment_types": ["cash", "visa"]}),
        ]

        with caplog.at_level(logging.WARNING):
            key_set = collect_attribute_keys(records)

        assert "menu" not in key_set
        assert "payment_types" not in key_set
        assert len(key_set) == 1
        assert key_set.dropped == ("menu", "payment_types")
        assert "menu" in caplog.text

    def test_first_seen_kind_wins(self):
        records = [
            _record("b1", attributes={"price_range": 2}),
            _record("b2", attributes={"price_range": "expensive"}),
        ]

        key_set = collect_attribute_keys(records)

        assert key_set.keys["price_range"] == AttributeKeyInfo("price_range", ValueKind.INTEGER)

    def test_first_supported_value_defines_key(self):
        """A nested value seen first does not hide a later scalar value."""
        records = [
            _record("b1", attributes={"parking": {"garage": False}}),
            _record("b2", attributes={"parking": True}),
            _record("b3", attributes={"parking": "street"}),
        ]

        key_set = collect_attribute_keys(records)

        assert "parking" in key_set
        assert key_set.kind_of("parking") is ValueKind.BOOLEAN
        assert key_set.dropped == ()

    def test_key_dropped_only_without_supported_value(self):
        records = [
            _record("b1", attributes={"ambience": {"romantic": True}}),
            _record("b2", attributes={"ambience": ["casual"], "wifi": {"paid": False}}),
            _record("b3", attributes={"wifi": "free"}),
        ]

        key_set = collect_attribute_keys(records)

        assert list(key_set.keys) == ["wifi"]
        assert key_set.dropped == ("ambience",)

    def test_result_is_read_only(self):
        key_set = collect_attribute_keys([_record("b1", attributes={"wifi": "free"})])

        with pytest.raises(TypeError):
            key_set.keys["other"] = AttributeKeyInfo("other", ValueKind.STRING)
