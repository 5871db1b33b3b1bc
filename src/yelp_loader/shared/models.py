"""
Core record models for the business loader.

A BusinessRecord is built once per input line and is immutable afterwards.
Its categories and attributes are the open-ended, sparse part of the record;
everything else maps onto fixed columns of the business tables.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ValueKind(str, Enum):
    """Inferred kind of a JSON attribute value."""

    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    UNSUPPORTED = "unsupported"


def infer_value_kind(value: Any) -> ValueKind:
    """
    Infer the kind of a decoded JSON value.

    Booleans are checked before integers because ``bool`` is a subclass of
    ``int``. Objects, arrays, floats and nulls are all UNSUPPORTED and never
    produce a column.

    Args:
        value: Decoded JSON value

    Returns:
        ValueKind for the value
    """
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.INTEGER
    return ValueKind.UNSUPPORTED


class AttributeEntry(BaseModel):
    """One key/value attribute carried by a business."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Attribute name")
    value: Any = Field(None, description="Raw decoded attribute value")
    kind: ValueKind = Field(ValueKind.UNSUPPORTED, description="Inferred value kind")

    @model_validator(mode="before")
    @classmethod
    def infer_kind(cls, data: Any) -> Any:
        """Fill in the kind from the value when it is not given explicitly."""
        if isinstance(data, dict) and "kind" not in data:
            data = {**data, "kind": infer_value_kind(data.get("value"))}
        return data


class OpeningHours(BaseModel):
    """One opening-hours window (a subordinate row of a business)."""

    model_config = ConfigDict(frozen=True)

    day: str = Field(..., min_length=1, description="Day label, e.g. MONDAY")
    open: str = Field(..., description="Opening time of day (HH:MM)")
    close: str = Field(..., description="Closing time of day (HH:MM)")

    @field_validator("day")
    @classmethod
    def uppercase_day(cls, v: str) -> str:
        return v.upper()


class BusinessRecord(BaseModel):
    """A single business with its sparse categories and attributes."""

    model_config = ConfigDict(frozen=True)

    business_id: str = Field(..., min_length=1, description="Stable business identifier")
    name: str | None = None
    full_address: str | None = None
    city: str | None = None
    state: str | None = None
    latitude: float = 0.0
    longitude: float = 0.0
    stars: float = 0.0
    review_count: int = Field(0, ge=0)
    open: bool = False

    hours: tuple[OpeningHours, ...] = ()
    categories: tuple[str, ...] = ()
    attributes: tuple[AttributeEntry, ...] = ()

    @field_validator("latitude", "longitude", "stars", mode="before")
    @classmethod
    def default_missing_float(cls, v: Any) -> Any:
        """Missing coordinates and ratings load as 0.0."""
        return 0.0 if v is None else v

    @field_validator("review_count", mode="before")
    @classmethod
    def default_missing_count(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("categories", mode="before")
    @classmethod
    def dedupe_categories(cls, v: Any) -> Any:
        """Drop repeated tags while keeping first-seen order."""
        if v is None:
            return ()
        if isinstance(v, str):
            raise ValueError("categories must be a list of tags, not a string")
        return tuple(dict.fromkeys(v))

    def scalar_fields(self) -> dict[str, Any]:
        """Return the fixed columns of the business row."""
        return self.model_dump(exclude={"hours", "categories", "attributes"})
