"""
JSON-lines reader for business dumps.

Each non-blank line of the input holds one business object in the shape of
the Yelp academic dataset business file::

    {"business_id": "vcNAWiLM4dR7D2nwwJ7nCA",
     "full_address": "4840 E Indian School Rd\\nPhoenix, AZ 85018",
     "hours": {"Tuesday": {"close": "17:00", "open": "08:00"}},
     "open": true,
     "categories": ["Doctors", "Health & Medical"],
     "city": "Phoenix", "review_count": 9, "name": "Eric Goldberg, MD",
     "longitude": -111.98375799999999, "state": "AZ", "stars": 3.5,
     "latitude": 33.499313000000001,
     "attributes": {"By Appointment Only": true}}
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from yelp_loader.shared.exceptions import RecordParseError
from yelp_loader.shared.models import AttributeEntry, BusinessRecord, OpeningHours

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    "business_id",
    "name",
    "full_address",
    "city",
    "state",
    "latitude",
    "longitude",
    "stars",
    "review_count",
    "open",
)


def _parse_hours(hours: Any) -> list[OpeningHours]:
    if not hours:
        return []
    if not isinstance(hours, dict):
        raise ValueError(f"hours must be an object, got {type(hours).__name__}")
    return [
        OpeningHours(day=day, open=window["open"], close=window["close"])
        for day, window in hours.items()
    ]


def _parse_attributes(attributes: Any) -> list[AttributeEntry]:
    if not attributes:
        return []
    if not isinstance(attributes, dict):
        raise ValueError(f"attributes must be an object, got {type(attributes).__name__}")
    return [AttributeEntry(key=key.lower(), value=value) for key, value in attributes.items()]


def parse_business(obj: dict[str, Any]) -> BusinessRecord:
    """
    Build a BusinessRecord from one decoded business object.

    Attribute names are lowercased and opening-hours day names uppercased.
    Nested attribute objects are kept as UNSUPPORTED entries; they are
    dropped when the attribute key set is collected.

    Args:
        obj: Decoded JSON object

    Returns:
        Immutable BusinessRecord

    Raises:
        ValueError: If the object is missing required fields or has the
            wrong shape (pydantic ValidationError is a ValueError)
    """
    if not isinstance(obj, dict):
        raise ValueError(f"Expected a JSON object, got {type(obj).__name__}")

    data = {field: obj[field] for field in SCALAR_FIELDS if field in obj}
    return BusinessRecord(
        **data,
        categories=obj.get("categories") or (),
        hours=_parse_hours(obj.get("hours")),
        attributes=_parse_attributes(obj.get("attributes")),
    )


def read_businesses(path: str | Path, encoding: str = "utf-8") -> Iterator[BusinessRecord]:
    """
    Yield one BusinessRecord per non-blank line of a JSON-lines file.

    Args:
        path: Input file
        encoding: File encoding

    Yields:
        BusinessRecord values in file order

    Raises:
        FileNotFoundError: If the file does not exist
        RecordParseError: If a line is not valid JSON or not a valid business
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    count = 0
    with file_path.open("r", encoding=encoding) as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                record = parse_business(json.loads(line))
            except json.JSONDecodeError as e:
                raise RecordParseError(
                    "Invalid JSON", line_number=line_number, file_path=file_path, original_error=e
                ) from e
            except (ValidationError, ValueError, KeyError, TypeError) as e:
                raise RecordParseError(
                    "Invalid business record",
                    line_number=line_number,
                    file_path=file_path,
                    original_error=e,
                ) from e
            count += 1
            yield record

    logger.info(f"Read {count} businesses from {file_path}")
