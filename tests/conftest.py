"""
Pytest configuration and fixtures for business loader tests.

Provides sample business records, JSON-lines input files and temporary
SQLite engines.
"""

import json
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import inspect, text

from yelp_loader.db.engine import create_engine
from yelp_loader.services.reader import parse_business


@pytest.fixture
def sample_business_data() -> list[dict]:
    """Three businesses in the JSON shape of the academic dataset."""
    return [
        {
            "business_id": "b1",
            "full_address": "4840 E Indian School Rd\nPhoenix, AZ 85018",
            "hours": {
                "Friday": {"close": "02:00", "open": "17:00"},
                "Saturday": {"close": "02:00", "open": "17:00"},
            },
            "open": True,
            "categories": ["bars", "nightlife"],
            "city": "Phoenix",
            "review_count": 9,
            "name": "The Rusty Spur",
            "longitude": -111.983758,
            "state": "AZ",
            "stars": 3.5,
            "latitude": 33.499313,
            "attributes": {"Good For Kids": False, "Alcohol": "full_bar"},
        },
        {
            "business_id": "b2",
            "full_address": "202 McClure St\nDravosburg, PA 15034",
            "hours": {},
            "open": True,
            "categories": ["bars"],
            "city": "Dravosburg",
            "review_count": 4,
            "name": "Clancy's Pub",
            "longitude": -79.88693,
            "state": "PA",
            "stars": 3.0,
            "latitude": 40.350519,
            "attributes": {"Good For Kids": True, "Price Range": 2},
        },
        {
            "business_id": "b3",
            "full_address": "1 Mill St\nLas Vegas, NV 89101",
            "hours": {"Monday": {"close": "22:00", "open": "11:00"}},
            "open": False,
            "categories": ["italian"],
            "city": "Las Vegas",
            "review_count": 120,
            "name": "Nonna's",
            "longitude": -115.1398,
            "state": "NV",
            "stars": 4.5,
            "latitude": 36.1699,
            "attributes": {"Ambience": {"romantic": True, "casual": False}},
        },
    ]


@pytest.fixture
def sample_records(sample_business_data):
    """Parsed BusinessRecord values for sample_business_data."""
    return [parse_business(obj) for obj in sample_business_data]


@pytest.fixture
def business_file(tmp_path, sample_business_data) -> Path:
    """JSON-lines file holding sample_business_data."""
    path = tmp_path / "businesses.json"
    with path.open("w", encoding="utf-8") as f:
        for obj in sample_business_data:
            f.write(json.dumps(obj) + "\n")
    return path


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "db" / "yelp.db"


@pytest_asyncio.fixture
async def engine(db_path):
    """AsyncEngine on a fresh temporary SQLite file."""
    engine = create_engine(str(db_path))
    yield engine
    await engine.dispose()


async def _fetch_all(engine, sql: str, **params) -> list[dict]:
    async with engine.connect() as conn:
        result = await conn.execute(text(sql), params)
        return [dict(row._mapping) for row in result]


async def _table_names(engine) -> set[str]:
    async with engine.connect() as conn:
        return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))


@pytest.fixture
def fetch_all():
    """Async helper: fetch_all(engine, sql, **params) -> rows as dicts."""
    return _fetch_all


@pytest.fixture
def table_names():
    """Async helper: table_names(engine) -> set of table names."""
    return _table_names
