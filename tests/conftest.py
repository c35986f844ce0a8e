"""Pytest fixtures."""

from datetime import datetime
from typing import Optional

import pytest
from fastapi import Query
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from api.deps import get_context
from api.main import app
from api.mock_data import get_mock_listings
from api.models import Listing
from api.source import SourceContext, normalize_source
from api.sql import listings, metadata


@pytest.fixture
def scenario_listings() -> list:
    """The three-listing collection used across the query tests."""
    return [
        Listing(id=1, title="Flat one", city="A", type="flat", price=100),
        Listing(id=2, title="House two", city="A", type="house", price=200),
        Listing(id=3, title="Flat three", city="B", type="flat", price=150),
    ]


@pytest.fixture
def sample_rows() -> list:
    return [
        {"id": 1, "title": "Sunny flat", "city": "Lyon", "type": "flat", "price": 200000,
         "beds": 2, "area_m2": 50, "address": "1 Rue A", "created_at": datetime(2024, 1, 1)},
        {"id": 2, "title": "Big house", "city": "Lyon", "type": "house", "price": 450000,
         "beds": 4, "area_m2": 130, "address": None, "created_at": datetime(2024, 3, 1)},
        {"id": 3, "title": "Tiny studio", "city": "Paris", "type": "studio", "price": 150000,
         "beds": None, "area_m2": None, "address": "9 Rue 100% Neuve", "created_at": None},
        {"id": 4, "title": "Paris flat", "city": "Paris", "type": "flat", "price": 600000,
         "beds": 3, "area_m2": 80, "address": "4 Quai B", "created_at": datetime(2024, 2, 1)},
    ]


def _sqlite_engine():
    return create_engine(
        "sqlite://",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def db_engine(sample_rows):
    """In-memory SQLite database holding `sample_rows` in the listings table."""
    eng = _sqlite_engine()
    metadata.create_all(eng)
    with eng.begin() as conn:
        conn.execute(listings.insert(), sample_rows)
    yield eng
    eng.dispose()


@pytest.fixture
def broken_engine():
    """A reachable database without the listings table: every query fails."""
    eng = _sqlite_engine()
    yield eng
    eng.dispose()


@pytest.fixture
def make_client():
    """
    Build a TestClient whose requests see the given engine / mock collection.
    """
    def _make(engine=None, collection=None) -> TestClient:
        mock = tuple(collection) if collection is not None else get_mock_listings()

        def _ctx(source: Optional[str] = Query(None)) -> SourceContext:
            return SourceContext(engine=engine, listings=mock, source=normalize_source(source))

        app.dependency_overrides[get_context] = _ctx
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    app.dependency_overrides.clear()
