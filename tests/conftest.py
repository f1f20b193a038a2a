"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are loaded at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from datetime import datetime
from typing import Generator

from tests.factories import OrderFactory, ShippingTemplateFactory


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count
        self._is_single = False
        self._filters = []
        self._limit = None
        self._order = None

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        # Rows without the column are not filtered out
        self._filters.append((column, value))
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order = (column, desc)
        return self

    def range(self, start, end):
        return self

    def limit(self, count):
        self._limit = count
        return self

    def execute(self) -> MockSupabaseResponse:
        data = [
            row for row in self._data
            if all(row.get(column, value) == value for column, value in self._filters)
        ]
        if self._order is not None:
            column, desc = self._order
            data = sorted(data, key=lambda row: row.get(column) or "", reverse=desc)
        if self._limit is not None:
            data = data[:self._limit]

        if self._is_single:
            row = data[0] if data else None
            return MockSupabaseResponse(
                data=row,
                count=1 if row else 0
            )
        return MockSupabaseResponse(
            data=data,
            count=self._count if self._count is not None else len(data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, data: list = None, count: int = None, error: Exception = None):
        self._data = data or []
        self._count = count
        self._error = error

    def select(self, *args, **kwargs):
        if self._error:
            raise self._error
        return MockSupabaseQuery(self._data.copy(), self._count)


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables = {}

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count, "error": None}

    def set_table_error(self, table_name: str, error: Exception):
        """Make every select on a table raise error."""
        self._tables[table_name] = {"data": [], "count": None, "error": error}

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        config = self._tables.get(name, {"data": [], "count": None, "error": None})
        return MockSupabaseTable(config["data"], config["count"], config["error"])


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("orders", [
                {"id": "1", "order_number": "KCT-1001", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("orders", [...])
            # Services created now get the mock from get_supabase_client()
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.order_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.shipping_template_service.get_supabase_client", return_value=mock_supabase):
                yield mock_supabase


@pytest.fixture
def now() -> datetime:
    """Fixed planning time."""
    return datetime(2025, 6, 1, 9, 0, 0)


@pytest.fixture
def sample_orders_data() -> list:
    """Queue snapshot: two normal orders around a rush order."""
    return [
        OrderFactory.create(
            id="order-n1",
            order_number="KCT-1001",
            order_priority="normal",
            created_at="2025-05-01T09:00:00Z",
        ),
        OrderFactory.create(
            id="order-r2",
            order_number="KCT-1002",
            order_priority="rush",
            is_rush_order=True,
            created_at="2025-05-02T09:00:00Z",
        ),
        OrderFactory.create(
            id="order-n3",
            order_number="KCT-1003",
            order_priority="normal",
            created_at="2025-05-03T09:00:00Z",
        ),
    ]


@pytest.fixture
def sample_templates_data() -> list:
    """Small active catalog."""
    return [
        ShippingTemplateFactory.create(
            template_code="SOFT_PACK_TIES",
            length_inches=10, width_inches=6, height_inches=1,
            max_weight_lbs=1,
            recommended_for=["ties", "bow_ties", "accessories"],
        ),
        ShippingTemplateFactory.create(
            template_code="SUIT_BOX_STANDARD",
            length_inches=24, width_inches=14, height_inches=4,
            max_weight_lbs=10,
            recommended_for=["suits", "blazers"],
        ),
        ShippingTemplateFactory.create(
            template_code="BIG_BIG_BOX_13_SUITS",
            length_inches=30, width_inches=20, height_inches=18,
            max_weight_lbs=50,
            recommended_for=["suit_sets", "bulk_orders", "multiple_items"],
        ),
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Lifespan (database check) is not run.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/orders/queue")
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
