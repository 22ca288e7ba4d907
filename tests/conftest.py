"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import MagicMock, patch
from typing import Generator

from models.linkage import (
    Account,
    AccountSnapshot,
    MandatoryLink,
    Product,
)
from services.collaborators import LogNotifier

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""
    
    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.
    
    Filters are not applied; they are recorded on the client so tests
    can assert on them.
    """
    
    def __init__(self, client, table: str, data: list = None):
        self._client = client
        self._table = table
        self._data = data or []
        self._action = "select"
        self._filters = []
    
    def select(self, *args, **kwargs):
        return self
    
    def insert(self, data):
        # Simulate insert - add ids
        if isinstance(data, dict):
            data = [data]
        inserted = []
        for i, item in enumerate(data, start=1):
            inserted.append({"id": f"new-link-{i}", **item})
        self._action = "insert"
        self._data = inserted
        return self
    
    def delete(self):
        self._action = "delete"
        return self
    
    def eq(self, column, value):
        self._filters.append(("eq", column, value))
        return self
    
    def in_(self, column, values):
        self._filters.append(("in", column, list(values)))
        return self
    
    def order(self, column, **kwargs):
        return self
    
    def limit(self, count):
        return self
    
    def execute(self) -> MockSupabaseResponse:
        self._client.calls.append({
            "table": self._table,
            "action": self._action,
            "filters": self._filters,
            "data": self._data if self._action == "insert" else None
        })
        error = self._client.errors.get((self._table, self._action))
        if error:
            raise error
        return MockSupabaseResponse(data=self._data)


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""
    
    def __init__(self, client, name: str, data: list = None):
        self._client = client
        self._name = name
        self._data = data or []
    
    def _query(self) -> MockSupabaseQuery:
        return MockSupabaseQuery(self._client, self._name, list(self._data))
    
    def select(self, *args, **kwargs):
        return self._query()
    
    def insert(self, data):
        return self._query().insert(data)
    
    def delete(self):
        return self._query().delete()


class MockSupabaseClient:
    """Mock Supabase client that records every executed query."""
    
    def __init__(self):
        self._tables = {}
        self.calls = []
        self.errors = {}
    
    def set_table_data(self, table_name: str, data: list):
        """Configure mock data for a table."""
        self._tables[table_name] = data
    
    def fail_on(self, table_name: str, action: str, error: Exception):
        """Make every `action` on `table_name` raise `error`."""
        self.errors[(table_name, action)] = error
    
    def calls_for(self, table_name: str, action: str) -> list:
        return [
            c for c in self.calls
            if c["table"] == table_name and c["action"] == action
        ]
    
    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        return MockSupabaseTable(self, name, self._tables.get(name, []))


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.
    
    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "1", "name": "Widget", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("integrations.supabase_linkage.get_supabase_client", return_value=mock_supabase):
            yield mock_supabase


@pytest.fixture
def widget() -> Product:
    return Product(id="P1", name="Widget", brand="Acme")


@pytest.fixture
def gadget() -> Product:
    return Product(id="P2", name="Gadget", brand="Globex")


@pytest.fixture
def sample_products(widget, gadget) -> tuple:
    """Two-product catalog."""
    return (widget, gadget)


@pytest.fixture
def sample_links() -> tuple:
    """Widget linked as mandatory."""
    return (
        MandatoryLink(id="L1", product_id="P1", product_name="Widget", status="Mandatory"),
    )


@pytest.fixture
def sample_snapshot(sample_products, sample_links) -> AccountSnapshot:
    return AccountSnapshot(
        account=Account(id="ACC-1", name="Corner Store"),
        products=sample_products,
        links=sample_links
    )


@pytest.fixture
def data_source(sample_snapshot) -> MagicMock:
    """DataSource returning sample_snapshot."""
    source = MagicMock()
    source.fetch.return_value = sample_snapshot
    return source


@pytest.fixture
def link_service() -> MagicMock:
    return MagicMock()


@pytest.fixture
def status_provider() -> MagicMock:
    provider = MagicMock()
    provider.get_status_options.return_value = ["Mandatory", "Recommended"]
    return provider


@pytest.fixture
def notifier() -> LogNotifier:
    return LogNotifier()


@pytest.fixture
def view_model(data_source, link_service, status_provider, notifier):
    """
    View model over mock collaborators, not yet loaded.

    Usage:
        def test_something(view_model):
            view_model.load()
    """
    from services.linkage_view_model import ProductLinkageViewModel

    return ProductLinkageViewModel(
        "ACC-1",
        data_source=data_source,
        link_service=link_service,
        status_provider=status_provider,
        notifier=notifier,
        default_status="Mandatory"
    )
