"""
Shared fixtures - in-memory SQLite with the real ORM and store
"""

import locale

import pytest

from tests.database_test_config import add_items, create_test_database

from inventory.adapters.secondary.database.database import InventoryDatabase
from inventory.application.view_model import InventoryViewModel


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def test_database():
    """Clean database for each test"""
    database = create_test_database()
    yield database
    database.engine.dispose()


@pytest.fixture
def repository(test_database):
    return test_database.item_dao()


@pytest.fixture
def view_model(repository):
    """View-model over the test store, closed after the test"""
    vm = InventoryViewModel(repository)
    yield vm
    vm.close()


@pytest.fixture
def fresh_singleton(monkeypatch):
    """Forgets the process-wide database for the duration of a test"""
    monkeypatch.setattr(InventoryDatabase, "_instance", None)
    yield


@pytest.fixture(autouse=True)
def restore_monetary_locale():
    """setup_locale changes process state; put LC_MONETARY back after each test"""
    saved = locale.setlocale(locale.LC_MONETARY)
    yield
    locale.setlocale(locale.LC_MONETARY, saved)


# ============================================================================
# DATA FIXTURES
# ============================================================================

@pytest.fixture
def sample_items(test_database):
    """Three items inserted out of name order"""
    return add_items(
        test_database,
        ("Widget", 9.99, 10),
        ("Gadget", 24.5, 0),
        ("Bolt", 0.25, 1),
    )
