"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from finsync.core import config as config_module
from finsync.core.dates import FinancialDate

from tests.fixtures.fake_services import FakeFrolloSource, FakePocketsmithLedger
from tests.fixtures.synthetic_data import make_frollo_account


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def today() -> FinancialDate:
    """Fixed 'today' so window boundaries are deterministic."""
    return FinancialDate(date=date(2024, 6, 30))


@pytest.fixture
def everyday_account():
    """Active AUD bank account 'Everyday' at 'Example Bank' with 500.00."""
    return make_frollo_account(account_id=1001, name="Everyday", provider="Example Bank")


@pytest.fixture
def frollo_source(everyday_account) -> FakeFrolloSource:
    return FakeFrolloSource([everyday_account])


@pytest.fixture
def ledger() -> FakePocketsmithLedger:
    return FakePocketsmithLedger()


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data directories or credentials
    monkeypatch.setenv("FINSYNC_ENV", "test")
    monkeypatch.setenv("FINSYNC_DATA_DIR", str(tmp_path / "finsync_data"))

    monkeypatch.setenv("FROLLO_USERNAME", "test-user@example.com")
    monkeypatch.setenv("FROLLO_PASSWORD", "test-password")
    monkeypatch.setenv("POCKETSMITH_TOKEN", "test-token")
    monkeypatch.setenv("ACCOUNTS_TO_SYNC", "1001")

    for name in (
        "FROLLO_PAGE_SIZE",
        "HTTP_TIMEOUT",
        "SYNC_MATCH_THRESHOLD",
        "SYNC_WINDOW_MONTHS",
        "SYNC_STEP_MONTHS",
        "SYNC_CONTINUE_ON_ERROR",
        "DEBUG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    # Each test sees configuration built from its own environment
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "frollo: Tests for the Frollo client and models")
    config.addinivalue_line("markers", "pocketsmith: Tests for the PocketSmith client and models")
    config.addinivalue_line("markers", "sync: Tests for the sync engine and its stages")
