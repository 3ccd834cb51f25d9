"""
Backoffice Test Configuration

Shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from common.models import SettingsSnapshot
from common.storage import MemoryStore
from tests.fixtures.finance import TODAY, records


# =============================================================================
# FIXTURES: Clock & Settings
# =============================================================================

@pytest.fixture
def today():
    """Fixed current date (2024-03-18)."""
    return TODAY


@pytest.fixture
def clock(today):
    """Clock callable returning the fixed date."""
    return lambda: today


@pytest.fixture
def settings() -> SettingsSnapshot:
    return SettingsSnapshot(
        target_salary=3000,
        taxable_percentage=78,
        income_tax_rate=5,
        health_insurance_rate=26.23,
    )


# =============================================================================
# FIXTURES: Sample Records
# =============================================================================

@pytest.fixture
def sample_records():
    """Sample categories, expenses, invoices, clients and worked hours."""
    return records()


@pytest.fixture
def categories(sample_records):
    return sample_records["categories"]


@pytest.fixture
def expenses(sample_records):
    return sample_records["expenses"]


@pytest.fixture
def invoices(sample_records):
    return sample_records["invoices"]


@pytest.fixture
def clients(sample_records):
    return sample_records["clients"]


@pytest.fixture
def worked_hours(sample_records):
    return sample_records["worked_hours"]


@pytest.fixture
def store(sample_records) -> MemoryStore:
    """In-memory store with all sample records."""
    return MemoryStore(**sample_records)
