"""
Shared fixtures for the invoice extraction tests
"""

from datetime import datetime, timezone

import pytest

from config.settings import Settings
from tools.invoice_tools import InvoiceTools


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def now():
    """Fixed clock so due dates and invoice numbers are reproducible"""
    return datetime(2024, 1, 31, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def today(now):
    return now.date()


@pytest.fixture
def tools(settings):
    return InvoiceTools(settings)
