"""Shared fixtures for notification billing tests."""

import json
import logging
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


PRICE_ENTRIES = [
    {"notification_type": "sms", "prices": {"AU": 0.50, "NZ": 0.45, "UK": 0.40}},
    {"notification_type": "email", "prices": {"AU": 0.10, "NZ": 0.08, "UK": 0.12}},
]


@pytest.fixture
def price_entries():
    """Structured price list used across the test suite."""
    return json.loads(json.dumps(PRICE_ENTRIES))


@pytest.fixture
def pricing_json():
    """The same price list encoded as JSON text."""
    return json.dumps(PRICE_ENTRIES)


@pytest.fixture
def data_dir():
    return PROJECT_ROOT / "data"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo any handler/propagation changes made by setup_logging()."""
    yield
    logger = logging.getLogger("notification_billing")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
