"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import os
from typing import Dict, List

import pytest

from kipraxis.config import KipraxisConfig, reload_config
from kipraxis.config.logging_config import reset_logging
from kipraxis.models import BillingRules, CallRecord, DailyUsage, RoundingMode

# Environment variables read by KipraxisConfig and LoggingConfig
CONFIG_ENV_VARS = [
    'ENVIRONMENT', 'DEBUG', 'LOG_LEVEL', 'LOG_FORMAT', 'LOG_FILE', 'LOG_CONSOLE',
    'PRACTICE_TIMEZONE', 'BILLING_ROUNDING', 'BILLING_MIN_CHARGE_SEC',
    'PLAN_INCLUDED_MINUTES', 'BUSINESS_HOURS_START', 'BUSINESS_HOURS_END',
    'CALL_WINDOW_START', 'CALL_WINDOW_END', 'MAX_RANGE_DAYS',
]


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG',
        'BILLING_ROUNDING': 'per_second',
        'BILLING_MIN_CHARGE_SEC': '30',
        'PLAN_INCLUDED_MINUTES': '1000',
    }


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate every test from configuration in the developer's shell."""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)

    import kipraxis.config.settings
    kipraxis.config.settings._config = None

    yield

    kipraxis.config.settings._config = None


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    yield test_env_vars


@pytest.fixture
def test_config(mock_env) -> KipraxisConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Drop handlers installed by configure_logging (e.g. by CLI tests)."""
    yield
    reset_logging()


@pytest.fixture
def per_minute_rules() -> BillingRules:
    return BillingRules(rounding=RoundingMode.PER_MINUTE)


@pytest.fixture
def per_second_rules() -> BillingRules:
    return BillingRules(rounding=RoundingMode.PER_SECOND, min_charge_sec=60)


@pytest.fixture
def august_alternating_usage() -> List[DailyUsage]:
    """31 days of August 2025: odd days 20 minutes, even days 40 minutes."""
    return [
        DailyUsage(date=dt.date(2025, 8, day), minutes_total=20 if day % 2 else 40)
        for day in range(1, 32)
    ]


@pytest.fixture
def sample_calls() -> List[CallRecord]:
    """Three calls over two days, one of them after hours."""
    return [
        CallRecord(
            id="c-1",
            started_at=dt.datetime(2025, 8, 4, 9, 0),
            duration_sec=30,
            direction="inbound",
            category="appointment",
        ),
        CallRecord(
            id="c-2",
            started_at=dt.datetime(2025, 8, 4, 19, 30),
            duration_sec=90,
            direction="outbound",
            category="receipt",
        ),
        CallRecord(
            id="c-3",
            started_at=dt.datetime(2025, 8, 5, 10, 0),
            duration_sec=120,
            direction="inbound",
            category="appointment",
        ),
    ]


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up coverage files created during testing."""
    yield

    for file in ['coverage.xml', '.coverage']:
        if os.path.exists(file):
            os.remove(file)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as exercising the command-line interface"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        path = str(item.fspath)
        if "tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        if "tests/unit/cli/" in path:
            item.add_marker(pytest.mark.cli)
