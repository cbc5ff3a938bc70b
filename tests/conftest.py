"""
Pytest configuration and fixtures for incremental offset tests.
"""

import os

import pytest

from src.offsets import clear_observers
from tests.helpers import RecordingStatement


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers and quiet tracing defaults."""
    config.addinivalue_line("markers", "property: mark test as property-based test")
    config.addinivalue_line("markers", "slow: mark test as slow running")

    # No collector in unit tests; spans are still recorded, never exported
    os.environ.setdefault("OTLP_ENDPOINT", "")


@pytest.fixture(autouse=True)
def reset_observers():
    """Every test starts and ends with no registered observers."""
    clear_observers()
    yield
    clear_observers()


@pytest.fixture
def statement() -> RecordingStatement:
    """Statement that records binds instead of executing them."""
    return RecordingStatement()
