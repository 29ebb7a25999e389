"""
Shared pytest configuration and fixtures.
"""
from datetime import datetime, timezone

import pytest

from deelrate.application.ports.outbound.time_provider_port import FixedTimeAdapter


def pytest_collection_modifyitems(config, items):
    """Mark tests by location: tests/integration -> integration, the rest -> unit."""
    for item in items:
        if "integration" in item.path.parts:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2024-01-01 12:00 UTC"""
    return FixedTimeAdapter(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
