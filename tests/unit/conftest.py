"""
Fixtures for unit tests.
"""

import pytest

from core.infrastructure.events import event_bus


@pytest.fixture(autouse=True)
def isolated_event_bus(monkeypatch):
    """Run handlers against an event bus with no subscribers."""
    monkeypatch.setattr(event_bus, "_handlers", {})
    return event_bus
