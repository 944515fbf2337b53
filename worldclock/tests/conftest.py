"""Test fixtures for world clock tests."""
from datetime import datetime, timezone

import pytest

from worldclock.core.registry import ClockRegistry
from worldclock.core.storage import MemoryStore


@pytest.fixture
def store():
    """An empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def registry(store):
    """A loaded registry over the empty store."""
    return ClockRegistry(store).load()


@pytest.fixture
def month_end():
    """2024-01-31 23:00 UTC: already February in most of Asia."""
    return datetime(2024, 1, 31, 23, 0, tzinfo=timezone.utc)
