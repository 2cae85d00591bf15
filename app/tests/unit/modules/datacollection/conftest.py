"""Fixtures for data collection module tests."""

import pytest

from modules.datacollection.models import PendingRecord
from modules.datacollection.readiness import StaticReadiness
from modules.datacollection.service import DataCollectionService
from modules.datacollection.store import EventStore


@pytest.fixture
def record_factory():
    """Factory for creating pending records."""

    def _factory(event_kind: int = 1, subject: str = "com.example.reader", state: str = "enabled"):
        return PendingRecord(event_kind=event_kind, subject=subject, state=state)

    return _factory


@pytest.fixture
def store(db_path, fake_clock):
    """Open file-backed store with the default (practically unbounded) ceiling."""
    event_store = EventStore.open(db_path, clock=fake_clock)
    yield event_store
    event_store.close()


@pytest.fixture
def small_store(db_path, fake_clock):
    """Store with a ceiling of three rows."""
    event_store = EventStore.open(db_path, capacity=3, clock=fake_clock)
    yield event_store
    event_store.close()


@pytest.fixture
def readiness():
    """Readiness signal that starts out ready."""
    return StaticReadiness(True)


@pytest.fixture
def service_factory(db_path, fake_clock, readiness):
    """Factory for services over a temporary store."""
    services = []

    def _factory(capacity: int = 2**31 - 1, allow_reset: bool = False, dump_after_write: bool = True, signal=None):
        service = DataCollectionService(
            store_factory=lambda: EventStore.open(db_path, capacity=capacity, clock=fake_clock),
            readiness=signal if signal is not None else readiness,
            dump_after_write=dump_after_write,
            allow_reset=allow_reset,
        )
        services.append(service)
        return service

    yield _factory

    for service in services:
        service.close()
