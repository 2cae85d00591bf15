"""Shared fixtures for the data collection service test suite."""

from datetime import datetime, timedelta

import pytest

from infrastructure.configuration import DataCollectionSettings, Settings


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 15, 9, 30, 0)):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def fake_clock():
    """Clock starting at 2024-01-15 09:30:00, one second per reading."""
    return FakeClock()


@pytest.fixture
def db_path(tmp_path):
    """Database file path inside a not-yet-created storage directory."""
    return tmp_path / "storage" / "datacollection.db"


@pytest.fixture
def collection_settings(tmp_path):
    """DataCollectionSettings pointing at a temporary storage directory."""
    return DataCollectionSettings(
        DATA_COLLECTION_DB_DIR=str(tmp_path / "storage"),
        DATA_COLLECTION_CAPACITY=100,
        DATA_COLLECTION_DUMP_AFTER_WRITE=True,
        DATA_COLLECTION_ALLOW_RESET=True,
    )


@pytest.fixture
def app_settings(collection_settings):
    """Settings aggregate wired to the temporary collection settings."""
    return Settings(data_collection=collection_settings)
