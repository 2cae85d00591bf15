"""
Root-level conftest.py for integration tests.

Integration tests run the real service against a real SQLite file in a
temporary directory. Only the host boundary (the boot property) is faked.
"""

import pytest

from modules.datacollection import (
    DataCollectionClient,
    DataCollectionService,
    StaticReadiness,
)


@pytest.fixture
def boot_signal():
    """Host boot signal, initially not booted."""
    return StaticReadiness(False)


@pytest.fixture
def live_service(app_settings, boot_signal, fake_clock):
    """Service composed from settings over a temporary database."""
    service = DataCollectionService.from_settings(
        app_settings, readiness=boot_signal, clock=fake_clock
    )
    yield service
    service.close()


@pytest.fixture
def live_client(live_service, boot_signal):
    """Client bound directly to the live service, sharing its boot signal."""
    return DataCollectionClient(live_service, readiness=boot_signal)
