"""Fixtures for infrastructure.logging tests."""

import pytest
from unittest.mock import Mock

import structlog

from infrastructure.configuration import Settings


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.GIT_SHA = "abc1234"
    settings.LOG_MAX_VALUE_LENGTH = 500
    settings.is_production = False
    return settings


@pytest.fixture(autouse=True)
def clean_contextvars():
    """Ensure no call context leaks between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
