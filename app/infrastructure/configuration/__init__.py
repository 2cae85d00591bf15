"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the data
collection service using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    DataCollectionSettings: Storage and ingestion settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    db_path = settings.data_collection.db_path
    if settings.is_production:
        ...
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure import DataCollectionSettings

__all__ = ["Settings", "settings", "DataCollectionSettings"]
