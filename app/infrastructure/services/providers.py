"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core services. This is
the composition root: the service itself receives its collaborators through
its constructor, and only these providers cache instances per process.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from modules.datacollection import DataCollectionService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_data_collection_service() -> DataCollectionService:
    """
    Get application-scoped data collection service singleton.

    The store is opened (and migrated) on first call. A store that cannot be
    opened leaves the service in the FAILED state rather than raising.

    Returns:
        DataCollectionService: Cached service composed from settings.

    Usage:
        service = get_data_collection_service()
        transport.bind("collectPkgName", service.collect_pkg_name)
    """
    return DataCollectionService.from_settings(get_settings())
