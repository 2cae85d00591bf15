"""
Dependency injection services.

Provides provider functions for application-scoped services.
"""

from infrastructure.services.providers import (
    get_settings,
    get_data_collection_service,
)

__all__ = [
    "get_settings",
    "get_data_collection_service",
]
