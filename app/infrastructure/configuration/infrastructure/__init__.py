"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.collection import (
    DataCollectionSettings,
)

__all__ = [
    "DataCollectionSettings",
]
