"""Infrastructure modules for the data collection service.

Centralized infrastructure components:
- configuration: Settings management (settings, DataCollectionSettings)
- logging: Structured logging (get_module_logger, bind_call_context)
- operations: Operation results and error classification
- services: Application-scoped providers (get_settings, get_data_collection_service)
"""

# Configuration
from infrastructure.configuration import settings

# Logging
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "settings",
    # Logging
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
