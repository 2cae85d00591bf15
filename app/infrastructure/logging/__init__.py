"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the data collection service using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_call_context(): Context manager for call-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - clear_call_context(): Clear all call context

Formatters:
    - add_app_info(): Processor to add app name/version
    - truncate_large_values(): Processor to limit string lengths

Example:
    from infrastructure.logging import get_module_logger, bind_call_context

    logger = get_module_logger()

    with bind_call_context(ipc_method="notify_data_event"):
        logger.info("processing_call")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_call_context,
    get_correlation_id,
    clear_call_context,
)

from infrastructure.logging.formatters import (
    add_app_info,
    truncate_large_values,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_module_logger",
    # Context
    "bind_call_context",
    "get_correlation_id",
    "clear_call_context",
    # Formatters
    "add_app_info",
    "truncate_large_values",
]
