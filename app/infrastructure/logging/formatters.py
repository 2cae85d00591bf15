"""Structlog processors for the data collection log pipeline.

Subjects, package names and enabled-service lists arrive from arbitrary
caller processes and are logged verbatim, so the pipeline caps their size
before rendering.

Usage:
    from infrastructure.logging.formatters import add_app_info, truncate_large_values
"""

from typing import Any

MAX_LOGGED_ITEMS = 50


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that stamps every entry with app name and version.

    Args:
        app_name: Name of the application.
        app_version: Version string, usually the deployed git SHA.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def _truncate_text(value: str, max_length: int) -> str:
    if len(value) <= max_length:
        return value
    return value[:max_length] + f"...[truncated, {len(value)} chars total]"


def truncate_large_values(max_length: int = 500, max_items: int = MAX_LOGGED_ITEMS):
    """Create a processor that caps oversized strings and sequences.

    Strings longer than ``max_length`` are cut. Lists and tuples (such as an
    enabled-service list) keep their first ``max_items`` entries, each
    string entry cut the same way, followed by a marker with the full count.

    Args:
        max_length: Maximum string length before truncation.
        max_items: Maximum number of sequence entries rendered.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str):
                event_dict[key] = _truncate_text(value, max_length)
            elif isinstance(value, (list, tuple)):
                items = [
                    _truncate_text(item, max_length) if isinstance(item, str) else item
                    for item in value[:max_items]
                ]
                if len(value) > max_items:
                    items.append(f"...[{len(value) - max_items} more, {len(value)} total]")
                event_dict[key] = items
        return event_dict

    return processor
