"""Call context binding for structured logging.

Binds per-call context (correlation id, IPC method, caller) so every log
entry emitted while one inbound call is processed can be tied together.

Usage:
    from infrastructure.logging import bind_call_context

    with bind_call_context(ipc_method="collect_pkg_name", caller="pid:4242"):
        logger.info("collecting_package_name")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_call_context(
    correlation_id: Optional[str] = None,
    ipc_method: Optional[str] = None,
    caller: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind call-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique call identifier. Auto-generated if not provided.
        ipc_method: Name of the inbound entry point being served.
        caller: Identifier of the calling process, when the transport knows it.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id bound for the duration of the block.
    """
    context: dict[str, Any] = {}
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if ipc_method is not None:
        context["ipc_method"] = ipc_method

    if caller is not None:
        context["caller"] = caller

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_call_context() -> None:
    """Clear all call-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
