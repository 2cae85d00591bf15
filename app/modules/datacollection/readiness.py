"""Readiness signals gating whether ingestion calls are honored.

The host reports boot completion through an external property. The service
polls it on every call; nothing is pushed.
"""

import os
from typing import Mapping, Optional, Protocol

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class ReadinessSignal(Protocol):
    """Anything that can say whether the host has finished booting."""

    def is_ready(self) -> bool: ...


class BootPropertyReadiness:
    """Readiness read from a host property exposed in the process environment.

    Args:
        property_name: Name of the property (e.g. ``SYS_BOOT_COMPLETED``).
        expected: Value that means "booted".
        environ: Mapping to read from, defaults to ``os.environ``.
    """

    def __init__(
        self,
        property_name: str = "SYS_BOOT_COMPLETED",
        expected: str = "1",
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.property_name = property_name
        self.expected = expected
        self._environ = environ if environ is not None else os.environ

    def is_ready(self) -> bool:
        return self._environ.get(self.property_name, "").strip() == self.expected


class StaticReadiness:
    """Readiness fixed at construction; flip it with ``ready``."""

    def __init__(self, ready: bool = True):
        self.ready = ready

    def is_ready(self) -> bool:
        return self.ready


def check_ready(signal: Optional[ReadinessSignal]) -> bool:
    """Poll a readiness signal, treating a failing signal as not ready.

    Args:
        signal: Signal to poll. None means no gating.

    Returns:
        True if ingestion may proceed.
    """
    if signal is None:
        return True
    try:
        return bool(signal.is_ready())
    except Exception as e:  # pylint: disable=broad-except
        logger.warning(
            "readiness_check_failed",
            signal=type(signal).__name__,
            error=str(e),
        )
        return False
