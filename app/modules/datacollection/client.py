"""Caller-side handle to the data collection service.

Client processes hold a DataCollectionClient. It tolerates a missing service
handle (the transport could not provide one) by turning every call into a
logged no-op, and it never lets a transport error escape to the caller.
"""

from typing import Any, Iterable, Mapping, Optional, Protocol

from infrastructure.logging import get_module_logger
from modules.datacollection.bundles import build_accessibility_bundle
from modules.datacollection.models import EventKind
from modules.datacollection.readiness import ReadinessSignal, check_ready

logger = get_module_logger()


class DataCollectionHandle(Protocol):
    """The IPC surface of the service, as seen through a transport."""

    def enable_data_collection(self) -> None: ...

    def disable_data_collection(self) -> None: ...

    def collect_pkg_name(self, event_kind: Any, pkg_name: Any) -> None: ...

    def notify_data_event(
        self, event_kind_code: Any, bundle: Optional[Mapping] = None
    ) -> None: ...


class DataCollectionClient:
    """Fire-and-forget client for the data collection service.

    Args:
        service: Handle obtained from the transport, or None when it could
            not be obtained.
        readiness: Boot-completion signal checked before enabling collection
            and before collecting package names. None disables the check.
    """

    def __init__(
        self,
        service: Optional[DataCollectionHandle] = None,
        readiness: Optional[ReadinessSignal] = None,
    ):
        self._service = service
        self._readiness = readiness
        if service is None:
            logger.warning("data_collection_service_handle_missing")

    @property
    def connected(self) -> bool:
        return self._service is not None

    def enable_data_collection(self) -> None:
        if not check_ready(self._readiness):
            logger.info("enable_skipped", reason="system_not_booted")
            return
        self._call("enable_data_collection")

    def disable_data_collection(self) -> None:
        self._call("disable_data_collection")

    def collect_pkg_name(self, event_kind: Any, pkg_name: str) -> None:
        if not check_ready(self._readiness):
            logger.info("collect_skipped", reason="system_not_booted", pkg_name=pkg_name)
            return
        self._call("collect_pkg_name", event_kind, pkg_name)

    def notify_data_event(
        self, event_kind_code: Any, bundle: Optional[Mapping] = None
    ) -> None:
        self._call("notify_data_event", event_kind_code, bundle)

    def notify_accessibility_service_changed(
        self, enabled_services: Iterable[str]
    ) -> None:
        """Report the full list of currently enabled accessibility services."""
        bundle = build_accessibility_bundle(enabled_services)
        self._call("notify_data_event", int(EventKind.ACCESSIBILITY), bundle)

    def _call(self, method: str, *args: Any) -> None:
        if self._service is None:
            logger.info("data_collection_call_skipped", method=method, reason="no_service")
            return
        try:
            getattr(self._service, method)(*args)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "data_collection_call_failed",
                method=method,
                error=str(e),
                error_type=type(e).__name__,
            )
