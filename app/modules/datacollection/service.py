"""Ingestion façade for the data collection service.

The single entry point bound to whatever IPC transport the host provides.
Inbound calls are decoded, normalized, gated and persisted synchronously.

Every public IPC method returns None and never raises: a failing service
handler can take the calling process down with it on some transports. Each
IPC method has a typed twin (``record_*``) returning the OperationResult
that the IPC wrapper logs.
"""

import functools
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from infrastructure.logging import bind_call_context, get_module_logger
from infrastructure.operations import OperationResult, OperationStatus
from modules.datacollection.bundles import decode_bundle, decode_pkg_name
from modules.datacollection.exceptions import DataCollectionError, PayloadDecodeError
from modules.datacollection.models import Payload
from modules.datacollection.normalizer import normalize
from modules.datacollection.readiness import (
    BootPropertyReadiness,
    ReadinessSignal,
    check_ready,
)
from modules.datacollection.store import EventStore

if TYPE_CHECKING:
    from datetime import datetime

    from infrastructure.configuration import Settings

logger = get_module_logger()

MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"


class ServiceState(Enum):
    """Lifecycle state of the ingestion façade."""

    NOT_READY = "not_ready"
    READY = "ready"
    FAILED = "failed"


def _debug_logging_enabled() -> bool:
    # Dump lines are only rendered at DEBUG; skip the full scan otherwise.
    return logger.isEnabledFor(logging.DEBUG)


def _log_outcome(result: OperationResult) -> None:
    if result.status == OperationStatus.SUCCESS:
        logger.info("ipc_call_completed", message=result.message)
    elif result.status in (OperationStatus.DROPPED, OperationStatus.UNAVAILABLE):
        logger.info(
            "ipc_call_skipped",
            status=result.status.value,
            message=result.message,
            error_code=result.error_code,
        )
    elif result.status == OperationStatus.PERMANENT_ERROR:
        logger.warning(
            "ipc_call_rejected",
            message=result.message,
            error_code=result.error_code,
        )
    else:
        logger.error(
            "ipc_call_failed",
            status=result.status.value,
            message=result.message,
            error_code=result.error_code,
        )


def ipc_entry_point(func: Callable[..., OperationResult]) -> Callable[..., None]:
    """Turn a result-returning method into a fire-and-forget IPC method.

    Binds a per-call logging context, logs the outcome, and absorbs anything
    unexpected so nothing crosses the process boundary.
    """

    @functools.wraps(func)
    def wrapper(self, *args: Any, **kwargs: Any) -> None:
        with bind_call_context(ipc_method=func.__name__):
            try:
                result = func(self, *args, **kwargs)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception(
                    "ipc_call_crashed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return None
            _log_outcome(result)
        return None

    return wrapper


class DataCollectionService:
    """Receives telemetry events and records them in the event store.

    Collaborators are injected: ``store_factory`` opens the store during
    construction and ``readiness`` is polled on every call. If the store
    cannot be opened the service is FAILED for good and every call becomes a
    logged no-op.

    Usage:
        service = DataCollectionService(
            store_factory=lambda: EventStore.open(path),
            readiness=BootPropertyReadiness(),
        )
        service.collect_pkg_name(EventKind.ACCESSIBILITY, "com.example.reader")
        service.notify_data_event(1, {"enabled_service_list": ["svc.A", "svc.B"]})

    Args:
        store_factory: Callable returning an open EventStore.
        readiness: Boot-completion signal, polled per call.
        dump_after_write: Dump the table to the log after each ingestion
            (only when DEBUG logging is enabled).
        allow_reset: Permit ``reset_table``; off outside development.
    """

    def __init__(
        self,
        store_factory: Callable[[], EventStore],
        readiness: Optional[ReadinessSignal] = None,
        dump_after_write: bool = True,
        allow_reset: bool = False,
    ):
        self._readiness = readiness
        self._dump_after_write = dump_after_write
        self._allow_reset = allow_reset
        self._store: Optional[EventStore] = None

        try:
            self._store = store_factory()
        except DataCollectionError as e:
            logger.error(
                "data_collection_service_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.exception(
                "data_collection_service_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
        else:
            logger.info("data_collection_service_initialized")

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        readiness: Optional[ReadinessSignal] = None,
        clock: Optional[Callable[[], "datetime"]] = None,
    ) -> "DataCollectionService":
        """Compose the service from application settings.

        Args:
            settings: Application settings.
            readiness: Override for the readiness signal; defaults to the boot
                property named by the settings.
            clock: Optional timestamp source for the store.
        """
        config = settings.data_collection
        if readiness is None:
            readiness = BootPropertyReadiness(config.readiness_property)
        return cls(
            store_factory=lambda: EventStore.from_settings(config, clock=clock),
            readiness=readiness,
            dump_after_write=config.dump_after_write,
            allow_reset=config.allow_reset,
        )

    @property
    def state(self) -> ServiceState:
        if self._store is None:
            return ServiceState.FAILED
        if check_ready(self._readiness):
            return ServiceState.READY
        return ServiceState.NOT_READY

    @property
    def store(self) -> Optional[EventStore]:
        return self._store

    # IPC surface

    @ipc_entry_point
    def enable_data_collection(self) -> OperationResult:
        return self.record_enable()

    @ipc_entry_point
    def disable_data_collection(self) -> OperationResult:
        return self.record_disable()

    @ipc_entry_point
    def collect_pkg_name(self, event_kind: Any, pkg_name: Any) -> OperationResult:
        return self.record_pkg_name(event_kind, pkg_name)

    @ipc_entry_point
    def notify_data_event(
        self, event_kind_code: Any, bundle: Optional[Mapping] = None
    ) -> OperationResult:
        return self.record_data_event(event_kind_code, bundle)

    # Typed twins

    def record_enable(self) -> OperationResult:
        # Feature-gating hook; no persisted state yet.
        unavailable = self._unavailable_result()
        if unavailable is not None:
            return unavailable
        logger.info("data_collection_enabled")
        return OperationResult.success(message="collection enabled")

    def record_disable(self) -> OperationResult:
        logger.info("data_collection_disabled", state=self.state.value)
        return OperationResult.success(message="collection disabled")

    def record_pkg_name(self, event_kind: Any, pkg_name: Any) -> OperationResult:
        """Record a single package name reported as enabled."""
        unavailable = self._unavailable_result()
        if unavailable is not None:
            return unavailable
        try:
            payload = decode_pkg_name(event_kind, pkg_name)
        except PayloadDecodeError as e:
            return OperationResult.permanent_error(str(e), error_code=MALFORMED_PAYLOAD)
        return self._ingest(payload)

    def record_data_event(
        self, event_kind_code: Any, bundle: Optional[Mapping] = None
    ) -> OperationResult:
        """Decode a generic data event bundle and record its rows."""
        unavailable = self._unavailable_result()
        if unavailable is not None:
            return unavailable
        try:
            payload = decode_bundle(event_kind_code, bundle)
        except PayloadDecodeError as e:
            return OperationResult.permanent_error(str(e), error_code=MALFORMED_PAYLOAD)
        return self._ingest(payload)

    def reset_table(self) -> OperationResult:
        """Delete every stored row. Development and testing only.

        Not part of the IPC surface and never run at startup.
        """
        if not self._allow_reset:
            logger.warning("event_table_reset_refused")
            return OperationResult.permanent_error(
                "table reset is disabled", error_code="RESET_DISABLED"
            )
        if self._store is None:
            return OperationResult.unavailable(
                "event store unavailable", error_code="SERVICE_FAILED"
            )
        return self._store.reset()

    def close(self) -> None:
        if self._store is not None:
            self._store.close()

    def _unavailable_result(self) -> Optional[OperationResult]:
        state = self.state
        if state is ServiceState.FAILED:
            return OperationResult.unavailable(
                "event store unavailable", error_code="SERVICE_FAILED"
            )
        if state is ServiceState.NOT_READY:
            return OperationResult.unavailable(
                "system not booted yet", error_code="NOT_READY"
            )
        return None

    def _ingest(self, payload: Payload) -> OperationResult:
        normalized = normalize(payload)
        if not normalized.is_success:
            return normalized

        records = normalized.data
        if not records:
            return OperationResult.success(data=[], message="nothing to record")

        results = self._store.insert_many(records)
        row_ids = [result.data for result in results if result.is_success]
        dropped = sum(1 for result in results if result.is_dropped)

        if row_ids and self._dump_after_write and _debug_logging_enabled():
            self._store.dump()

        if not row_ids:
            # Every row was lost; report why the first one was.
            return results[0]

        if len(row_ids) < len(records):
            logger.info(
                "event_rows_partially_recorded",
                recorded=len(row_ids),
                dropped=dropped,
                failed=len(records) - len(row_ids) - dropped,
            )
        return OperationResult.success(
            data=row_ids, message=f"recorded {len(row_ids)} of {len(records)} rows"
        )
