"""Decoding of inbound call arguments into typed payloads.

Callers hand the service loosely typed values: an event kind that may be an
enum member, an integer code or a name, and a key/value bundle. This module
turns them into one of the payload variants in ``models`` once, at the
boundary, so the normalizer only ever sees typed data.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from modules.datacollection.exceptions import PayloadDecodeError
from modules.datacollection.models import (
    AccessibilityPayload,
    DeviceAdminPayload,
    EventKind,
    PackageNamePayload,
    Payload,
    UnknownPayload,
    UsageStatsPayload,
)

EVENT_TYPE_KEY = "event_type"
ENABLED_SERVICE_LIST_KEY = "enabled_service_list"


def coerce_event_kind(value: Any) -> Optional[EventKind]:
    """Resolve an event kind given as an enum member, int code, or name.

    Names are matched case-insensitively (``"accessibility"``,
    ``"USAGE_STATS"``); numeric strings are treated as codes.

    Args:
        value: Raw event kind from the caller.

    Returns:
        The matching EventKind, or None when the value is not recognized.
    """
    if isinstance(value, EventKind):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return EventKind(value)
        except ValueError:
            return None
    if isinstance(value, str):
        text = value.strip()
        try:
            code = int(text)
        except ValueError:
            return EventKind.__members__.get(text.upper().replace("-", "_"))
        return coerce_event_kind(code)
    return None


def decode_pkg_name(event_kind: Any, pkg_name: Any) -> Payload:
    """Decode the arguments of a direct package-name collection call.

    Args:
        event_kind: Event kind in any form accepted by coerce_event_kind.
        pkg_name: Package name being reported.

    Returns:
        PackageNamePayload, or UnknownPayload when the kind is not recognized.

    Raises:
        PayloadDecodeError: If the package name is missing or blank.
    """
    if not isinstance(pkg_name, str) or not pkg_name.strip():
        raise PayloadDecodeError(f"package name must be a non-empty string, got {pkg_name!r}")

    kind = coerce_event_kind(event_kind)
    if kind is None:
        return UnknownPayload(code=event_kind)
    return PackageNamePayload(kind=kind, package_name=pkg_name)


def decode_bundle(event_kind_code: Any, bundle: Optional[Mapping]) -> Payload:
    """Decode a generic data event into its payload variant.

    The kind comes from ``event_kind_code``; when that is None the bundle's
    own ``event_type`` entry is used. If both are given they must agree.

    Args:
        event_kind_code: Integer event kind code (or None).
        bundle: Key/value payload, may be None for kinds that carry no data.

    Returns:
        The typed payload. Unrecognized kinds decode to UnknownPayload.

    Raises:
        PayloadDecodeError: If the bundle is not a mapping, the kind codes
            disagree, or the accessibility service list is missing or malformed.
    """
    if bundle is None:
        bundle = {}
    if not isinstance(bundle, Mapping):
        raise PayloadDecodeError(f"bundle must be a mapping, got {type(bundle).__name__}")

    raw_kind = event_kind_code
    if EVENT_TYPE_KEY in bundle:
        bundled_kind = bundle[EVENT_TYPE_KEY]
        if raw_kind is None:
            raw_kind = bundled_kind
        elif coerce_event_kind(raw_kind) != coerce_event_kind(bundled_kind):
            raise PayloadDecodeError(
                f"event kind {raw_kind!r} does not match bundled {EVENT_TYPE_KEY} {bundled_kind!r}"
            )

    kind = coerce_event_kind(raw_kind)
    if kind is None:
        return UnknownPayload(code=raw_kind)

    if kind is EventKind.ACCESSIBILITY:
        return AccessibilityPayload(
            enabled_services=_decode_service_list(bundle.get(ENABLED_SERVICE_LIST_KEY))
        )
    if kind is EventKind.DEVICE_ADMIN:
        return DeviceAdminPayload()
    return UsageStatsPayload()


def _decode_service_list(value: Any) -> tuple:
    if value is None:
        raise PayloadDecodeError(f"{ENABLED_SERVICE_LIST_KEY} is missing")
    if not isinstance(value, (list, tuple)):
        raise PayloadDecodeError(
            f"{ENABLED_SERVICE_LIST_KEY} must be a list, got {type(value).__name__}"
        )
    for entry in value:
        if not isinstance(entry, str) or not entry:
            raise PayloadDecodeError(
                f"{ENABLED_SERVICE_LIST_KEY} entries must be non-empty strings, got {entry!r}"
            )
    return tuple(value)


def build_accessibility_bundle(enabled_services: Iterable[str]) -> dict:
    """Build the bundle a caller sends when enabled accessibility services change."""
    return {
        EVENT_TYPE_KEY: int(EventKind.ACCESSIBILITY),
        ENABLED_SERVICE_LIST_KEY: list(enabled_services),
    }
