"""Unit tests for inbound payload decoding."""

import pytest

from modules.datacollection.bundles import (
    ENABLED_SERVICE_LIST_KEY,
    EVENT_TYPE_KEY,
    build_accessibility_bundle,
    coerce_event_kind,
    decode_bundle,
    decode_pkg_name,
)
from modules.datacollection.exceptions import PayloadDecodeError
from modules.datacollection.models import (
    AccessibilityPayload,
    DeviceAdminPayload,
    EventKind,
    PackageNamePayload,
    UnknownPayload,
    UsageStatsPayload,
)

pytestmark = pytest.mark.unit


class TestCoerceEventKind:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (EventKind.USAGE_STATS, EventKind.USAGE_STATS),
            (0, EventKind.DEVICE_ADMIN),
            (1, EventKind.ACCESSIBILITY),
            ("2", EventKind.USAGE_STATS),
            ("accessibility", EventKind.ACCESSIBILITY),
            ("DEVICE_ADMIN", EventKind.DEVICE_ADMIN),
            ("usage-stats", EventKind.USAGE_STATS),
        ],
    )
    def test_recognized_values(self, value, expected):
        assert coerce_event_kind(value) is expected

    @pytest.mark.parametrize("value", [3, -1, "telemetry", "", "²", "¹", None, True, 1.0, [1]])
    def test_unrecognized_values(self, value):
        assert coerce_event_kind(value) is None


class TestDecodePkgName:
    def test_known_kind(self):
        payload = decode_pkg_name(1, "com.example.reader")

        assert payload == PackageNamePayload(
            kind=EventKind.ACCESSIBILITY, package_name="com.example.reader"
        )

    def test_unknown_kind_decodes_to_unknown_payload(self):
        payload = decode_pkg_name(42, "com.example.reader")

        assert payload == UnknownPayload(code=42)

    @pytest.mark.parametrize("pkg_name", [None, "", "   ", 5])
    def test_blank_package_name_is_malformed(self, pkg_name):
        with pytest.raises(PayloadDecodeError):
            decode_pkg_name(EventKind.DEVICE_ADMIN, pkg_name)


class TestDecodeBundle:
    def test_accessibility_list_preserves_order(self):
        payload = decode_bundle(1, {ENABLED_SERVICE_LIST_KEY: ["svc.B", "svc.A"]})

        assert payload == AccessibilityPayload(enabled_services=("svc.B", "svc.A"))

    def test_accessibility_empty_list(self):
        payload = decode_bundle(1, {ENABLED_SERVICE_LIST_KEY: []})

        assert payload == AccessibilityPayload(enabled_services=())

    def test_reserved_kinds(self):
        assert decode_bundle(0, {}) == DeviceAdminPayload()
        assert decode_bundle(2, None) == UsageStatsPayload()

    def test_unknown_code(self):
        assert decode_bundle(9, {}) == UnknownPayload(code=9)

    def test_kind_taken_from_bundle_when_code_missing(self):
        bundle = build_accessibility_bundle(["svc.A"])

        payload = decode_bundle(None, bundle)

        assert payload == AccessibilityPayload(enabled_services=("svc.A",))

    def test_matching_codes_are_accepted(self):
        payload = decode_bundle(1, build_accessibility_bundle(["svc.A"]))

        assert isinstance(payload, AccessibilityPayload)

    def test_conflicting_codes_are_malformed(self):
        with pytest.raises(PayloadDecodeError):
            decode_bundle(0, {EVENT_TYPE_KEY: 1, ENABLED_SERVICE_LIST_KEY: []})

    def test_missing_service_list_is_malformed(self):
        with pytest.raises(PayloadDecodeError):
            decode_bundle(1, {})

    @pytest.mark.parametrize("value", ["svc.A", {"svc.A": True}, 3])
    def test_non_list_service_list_is_malformed(self, value):
        with pytest.raises(PayloadDecodeError):
            decode_bundle(1, {ENABLED_SERVICE_LIST_KEY: value})

    @pytest.mark.parametrize("entries", [["svc.A", None], ["svc.A", ""], [7]])
    def test_bad_service_entries_are_malformed(self, entries):
        with pytest.raises(PayloadDecodeError):
            decode_bundle(1, {ENABLED_SERVICE_LIST_KEY: entries})

    def test_non_mapping_bundle_is_malformed(self):
        with pytest.raises(PayloadDecodeError):
            decode_bundle(1, ["svc.A"])


def test_build_accessibility_bundle():
    bundle = build_accessibility_bundle(iter(["svc.A", "svc.B"]))

    assert bundle == {
        EVENT_TYPE_KEY: 1,
        ENABLED_SERVICE_LIST_KEY: ["svc.A", "svc.B"],
    }
