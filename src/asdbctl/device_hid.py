"""
HID feature-report protocol for Apple Studio Display brightness.

The display exposes brightness on HID interface 7 as feature report 1:

    offset  size  meaning
    0       1     report ID (1)
    1       4     brightness level, little-endian unsigned (400..60000)
    5       2     reserved, zero on write

Reads and writes both use the full 7-byte report.  Writes are
fire-and-forget: the device sends no acknowledgment beyond the
transport call succeeding.

The ``HidTransport`` ABC (device_base.py) abstracts the OS handle so that:
  • Tests can inject an in-memory transport (no display needed).
  • ``HidApiTransport`` provides real I/O through the ``hid`` package
    (ctypes binding to libhidapi).

Linux dependencies:
  • hidapi: ``pip install hid`` (needs libhidapi: ``apt install libhidapi-hidraw0``)
  • read/write access to /dev/hidraw* (udev rule or root)
"""

from __future__ import annotations

import logging
import struct
from typing import Optional

from .constants import STUDIO_DISPLAY, DisplayProfile
from .core.models import DisplayDescriptor
from .core.units import level_to_percent, percent_to_level
from .device_base import HidTransport, ProtocolError, TransportError

# Optional native backend, graceful import
try:
    import hid as hidapi
    HIDAPI_AVAILABLE = True
except ImportError:
    hidapi = None
    HIDAPI_AVAILABLE = False

log = logging.getLogger(__name__)


# =========================================================================
# Feature-report codec
# =========================================================================

# report id (B) + level (I) + reserved (H), no padding
_REPORT_STRUCT = struct.Struct('<BIH')


class FeatureReport:
    """Encode/decode the brightness feature report."""

    @staticmethod
    def encode_set_report(level: int, profile: DisplayProfile = STUDIO_DISPLAY) -> bytes:
        """Build the report that sets brightness to ``level``."""
        return _REPORT_STRUCT.pack(profile.report_id, level, 0)

    @staticmethod
    def decode_get_response(data: bytes, profile: DisplayProfile = STUDIO_DISPLAY) -> int:
        """Extract the brightness level from a get-feature-report reply.

        Raises:
            ProtocolError: The reply is not exactly ``profile.report_size``
                bytes, so the level offsets cannot be trusted.
        """
        if len(data) != profile.report_size:
            raise ProtocolError(
                f"Get HID feature report: expected a size of "
                f"{profile.report_size}, got {len(data)}"
            )
        _, level, _ = _REPORT_STRUCT.unpack(bytes(data))
        return level


encode_set_report = FeatureReport.encode_set_report
decode_get_response = FeatureReport.decode_get_response


# =========================================================================
# Real transport: HIDAPI
# =========================================================================

class HidApiTransport(HidTransport):
    """Feature-report transport using the ``hid`` package.

    Opens by device path rather than VID/PID because the display exposes
    several HID interfaces under the same IDs and only one carries the
    brightness report.
    """

    def __init__(self, path: bytes):
        self._path = path
        self._device = None

    def open(self) -> None:
        """Open the HID interface at ``path``."""
        if not HIDAPI_AVAILABLE:
            raise TransportError(
                "hidapi is not available. Install with: pip install hid\n"
                "Also need libhidapi: apt install libhidapi-hidraw0 (Debian/Ubuntu) "
                "or dnf install hidapi (Fedora)"
            )
        try:
            self._device = hidapi.Device(path=self._path)
        except (hidapi.HIDException, OSError) as e:
            raise TransportError(f"Cannot open {self._path!r}: {e}") from e

    def close(self) -> None:
        """Close the HID handle."""
        if self._device is not None:
            try:
                self._device.close()
            except (hidapi.HIDException, OSError) as e:
                log.debug("Close failed for %r: %s", self._path, e)
            self._device = None

    def _require_open(self):
        if self._device is None:
            raise TransportError("Transport not open")
        return self._device

    def get_feature_report(self, report_id: int, size: int) -> bytes:
        device = self._require_open()
        try:
            return bytes(device.get_feature_report(report_id, size))
        except (hidapi.HIDException, OSError) as e:
            raise TransportError(f"Get feature report failed: {e}") from e

    def send_feature_report(self, data: bytes) -> int:
        device = self._require_open()
        try:
            return device.send_feature_report(data)
        except (hidapi.HIDException, OSError) as e:
            raise TransportError(f"Send feature report failed: {e}") from e

    @property
    def is_open(self) -> bool:
        return self._device is not None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self) -> str:
        return f"HidApiTransport(path={self._path!r})"


# =========================================================================
# Session
# =========================================================================

class DisplaySession:
    """Brightness get/set on one open display.

    Owns its transport for its whole lifetime.  Not thread-safe: all
    calls must come from a single owner (the coordinator).
    """

    def __init__(
        self,
        transport: HidTransport,
        descriptor: Optional[DisplayDescriptor] = None,
        profile: DisplayProfile = STUDIO_DISPLAY,
    ):
        self.transport = transport
        self.descriptor = descriptor
        self.profile = profile

    @property
    def serial_number(self) -> Optional[str]:
        return self.descriptor.serial_number if self.descriptor else None

    def get_brightness(self) -> int:
        """Current brightness level as reported by the device."""
        data = self.transport.get_feature_report(
            self.profile.report_id, self.profile.report_size)
        log.debug("Get report: %s", bytes(data).hex())
        return FeatureReport.decode_get_response(data, self.profile)

    def set_brightness(self, level: int) -> None:
        """Write a raw brightness level."""
        report = FeatureReport.encode_set_report(level, self.profile)
        log.debug("Set report: %s", report.hex())
        self.transport.send_feature_report(report)

    def get_brightness_percent(self) -> int:
        return level_to_percent(self.get_brightness(), self.profile)

    def set_brightness_percent(self, percent: float) -> None:
        """Set brightness in percent; out-of-range input is clamped."""
        self.set_brightness(percent_to_level(percent, self.profile))

    def close(self) -> None:
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self) -> str:
        return f"DisplaySession(serial={self.serial_number!r}, transport={self.transport!r})"


def open_session(
    descriptor: DisplayDescriptor,
    profile: DisplayProfile = STUDIO_DISPLAY,
) -> DisplaySession:
    """Open a HIDAPI transport for ``descriptor`` and wrap it in a session."""
    transport = HidApiTransport(descriptor.path)
    transport.open()
    log.debug("Opened %r", descriptor)
    return DisplaySession(transport, descriptor, profile)
