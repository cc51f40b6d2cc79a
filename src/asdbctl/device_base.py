"""
Error types and the transport interface shared by all device code.

Every failure raised by asdbctl derives from ``BrightnessError`` so the
CLI and the Qt window can report it uniformly.  ``HidTransport`` is the
seam between the feature-report session and the OS HID stack; tests
inject an in-memory implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BrightnessError(Exception):
    """Base for all asdbctl errors."""


class DiscoveryError(BrightnessError):
    """HID enumeration itself failed (hidapi missing or unusable)."""


class NoDeviceError(BrightnessError):
    """Enumeration worked but no display matched."""


class ProtocolError(BrightnessError):
    """A feature report did not have the expected layout."""


class TransportError(BrightnessError):
    """Reading or writing the USB device failed."""


class HidTransport(ABC):
    """Feature-report I/O on one open HID interface.

    Implementations raise ``TransportError`` for any OS/USB failure.
    """

    @abstractmethod
    def get_feature_report(self, report_id: int, size: int) -> bytes:
        """Read a feature report, report ID byte included."""
        ...

    @abstractmethod
    def send_feature_report(self, data: bytes) -> int:
        """Write a feature report whose first byte is the report ID."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the handle."""
        ...

    @property
    @abstractmethod
    def is_open(self) -> bool:
        ...
