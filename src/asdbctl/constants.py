"""Shared constants for asdbctl.

Device identity and brightness bounds live in a single immutable
``DisplayProfile`` so another display model could be supported by
passing a different profile to discovery and the unit converter.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DisplayProfile:
    """USB identity and feature-report layout of one display model."""

    vendor_id: int
    product_id: int
    interface_number: int
    report_id: int = 1
    report_size: int = 7       # report id (1) + level (4) + reserved (2)
    min_level: int = 400
    max_level: int = 60000
    name: str = "Studio Display"

    @property
    def level_range(self) -> int:
        return self.max_level - self.min_level

    def matches(self, vendor_id: int, product_id: int, interface_number: int) -> bool:
        """Whether a HID interface belongs to this display model."""
        return (
            vendor_id == self.vendor_id
            and product_id == self.product_id
            and interface_number == self.interface_number
        )


# Apple Studio Display (27", 2022) brightness interface
STUDIO_DISPLAY = DisplayProfile(
    vendor_id=0x05AC,
    product_id=0x1114,
    interface_number=7,
)

# Individual sliders shown in the Qt window
MAX_DISPLAY_SLOTS = 4

# Percent step for `up` / `down`
DEFAULT_STEP = 10

UNKNOWN_SERIAL = "Unknown"
