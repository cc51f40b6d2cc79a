"""
Data models for displays: discovery descriptors and per-display state.

``DisplayDescriptor`` is a snapshot of one HID interface as enumerated;
``DisplayState`` is what the coordinator knows about a display while
it is open.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..constants import UNKNOWN_SERIAL


@dataclass(frozen=True)
class DisplayDescriptor:
    """One enumerated HID interface.

    Identity for matching is (vendor_id, product_id, interface_number);
    ``serial_number`` tells identical displays apart and may be None on
    some units.  ``path`` is the opaque handle passed to hidapi's open.
    """

    vendor_id: int
    product_id: int
    interface_number: int
    path: bytes = field(repr=False)
    serial_number: Optional[str] = None
    product_string: str = ""

    @classmethod
    def from_hid_info(cls, info: Dict[str, Any]) -> DisplayDescriptor:
        """Build from a ``hid.enumerate()`` entry."""
        path = info.get('path') or b''
        if isinstance(path, str):
            path = path.encode()
        return cls(
            vendor_id=info.get('vendor_id', 0),
            product_id=info.get('product_id', 0),
            interface_number=info.get('interface_number', -1),
            path=path,
            serial_number=info.get('serial_number') or None,
            product_string=info.get('product_string') or "",
        )

    @property
    def identity(self) -> Tuple[int, int, int]:
        return (self.vendor_id, self.product_id, self.interface_number)


@dataclass
class DisplayState:
    """Coordinator-side view of one open display.

    ``brightness`` is the last requested percent and is what the UI
    shows.  ``confirmed`` is the last percent the device accepted or
    reported, None until one read or write has succeeded.
    """

    index: int
    name: str
    serial: str = UNKNOWN_SERIAL
    brightness: int = 0
    confirmed: Optional[int] = None
    last_error: Optional[str] = None

    @property
    def diverged(self) -> bool:
        """True when the shown brightness is not what the device holds."""
        return self.confirmed != self.brightness

    def record_success(self, percent: int) -> None:
        self.brightness = percent
        self.confirmed = percent
        self.last_error = None

    def record_failure(self, percent: int, error: Exception) -> None:
        self.brightness = percent
        self.last_error = str(error)


@dataclass
class SyncResult:
    """Outcome of a synchronized (all-display) update."""

    percent: int
    succeeded: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed
