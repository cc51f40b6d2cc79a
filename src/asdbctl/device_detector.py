"""
Display discovery: find Studio Display brightness interfaces.

Enumeration order is whatever hidapi reports (OS-defined, not stable
across runs).  Results are a point-in-time snapshot; hot-plug needs a
new scan.

Usage::

    from asdbctl.device_detector import find_displays

    for descriptor in find_displays(serial="ABC123"):
        print(descriptor.serial_number)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from . import device_hid
from .constants import STUDIO_DISPLAY, UNKNOWN_SERIAL, DisplayProfile
from .core.models import DisplayDescriptor
from .device_base import DiscoveryError, NoDeviceError

log = logging.getLogger(__name__)

Enumerator = Callable[[], Iterable[Dict[str, Any]]]


def enumerate_hid() -> List[Dict[str, Any]]:
    """List every HID interface visible to the OS.

    Raises:
        DiscoveryError: hidapi is missing or enumeration failed.
    """
    if not device_hid.HIDAPI_AVAILABLE:
        raise DiscoveryError(
            "hidapi is not available. Install with: pip install hid "
            "(and the libhidapi system package)"
        )
    try:
        return list(device_hid.hidapi.enumerate())
    except (device_hid.hidapi.HIDException, OSError) as e:
        raise DiscoveryError(f"HID enumeration failed: {e}") from e


def find_matching_devices(
    profile: DisplayProfile = STUDIO_DISPLAY,
    enumerate_fn: Optional[Enumerator] = None,
) -> List[DisplayDescriptor]:
    """Return descriptors for every interface matching ``profile``.

    Enumeration order is preserved.  No match gives an empty list;
    deciding whether that is fatal is up to the caller.
    """
    infos = list((enumerate_fn or enumerate_hid)())
    log.debug("Enumerated %d HID interfaces", len(infos))

    matches = []
    for info in infos:
        descriptor = DisplayDescriptor.from_hid_info(info)
        if profile.matches(*descriptor.identity):
            log.info("Found %s (serial number %s)",
                     descriptor.product_string or profile.name,
                     descriptor.serial_number or UNKNOWN_SERIAL)
            matches.append(descriptor)

    log.debug("%d matching %s interface(s)", len(matches), profile.name)
    return matches


def filter_by_serial(
    devices: List[DisplayDescriptor],
    serial: Optional[str],
) -> List[DisplayDescriptor]:
    """Keep only ``devices`` whose serial equals ``serial``.

    With no serial, ``devices`` is returned unchanged.  Descriptors
    without a serial never match an explicit filter.
    """
    if not serial:
        return devices
    return [d for d in devices if d.serial_number is not None and d.serial_number == serial]


def find_displays(
    serial: Optional[str] = None,
    profile: DisplayProfile = STUDIO_DISPLAY,
    enumerate_fn: Optional[Enumerator] = None,
) -> List[DisplayDescriptor]:
    """Discover and filter displays, failing when nothing is left.

    Raises:
        DiscoveryError: Enumeration failed.
        NoDeviceError: No display matched (or none had ``serial``).
    """
    devices = find_matching_devices(profile, enumerate_fn)
    if not devices:
        raise NoDeviceError("No Apple Studio Display found")

    selected = filter_by_serial(devices, serial)
    if not selected:
        raise NoDeviceError(f"No display found with serial {serial}")
    return selected
