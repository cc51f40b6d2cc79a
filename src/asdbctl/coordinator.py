"""
Multi-display brightness coordinator.

Holds one ``DisplaySession`` per attached display and is the only owner
of their transport handles.  UI callbacks and CLI commands go through
it; nothing else keeps a reference to a session.

Two update modes:
  • Independent: ``set_one()`` writes a single display, addressed by
    serial number or position.  Errors propagate to the caller.
  • Synchronized: ``set_all()`` writes every display, continues past
    per-display failures and reports them in a ``SyncResult``.

Shown brightness mirrors the requested value even when a write fails;
``DisplayState.confirmed`` keeps what the device actually accepted so
divergence can be surfaced.

Usage::

    with DisplayCoordinator.from_discovery() as coordinator:
        coordinator.set_all(50)
        for state in coordinator.states:
            print(state.name, state.brightness)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Union

from .constants import MAX_DISPLAY_SLOTS, STUDIO_DISPLAY, UNKNOWN_SERIAL, DisplayProfile
from .core.models import DisplayDescriptor, DisplayState, SyncResult
from .core.units import clamp_percent
from .device_base import BrightnessError, NoDeviceError, TransportError
from .device_detector import find_displays
from .device_hid import DisplaySession, open_session

log = logging.getLogger(__name__)

DisplayKey = Union[int, str]
SessionOpener = Callable[[DisplayDescriptor, DisplayProfile], DisplaySession]


class DisplayCoordinator:
    """Owns the display set and applies brightness changes to it."""

    def __init__(self, sessions: Sequence[DisplaySession],
                 profile: DisplayProfile = STUDIO_DISPLAY,
                 hydrate: bool = True):
        if not sessions:
            raise NoDeviceError("No Apple Studio Display found")
        self.profile = profile
        self._sessions: List[DisplaySession] = list(sessions)
        self._states: List[DisplayState] = [
            DisplayState(
                index=i,
                name=f"{profile.name} {i + 1}",
                serial=session.serial_number or UNKNOWN_SERIAL,
            )
            for i, session in enumerate(self._sessions)
        ]
        # Displays without a serial are only addressable by position
        self._by_serial: Dict[str, int] = {}
        for i, session in enumerate(self._sessions):
            serial = session.serial_number
            if serial and serial not in self._by_serial:
                self._by_serial[serial] = i
        self.master_brightness = 0
        if hydrate:
            self._hydrate()

    @classmethod
    def from_discovery(
        cls,
        serial: Optional[str] = None,
        profile: DisplayProfile = STUDIO_DISPLAY,
        opener: SessionOpener = open_session,
        hydrate: bool = True,
    ) -> DisplayCoordinator:
        """Discover displays, open a session for each and hydrate state.

        With ``hydrate=False`` no brightness is read up front.

        Raises:
            DiscoveryError, NoDeviceError: From discovery.
            TransportError: A display could not be opened.
        """
        descriptors = find_displays(serial, profile)
        sessions: List[DisplaySession] = []
        try:
            for descriptor in descriptors:
                sessions.append(opener(descriptor, profile))
            return cls(sessions, profile, hydrate=hydrate)
        except Exception:
            for session in sessions:
                session.close()
            raise

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _hydrate(self) -> None:
        """Read each display's current brightness.

        A display that cannot be read takes the first value read
        successfully, so one stuck display does not block startup.
        """
        readings: List[Optional[int]] = []
        for session, state in zip(self._sessions, self._states):
            try:
                percent = session.get_brightness_percent()
            except BrightnessError as e:
                log.warning("Cannot read brightness of %s (%s): %s",
                            state.name, state.serial, e)
                state.last_error = str(e)
                readings.append(None)
            else:
                readings.append(percent)

        known = [r for r in readings if r is not None]
        if not known:
            raise TransportError("Could not read brightness from any display")
        fallback = known[0]

        for state, reading in zip(self._states, readings):
            if reading is None:
                state.brightness = fallback
            else:
                state.brightness = reading
                state.confirmed = reading
        self.master_brightness = self._states[0].brightness

    @property
    def states(self) -> List[DisplayState]:
        return list(self._states)

    @property
    def display_count(self) -> int:
        return len(self._sessions)

    def slot(self, index: int) -> Optional[DisplayState]:
        """State for one of the first ``MAX_DISPLAY_SLOTS`` displays."""
        if 0 <= index < min(MAX_DISPLAY_SLOTS, len(self._states)):
            return self._states[index]
        return None

    def _resolve(self, key: DisplayKey) -> int:
        if isinstance(key, int):
            if 0 <= key < len(self._sessions):
                return key
            raise NoDeviceError(f"No display at position {key}")
        index = self._by_serial.get(key)
        if index is None:
            raise NoDeviceError(f"No display found with serial {key}")
        return index

    def state(self, key: DisplayKey) -> DisplayState:
        return self._states[self._resolve(key)]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get(self, key: DisplayKey) -> int:
        """Read one display's brightness from the device."""
        index = self._resolve(key)
        percent = self._sessions[index].get_brightness_percent()
        self._states[index].record_success(percent)
        return percent

    def set_one(self, key: DisplayKey, percent: float) -> int:
        """Set one display's brightness; other displays are untouched.

        Raises:
            NoDeviceError: ``key`` does not name a display.
            TransportError, ProtocolError: The write failed.
        """
        index = self._resolve(key)
        state = self._states[index]
        value = clamp_percent(percent)
        try:
            self._sessions[index].set_brightness_percent(value)
        except BrightnessError as e:
            state.record_failure(value, e)
            raise
        state.record_success(value)
        return value

    def set_all(self, percent: float) -> SyncResult:
        """Set every display to ``percent``, continuing past failures."""
        value = clamp_percent(percent)
        result = SyncResult(percent=value)
        for session, state in zip(self._sessions, self._states):
            try:
                session.set_brightness_percent(value)
            except BrightnessError as e:
                log.error("Failed to set brightness for %s (%s): %s",
                          state.name, state.serial, e)
                state.record_failure(value, e)
                result.failed[state.name] = str(e)
            else:
                state.record_success(value)
                result.succeeded.append(state.name)
        self.master_brightness = value
        return result

    def adjust(self, key: DisplayKey, step: int) -> int:
        """Change one display's brightness by ``step`` percent.

        The current value is read from the device first; the result is
        kept within [0, 100].
        """
        current = self.get(key)
        return self.set_one(key, clamp_percent(current + step))

    # ------------------------------------------------------------------
    # UI callbacks
    # ------------------------------------------------------------------

    def on_master_brightness_changed(self, percent: float) -> SyncResult:
        return self.set_all(percent)

    def on_individual_brightness_changed(self, key: DisplayKey, percent: float) -> bool:
        """Per-display slider moved.  Failures are logged, never raised.

        The window passes the slot position, which also reaches displays
        without a serial or sharing one; a serial string works too.
        """
        try:
            self.set_one(key, percent)
        except BrightnessError as e:
            log.error("Failed to set brightness for %s: %s", key, e)
            return False
        return True

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    def close(self) -> None:
        for session in self._sessions:
            try:
                session.close()
            except BrightnessError as e:
                log.debug("Close failed: %s", e)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self) -> str:
        return f"DisplayCoordinator(displays={self.display_count})"
