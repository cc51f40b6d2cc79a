"""
Conversion between device brightness levels and percentages.

The display reports brightness as a linear level in
[profile.min_level, profile.max_level] (400..60000 for the Studio
Display).  Users work in whole percent.  The mapping truncates, so
level -> percent -> level is lossy, but percent -> level -> percent is
exact for integer percents.
"""

from __future__ import annotations

from ..constants import STUDIO_DISPLAY, DisplayProfile


def level_to_percent(level: int, profile: DisplayProfile = STUDIO_DISPLAY) -> int:
    """Convert a device level to a whole percent (floored).

    Levels outside the profile's range (a misbehaving device, an
    all-zero report) are pinned to 0 or 100 rather than producing a
    negative or >100 percent.
    """
    percent = (level - profile.min_level) * 100 // profile.level_range
    return max(0, min(100, percent))


def percent_to_level(percent: float, profile: DisplayProfile = STUDIO_DISPLAY) -> int:
    """Convert a percent to a device level, clamped to the profile's range.

    Percent may overshoot (e.g. 95 + a 10% step); the result is always
    a level the device accepts.
    """
    level = round(percent * profile.level_range / 100 + profile.min_level)
    return max(profile.min_level, min(profile.max_level, int(level)))


def clamp_percent(percent: float) -> int:
    """Truncate to a whole percent in [0, 100]."""
    return max(0, min(100, int(percent)))
