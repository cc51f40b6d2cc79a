"""Tests for core/units – level <-> percent conversion."""

import unittest

from asdbctl.constants import STUDIO_DISPLAY, DisplayProfile
from asdbctl.core.units import clamp_percent, level_to_percent, percent_to_level


class TestLevelToPercent(unittest.TestCase):
    """Device level -> whole percent (floored)."""

    def test_bounds(self):
        self.assertEqual(level_to_percent(400), 0)
        self.assertEqual(level_to_percent(60000), 100)

    def test_midpoint_floors(self):
        # (30000 - 400) / 59600 * 100 = 49.66
        self.assertEqual(level_to_percent(30000), 49)

    def test_whole_range_in_bounds(self):
        for level in range(400, 60001, 97):
            p = level_to_percent(level)
            self.assertGreaterEqual(p, 0)
            self.assertLessEqual(p, 100)

    def test_zero_level_is_safe(self):
        """An all-zero report must not yield a negative percent."""
        self.assertEqual(level_to_percent(0), 0)

    def test_above_max_pinned(self):
        self.assertEqual(level_to_percent(70000), 100)


class TestPercentToLevel(unittest.TestCase):
    """Percent -> device level, clamped."""

    def test_bounds(self):
        self.assertEqual(percent_to_level(0), 400)
        self.assertEqual(percent_to_level(100), 60000)

    def test_fifty(self):
        self.assertEqual(percent_to_level(50), 30200)

    def test_overshoot_clamped(self):
        self.assertEqual(percent_to_level(150), 60000)
        self.assertEqual(level_to_percent(percent_to_level(150)), 100)

    def test_negative_clamped(self):
        self.assertEqual(percent_to_level(-20), 400)

    def test_float_percent(self):
        level = percent_to_level(33.5)
        self.assertTrue(400 <= level <= 60000)

    def test_round_trip(self):
        for p in (0, 1, 50, 99, 100):
            self.assertEqual(level_to_percent(percent_to_level(p)), p)

    def test_round_trip_all_within_one(self):
        for p in range(101):
            self.assertLessEqual(abs(level_to_percent(percent_to_level(p)) - p), 1)


class TestCustomProfile(unittest.TestCase):
    """Bounds come from the profile, not literals."""

    def test_other_range(self):
        profile = DisplayProfile(vendor_id=1, product_id=2, interface_number=0,
                                 min_level=0, max_level=1000)
        self.assertEqual(percent_to_level(50, profile), 500)
        self.assertEqual(level_to_percent(250, profile), 25)
        self.assertEqual(percent_to_level(200, profile), 1000)

    def test_default_profile(self):
        self.assertEqual(STUDIO_DISPLAY.level_range, 59600)


class TestClampPercent(unittest.TestCase):

    def test_truncates(self):
        self.assertEqual(clamp_percent(42.9), 42)

    def test_clamps(self):
        self.assertEqual(clamp_percent(120), 100)
        self.assertEqual(clamp_percent(-5), 0)
