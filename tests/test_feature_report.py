"""Tests for device_hid.FeatureReport – 7-byte brightness report layout."""

import struct
import unittest

from asdbctl.core.units import level_to_percent
from asdbctl.device_base import ProtocolError
from asdbctl.device_hid import decode_get_response, encode_set_report


class TestEncodeSetReport(unittest.TestCase):
    """report id (1) + level LE u32 (4) + reserved (2)."""

    def test_known_value(self):
        self.assertEqual(encode_set_report(30000),
                         bytes([0x01, 0x30, 0x75, 0x00, 0x00, 0x00, 0x00]))

    def test_length(self):
        self.assertEqual(len(encode_set_report(400)), 7)
        self.assertEqual(len(encode_set_report(60000)), 7)

    def test_reserved_zero(self):
        self.assertEqual(encode_set_report(60000)[5:], b'\x00\x00')

    def test_report_id_first(self):
        self.assertEqual(encode_set_report(12345)[0], 1)


class TestDecodeGetResponse(unittest.TestCase):

    def test_extracts_level(self):
        data = struct.pack('<BIH', 1, 45000, 0)
        self.assertEqual(decode_get_response(data), 45000)

    def test_ignores_id_and_reserved(self):
        data = bytes([0xFF]) + struct.pack('<I', 1000) + b'\xAB\xCD'
        self.assertEqual(decode_get_response(data), 1000)

    def test_short_buffer(self):
        with self.assertRaises(ProtocolError):
            decode_get_response(b'\x01' * 6)

    def test_long_buffer(self):
        with self.assertRaises(ProtocolError):
            decode_get_response(b'\x01' * 8)

    def test_empty_buffer(self):
        with self.assertRaises(ProtocolError):
            decode_get_response(b'')

    def test_zero_level(self):
        level = decode_get_response(b'\x01' + b'\x00' * 6)
        self.assertEqual(level, 0)
        self.assertEqual(level_to_percent(level), 0)

    def test_accepts_list(self):
        """hidapi may hand back a list of ints."""
        data = list(struct.pack('<BIH', 1, 2000, 0))
        self.assertEqual(decode_get_response(data), 2000)
