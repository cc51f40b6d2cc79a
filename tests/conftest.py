"""Shared fixtures: an in-memory HID transport and session factory."""

import struct

import pytest

from asdbctl.core.models import DisplayDescriptor
from asdbctl.device_base import HidTransport, TransportError
from asdbctl.device_hid import DisplaySession


class FakeTransport(HidTransport):
    """Feature-report transport backed by a single stored level."""

    def __init__(self, level=30000, reply_size=7):
        self.level = level
        self.reply_size = reply_size
        self.fail_get = False
        self.fail_send = False
        self.sent = []
        self.closed = False

    def get_feature_report(self, report_id, size):
        if self.fail_get:
            raise TransportError("device unplugged")
        report = struct.pack('<BIH', report_id, self.level, 0)
        return (report + b'\x00' * 8)[:self.reply_size]

    def send_feature_report(self, data):
        if self.fail_send:
            raise TransportError("permission denied")
        self.sent.append(bytes(data))
        self.level = struct.unpack_from('<I', data, 1)[0]
        return len(data)

    def close(self):
        self.closed = True

    @property
    def is_open(self):
        return not self.closed


def make_descriptor(serial="SN0001", path=b"/dev/hidraw3", interface=7,
                    vid=0x05AC, pid=0x1114):
    return DisplayDescriptor(
        vendor_id=vid,
        product_id=pid,
        interface_number=interface,
        path=path,
        serial_number=serial,
        product_string="Studio Display",
    )


@pytest.fixture
def make_session():
    """Factory: make_session(serial, level) -> (session, transport)."""
    def _make(serial="SN0001", level=30000):
        transport = FakeTransport(level=level)
        return DisplaySession(transport, make_descriptor(serial=serial)), transport
    return _make
