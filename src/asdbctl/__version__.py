"""asdbctl version information."""

__version__ = "0.3.0"

# Version history:
# 0.1.0 - Initial release: get/set/up/down over HID feature reports
# 0.2.0 - Qt window with master slider, multi-display support (up to 4 slots)
# 0.3.0 - Optimistic vs confirmed brightness tracking, partial-failure
#         reporting for synchronized updates
