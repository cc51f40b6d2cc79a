"""Brightness control for Apple Studio Displays over USB HID."""

from .__version__ import __version__

__all__ = ["__version__"]
