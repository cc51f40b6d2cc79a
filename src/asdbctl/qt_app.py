"""
Qt application entry for the brightness window.

``launch_gui()`` discovers displays, hydrates the coordinator, then
hands the main thread to Qt's event loop until the window closes.  All
device I/O happens on that thread, in slider callbacks.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication, QMainWindow, QWidget

from .__version__ import __version__
from .constants import MAX_DISPLAY_SLOTS
from .coordinator import DisplayCoordinator
from .qt_components.uc_brightness import UCBrightness

log = logging.getLogger(__name__)


class BrightnessWindow(QMainWindow):
    """Main window wiring UCBrightness signals to the coordinator."""

    def __init__(self, coordinator: DisplayCoordinator, parent: QWidget | None = None):
        super().__init__(parent)
        self.coordinator = coordinator
        self.setWindowTitle(f"Studio Display Brightness {__version__}")

        slots = [coordinator.slot(i) for i in range(MAX_DISPLAY_SLOTS)]
        self.panel = UCBrightness(
            [state for state in slots if state is not None],
            display_count=coordinator.display_count,
            master_brightness=coordinator.master_brightness,
            parent=self,
        )
        self.setCentralWidget(self.panel)

        self.panel.master_brightness_changed.connect(self._on_master_changed)
        self.panel.individual_brightness_changed.connect(self._on_individual_changed)

    def _on_master_changed(self, value: float) -> None:
        result = self.coordinator.on_master_brightness_changed(value)
        if not result.ok:
            self.statusBar().showMessage(
                f"Failed on {', '.join(result.failed)}", 5000)
        else:
            self.statusBar().clearMessage()

    def _on_individual_changed(self, index: int, value: float) -> None:
        if not self.coordinator.on_individual_brightness_changed(index, value):
            row = self.panel.row_for_index(index)
            label = f"{row.name} ({row.serial})" if row else f"display {index + 1}"
            self.statusBar().showMessage(f"Failed to set brightness for {label}", 5000)
        else:
            self.statusBar().clearMessage()


def launch_gui(serial: Optional[str] = None) -> int:
    """Run the brightness window; blocks until it is closed.

    Raises:
        BrightnessError: Discovery or hydration failed before the
            window was shown.
    """
    coordinator = DisplayCoordinator.from_discovery(serial=serial)
    with coordinator:
        app = QApplication.instance() or QApplication(sys.argv)
        window = BrightnessWindow(coordinator)
        window.show()
        log.info("GUI started with %d display(s)", coordinator.display_count)
        return app.exec()
