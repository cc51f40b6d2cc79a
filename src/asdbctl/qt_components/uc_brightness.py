"""
PySide6 UCBrightness - brightness control panel.

One master slider that drives every display, plus one row per display
(name, serial, slider) for the first four displays.  The widget holds
no device handles: it only emits signals and is updated from
``DisplayState`` objects.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from ..constants import MAX_DISPLAY_SLOTS
from ..core.models import DisplayState

_SLIDER_MIN_W = 240
_VALUE_LABEL_W = 40


def _make_slider(parent: QWidget, value: int) -> QSlider:
    slider = QSlider(Qt.Orientation.Horizontal, parent)
    slider.setRange(0, 100)
    slider.setValue(value)
    slider.setMinimumWidth(_SLIDER_MIN_W)
    return slider


class DisplayRow(QWidget):
    """Name/serial labels and a slider for one display."""

    brightness_changed = Signal(int, float)  # display index, percent

    def __init__(self, state: DisplayState, parent: QWidget | None = None):
        super().__init__(parent)
        self.index = state.index
        self.name = state.name
        self.serial = state.serial

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        labels = QVBoxLayout()
        self.name_label = QLabel(state.name, self)
        self.serial_label = QLabel(state.serial, self)
        self.serial_label.setStyleSheet("color: #888; font-size: 10px;")
        labels.addWidget(self.name_label)
        labels.addWidget(self.serial_label)
        layout.addLayout(labels)

        self.slider = _make_slider(self, state.brightness)
        self.value_label = QLabel(f"{state.brightness}%", self)
        self.value_label.setFixedWidth(_VALUE_LABEL_W)
        self.value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        layout.addWidget(self.slider, 1)
        layout.addWidget(self.value_label)

        self.slider.valueChanged.connect(self._on_value_changed)

    def _on_value_changed(self, value: int) -> None:
        self.value_label.setText(f"{value}%")
        self.brightness_changed.emit(self.index, float(value))

    def set_brightness(self, value: int) -> None:
        """Move the slider without emitting ``brightness_changed``."""
        self.slider.blockSignals(True)
        self.slider.setValue(value)
        self.slider.blockSignals(False)
        self.value_label.setText(f"{value}%")


class UCBrightness(QWidget):
    """Master slider plus one row per display slot.

    ``slots`` holds the states of the individually controlled displays;
    ``display_count`` may be larger when more displays are attached.
    """

    master_brightness_changed = Signal(float)
    individual_brightness_changed = Signal(int, float)  # display index, percent

    def __init__(
        self,
        slots: Sequence[DisplayState],
        display_count: Optional[int] = None,
        master_brightness: int = 0,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.display_count = len(slots) if display_count is None else display_count
        self.rows: List[DisplayRow] = []
        self._setup_ui(slots, master_brightness)

    def _setup_ui(self, slots: Sequence[DisplayState], master_brightness: int) -> None:
        layout = QVBoxLayout(self)

        noun = "display" if self.display_count == 1 else "displays"
        self.count_label = QLabel(f"{self.display_count} {noun} connected", self)
        layout.addWidget(self.count_label)

        master_box = QGroupBox("All displays", self)
        master_layout = QHBoxLayout(master_box)
        self.master_slider = _make_slider(master_box, master_brightness)
        self.master_value_label = QLabel(f"{master_brightness}%", master_box)
        self.master_value_label.setFixedWidth(_VALUE_LABEL_W)
        master_layout.addWidget(self.master_slider, 1)
        master_layout.addWidget(self.master_value_label)
        layout.addWidget(master_box)

        rows_box = QGroupBox("Individual displays", self)
        rows_layout = QVBoxLayout(rows_box)
        for state in slots[:MAX_DISPLAY_SLOTS]:
            row = DisplayRow(state, rows_box)
            row.brightness_changed.connect(self.individual_brightness_changed)
            rows_layout.addWidget(row)
            self.rows.append(row)
        layout.addWidget(rows_box)

        layout.addStretch(1)
        self.master_slider.valueChanged.connect(self._on_master_changed)

    def _on_master_changed(self, value: int) -> None:
        self.master_value_label.setText(f"{value}%")
        self.master_brightness_changed.emit(float(value))
        self.set_individual_brightness(value)

    def set_individual_brightness(self, value: int) -> None:
        """Mirror a master value onto every individual row."""
        for row in self.rows:
            row.set_brightness(value)

    def row_for_index(self, index: int) -> Optional[DisplayRow]:
        for row in self.rows:
            if row.index == index:
                return row
        return None
