"""
Control UI Module for Ink Digit

Provides a PyQt5 window hosting a drawing pad, the latest recognition
result and debug controls.
"""

from typing import Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QHBoxLayout,
    QCheckBox
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont

from inkdigit.drawing_pad import DrawingPad
from inkdigit.recognizer import DigitRecognizer, GestureConfig, RecognitionResult
from inkdigit.recognizer.debug import result_color


class ControlWindow(QMainWindow):
    """
    Main window for the Ink Digit application.

    Shows a drawing surface and reports what the recognizer made of the
    last gesture, including the closest candidates.
    """

    # Signals for application wiring
    shutdown_requested = pyqtSignal()
    debug_requested = pyqtSignal()       # Request debug image save
    debug_toggled = pyqtSignal(bool)     # Auto-save debug images on settle

    def __init__(
        self,
        surface_size: int = 240,
        recognizer: Optional[DigitRecognizer] = None,
        gesture_config: Optional[GestureConfig] = None
    ):
        super().__init__()
        self._surface_size = surface_size
        self._recognizer = recognizer
        self._gesture_config = gesture_config
        self._init_ui()

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("Ink Digit")
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        layout.setSpacing(10)
        layout.setContentsMargins(20, 20, 20, 20)
        central_widget.setLayout(layout)

        # Drawing surface
        self.pad = DrawingPad(
            size=self._surface_size,
            recognizer=self._recognizer,
            gesture_config=self._gesture_config
        )
        layout.addWidget(self.pad, 0, Qt.AlignHCenter)

        # Result label
        self.result_label = QLabel("Draw a digit")
        self.result_label.setAlignment(Qt.AlignCenter)
        result_font = QFont()
        result_font.setPointSize(14)
        result_font.setBold(True)
        self.result_label.setFont(result_font)
        layout.addWidget(self.result_label)

        # Info labels
        self.candidates_label = QLabel("Candidates: --")
        self.timing_label = QLabel("Time:       --")
        info_font = QFont()
        info_font.setPointSize(9)
        for label in [self.candidates_label, self.timing_label]:
            label.setFont(info_font)
            layout.addWidget(label)

        # Buttons
        button_layout = QHBoxLayout()
        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self._on_clear_clicked)
        button_layout.addWidget(self.clear_button)

        self.debug_button = QPushButton("Save Debug Image")
        self.debug_button.clicked.connect(self._on_debug_clicked)
        self.debug_button.setEnabled(False)  # Nothing to save yet
        button_layout.addWidget(self.debug_button)
        layout.addLayout(button_layout)

        self.debug_checkbox = QCheckBox("Auto-save debug images")
        self.debug_checkbox.toggled.connect(self._on_debug_toggled)
        layout.addWidget(self.debug_checkbox)

        layout.addStretch()

        self.pad.tapped.connect(lambda: self.result_label.setText("Tap"))

    def _on_debug_clicked(self):
        """Handle Save Debug Image button click."""
        self.debug_requested.emit()

    def _on_debug_toggled(self, checked: bool):
        """Handle debug checkbox toggle."""
        self.debug_toggled.emit(checked)

    def _on_clear_clicked(self):
        self.pad.clear()
        self.result_label.setText("Draw a digit")
        self.result_label.setStyleSheet("color: #333333;")

    def set_debug_enabled(self, enabled: bool):
        """Set the debug checkbox without emitting debug_toggled."""
        self.debug_checkbox.blockSignals(True)
        self.debug_checkbox.setChecked(enabled)
        self.debug_checkbox.blockSignals(False)

    def show_result(self, result: Optional[RecognitionResult]):
        """
        Display a recognition result.

        Args:
            result: Result of the last settled gesture, or None to reset
        """
        color = result_color(result)
        self.result_label.setStyleSheet(f"color: {color};")

        if result is None:
            self.result_label.setText("Draw a digit")
            self.candidates_label.setText("Candidates: --")
            self.timing_label.setText("Time:       --")
            return

        self.debug_button.setEnabled(True)

        if result.accepted:
            suffix = " (fast path)" if result.fast_path else ""
            self.result_label.setText(f"Digit: {result.digit}{suffix}")
        else:
            self.result_label.setText("No match - draw again")

        if result.candidates:
            top = ", ".join(f"{c.digit}={c.score:.2f}" for c in result.candidates[:3])
            self.candidates_label.setText(f"Candidates: {top}")
        else:
            self.candidates_label.setText("Candidates: --")
        self.timing_label.setText(
            f"Time:       {result.processing_time_ms:.1f}ms, {result.point_count} points"
        )

    def closeEvent(self, event):
        """Emit shutdown_requested before closing."""
        self.shutdown_requested.emit()
        event.accept()
