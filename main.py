"""
Ink Digit - Entry Point

Launches a drawing pad window for trying out handwritten digit input.

Example:
    python main.py
    python main.py --debug           # Auto-save annotated ink snapshots
    python main.py --size 120        # Smaller, cell-sized surface
"""

import sys
import logging
import argparse
from datetime import datetime
from typing import Optional

from PyQt5.QtWidgets import QApplication

from inkdigit.control_ui import ControlWindow
from inkdigit.recognizer import DigitRecognizer
from inkdigit.recognizer.debug import DEBUG_DIR, DEBUG_IMAGE_PREFIX, save_debug_image
from inkdigit.settings import gesture_config, load_settings, recognizer_config, save_settings


# Configure logging - output to both console and file
logging.basicConfig(
    level=logging.DEBUG,  # DEBUG level to see candidate scores
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),  # Console output
        logging.FileHandler("inkdigit.log", mode='w', encoding='utf-8')  # File output
    ]
)
logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller.

    Builds the recognizer from saved settings, creates the window and
    connects its signals.
    """

    def __init__(self, debug_mode: bool = False, surface_size: Optional[int] = None):
        """
        Initialize the application.

        Args:
            debug_mode: Enable debug mode via CLI (overrides saved setting)
            surface_size: Drawing surface side in pixels (overrides saved setting)
        """
        self.cli_debug_override = debug_mode  # CLI flag overrides saved setting
        self.window: Optional[ControlWindow] = None

        # Load persistent settings
        self.settings = load_settings()

        if self.cli_debug_override:
            self.debug_mode = True
        else:
            self.debug_mode = self.settings.get("debug_enabled", False)

        self.surface_size = surface_size or self.settings.get("surface_size", 240)
        self.recognizer = DigitRecognizer(recognizer_config(self.settings))
        self.gesture_config = gesture_config(self.settings)

    def setup(self):
        """Set up the UI and connect signals."""
        self.window = ControlWindow(
            surface_size=self.surface_size,
            recognizer=self.recognizer,
            gesture_config=self.gesture_config
        )

        self.window.pad.digit_recognized.connect(self._on_digit_recognized)
        self.window.debug_requested.connect(self._on_debug_requested)
        self.window.debug_toggled.connect(self._on_debug_toggled)
        self.window.shutdown_requested.connect(self._on_shutdown)

        self.window.set_debug_enabled(self.debug_mode)

        if self.debug_mode:
            logger.info("Debug mode enabled - ink snapshots will be saved on every gesture")

        config = self.recognizer.config
        logger.info(
            f"Application initialized: surface {self.surface_size}px, "
            f"max distance {config.max_distance}, gap {config.confidence_gap}, "
            f"debounce {self.gesture_config.debounce_ms}ms"
        )

    def _on_digit_recognized(self, digit):
        """Handle a settled gesture."""
        result = self.window.pad.capture.last_result
        self.window.show_result(result)

        if digit is None:
            logger.info("No match - waiting for a redraw")
        else:
            logger.info(f"Digit entered: {digit}")

        if self.debug_mode:
            self._save_debug_image()

    def _on_debug_requested(self):
        """Handle debug image save request."""
        path = self._save_debug_image()
        if path:
            logger.info(f"Debug image saved: {path}")
        else:
            logger.warning("No gesture to save yet")

    def _save_debug_image(self) -> Optional[str]:
        """Save the last settled gesture; returns the path or None."""
        capture = self.window.pad.capture
        if capture.last_ink is None:
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        path = str(DEBUG_DIR / f"{DEBUG_IMAGE_PREFIX}{timestamp}.png")
        save_debug_image(capture.last_ink, capture.last_result, path, self.surface_size)
        return path

    def _on_debug_toggled(self, enabled: bool):
        """Handle debug checkbox toggle from UI."""
        logger.info(f"Debug mode toggled: {enabled}")
        self.debug_mode = enabled

        # Save to persistent settings (only if not CLI override)
        if not self.cli_debug_override:
            self.settings["debug_enabled"] = enabled
            save_settings(self.settings)

    def _on_shutdown(self):
        """Handle window close."""
        logger.info("Shutdown requested")
        self.window.pad.clear()

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Ink Digit - handwritten digit input pad"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (auto-save ink snapshots after each gesture)"
    )
    parser.add_argument(
        "--size", "-s",
        type=int,
        default=None,
        help="Drawing surface size in pixels (default: from config.json, 240)"
    )
    return parser.parse_args()


def main():
    """Initialize and run the Ink Digit application."""
    args = parse_args()

    app = QApplication(sys.argv)

    application = Application(debug_mode=args.debug, surface_size=args.size)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
