"""
PPFDesk — paint protection film shop dashboard.
Entry point for the application.
"""

import faulthandler
import logging
import sys
from pathlib import Path

faulthandler.enable()

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))

from PySide6.QtWidgets import QApplication

from src.ui.main_window import MainWindow
from src.ui.styles import DARK_STYLESHEET


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("ppfdesk.log", encoding="utf-8"),
        ],
    )


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting PPFDesk...")

    app = QApplication(sys.argv)
    app.setApplicationName("PPFDesk")
    app.setOrganizationName("PPFDesk")

    # Apply dark theme globally
    app.setStyleSheet(DARK_STYLESHEET)

    window = MainWindow()
    window.show()

    logger.info("Application started.")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Sets up logging, creates the Qt application, applies the dark theme
#   and opens MainWindow.
#
# Key points:
#   - Logging goes to the console and to ppfdesk.log.
#   - QApplication must exist before any widget is created.
#   - app.exec() runs the event loop; every filter change, dialog and save
#     happens inside it.
