"""
Main Window — the central hub of PPFDesk.

Contains:
  - Installations tab (search, status filter, create / edit, quality actions)
  - Installers tab (roster and profiles)
  - Settings tab
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QTabWidget

from src import config as prefs
from src.data import seed
from src.services.installation_store import InstallationStore
from src.ui.installations_view import InstallationsView
from src.ui.installers_view import InstallersView
from src.ui.settings_widget import SettingsWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """The main application window."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        super().__init__()
        self.setWindowTitle("PPFDesk")
        self.setMinimumSize(960, 640)
        self.resize(1180, 760)

        # ── Initialize core systems ─────────────────────────────────────
        self.config_path = config_path
        self.config = prefs.load_config(config_path)
        self.installers = seed.load_installers()
        self.installer_stats = seed.load_installer_stats()
        self.store = InstallationStore(seed.load())
        self._apply_settings()
        logger.info("Loaded %d installations and %d installers",
                    len(self.store), len(self.installers))

        self._build_ui()

    # ── UI Construction ─────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)

        self.tabs = QTabWidget()
        main_layout.addWidget(self.tabs)

        # Tab 1: Installations
        self.installations_view = InstallationsView(
            self.store, self.installers,
            default_status=self.config["default_status_filter"],
        )
        self.tabs.addTab(self.installations_view, "Installations")

        # Tab 2: Installers
        self.installers_view = InstallersView(
            self.store, self.installers, self.installer_stats, self.config,
        )
        self.tabs.addTab(self.installers_view, "Installers")

        # Tab 3: Settings
        self.settings_widget = SettingsWidget(
            self.config, self.store.export_csv, config_path=self.config_path,
        )
        self.settings_widget.settings_changed.connect(self._on_settings_changed)
        self.tabs.addTab(self.settings_widget, "Settings")

        self.installations_view.installations_changed.connect(
            self.installers_view.refresh)

    # ── Settings ────────────────────────────────────────────────────────

    def _apply_settings(self) -> None:
        self.store.enforce_area = self.config["area_check"] == prefs.AREA_CHECK_ENFORCE
        self.store.area_tolerance = float(self.config["area_tolerance_sqft"])

    @Slot()
    def _on_settings_changed(self) -> None:
        self._apply_settings()
        self.installers_view.refresh()
        logger.info("Settings applied (area check: %s)", self.config["area_check"])


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Builds the app: loads preferences and seed data, owns the single
#   InstallationStore, and hosts the three tabs.
#
# Data flow:
#   seed.load() → InstallationStore → InstallationsView / InstallersView.
#   SettingsWidget edits self.config → _on_settings_changed() pushes the
#   area-check mode and tolerance into the store.
#
# Key points:
#   - One store, shared by reference. A save from the Installations tab is
#     visible to the installer profiles immediately.
#   - Nothing is persisted except preferences.
