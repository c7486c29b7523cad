"""
Installers View — the shop's installer roster.

Double-click an installer (or press "View Profile") to open their profile.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTableWidget,
    QTableWidgetItem, QHeaderView, QAbstractItemView,
)

from src.data import seed
from src.data.models import Installer, InstallerStats
from src.services.installation_store import InstallationStore
from src.services.installer_metrics import (
    calculate_efficiency, format_install_time, summarize_installer,
)
from src.ui.installer_profile import InstallerProfile

logger = logging.getLogger(__name__)

COLUMNS = ["Name", "Role", "Email", "Installations", "Avg Time", "Efficiency"]


class InstallersView(QWidget):
    """Roster table; opens InstallerProfile dialogs."""

    def __init__(
        self,
        store: InstallationStore,
        installers: List[Installer],
        stats: Dict[str, InstallerStats],
        config: dict,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.installers = installers
        self.stats = stats
        self.config = config
        self._setup_ui()
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(14)

        header = QHBoxLayout()
        titles = QVBoxLayout()
        title = QLabel("Installers")
        title.setObjectName("title")
        subtitle = QLabel("Performance, quality and training per installer")
        subtitle.setObjectName("subtitle")
        titles.addWidget(title)
        titles.addWidget(subtitle)
        header.addLayout(titles)
        header.addStretch()

        self.btn_profile = QPushButton("View Profile")
        self.btn_profile.setObjectName("primary")
        self.btn_profile.clicked.connect(self._on_view_profile)
        header.addWidget(self.btn_profile)
        layout.addLayout(header)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setAlternatingRowColors(True)
        self.table.cellDoubleClicked.connect(self._on_row_activated)
        layout.addWidget(self.table)

    def stats_for(self, installer: Installer) -> InstallerStats:
        """Recorded stats when we have them, otherwise derived from installations."""
        if installer.id in self.stats:
            return self.stats[installer.id]
        return summarize_installer(installer.id, self.store.list_installations())

    @Slot()
    def refresh(self) -> None:
        self.table.setRowCount(len(self.installers))
        for row, installer in enumerate(self.installers):
            stats = self.stats_for(installer)
            efficiency = calculate_efficiency(stats.average_install_time)
            name = QTableWidgetItem(installer.name)
            name.setData(Qt.ItemDataRole.UserRole, installer.id)
            self.table.setItem(row, 0, name)
            self.table.setItem(row, 1, QTableWidgetItem(installer.role))
            self.table.setItem(row, 2, QTableWidgetItem(installer.email))
            self.table.setItem(row, 3, QTableWidgetItem(str(stats.total_installations)))
            self.table.setItem(row, 4, QTableWidgetItem(
                format_install_time(stats.average_install_time)))
            self.table.setItem(row, 5, QTableWidgetItem(
                f"{efficiency:.1f}%" if efficiency is not None else "—"))

    @Slot(int, int)
    def _on_row_activated(self, row: int, _column: int) -> None:
        if 0 <= row < len(self.installers):
            self.open_profile(self.installers[row])

    @Slot()
    def _on_view_profile(self) -> None:
        row = self.table.currentRow()
        if row < 0 and self.installers:
            row = 0
        self._on_row_activated(row, 0)

    def open_profile(self, installer: Installer) -> None:
        logger.info("Opening profile for installer %s", installer.id)
        dialog = InstallerProfile(
            installer,
            self.stats_for(installer),
            self.store.list_installations(),
            seed.load_quality_metrics(),
            seed.load_training_metrics(),
            default_range=self.config.get("default_time_range", "all"),
            thresholds=self.config.get("quality_thresholds"),
            parent=self,
        )
        dialog.exec()
