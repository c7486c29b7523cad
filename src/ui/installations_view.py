"""
Installations View — searchable, filterable table of PPF jobs.

The search box and the status combo re-filter the table on every change.
Double-click a row to edit it; the row's action buttons open the quality
check and defect report dialogs.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QLineEdit,
    QPushButton, QTableWidget, QTableWidgetItem, QHeaderView,
    QAbstractItemView, QDialog, QMessageBox,
)

from src.data.models import Installation, Installer
from src.services.installation_store import InstallationStore
from src.services.status_display import (
    STATUS_FILTER_OPTIONS, status_badge_text, status_color,
)
from src.ui.installation_dialog import InstallationDialog
from src.ui.quality_dialogs import DefectReportDialog, QualityCheckDialog
from src.ui.styles import badge_style

logger = logging.getLogger(__name__)

COLUMNS = ["Date", "Customer", "Vehicle", "Installer", "Area", "Status", "Actions"]


class InstallationsView(QWidget):
    """Table of installations with search + status filter."""

    installations_changed = Signal()

    def __init__(
        self,
        store: InstallationStore,
        installers: List[Installer],
        default_status: str = "all",
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.installers = installers
        self._visible: List[Installation] = []
        self._setup_ui(default_status)
        self.refresh()

    def _setup_ui(self, default_status: str) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(14)

        # ── Header ───────────────────────────────────────────────────
        header = QHBoxLayout()
        titles = QVBoxLayout()
        title = QLabel("Installations")
        title.setObjectName("title")
        subtitle = QLabel("Track and manage PPF installations")
        subtitle.setObjectName("subtitle")
        titles.addWidget(title)
        titles.addWidget(subtitle)
        header.addLayout(titles)
        header.addStretch()

        self.btn_new = QPushButton("+  New Installation")
        self.btn_new.setObjectName("primary")
        self.btn_new.clicked.connect(self._on_new)
        header.addWidget(self.btn_new)
        layout.addLayout(header)

        # ── Filters ──────────────────────────────────────────────────
        filters = QHBoxLayout()
        filters.setSpacing(12)
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search installations...")
        self.search_input.setMaximumWidth(360)
        self.search_input.textChanged.connect(self.refresh)
        filters.addWidget(self.search_input)

        self.status_combo = QComboBox()
        for value, label in STATUS_FILTER_OPTIONS:
            self.status_combo.addItem(label, value)
        idx = self.status_combo.findData(default_status)
        self.status_combo.setCurrentIndex(max(idx, 0))
        self.status_combo.currentIndexChanged.connect(self.refresh)
        filters.addWidget(self.status_combo)
        filters.addStretch()

        self.count_label = QLabel("")
        self.count_label.setObjectName("subtitle")
        filters.addWidget(self.count_label)
        layout.addLayout(filters)

        # ── Table ────────────────────────────────────────────────────
        self.table = QTableWidget()
        self.table.setColumnCount(len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        hdr = self.table.horizontalHeader()
        for col in range(len(COLUMNS)):
            hdr.setSectionResizeMode(col, QHeaderView.ResizeMode.Stretch)
        hdr.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        hdr.setSectionResizeMode(4, QHeaderView.ResizeMode.ResizeToContents)
        hdr.setSectionResizeMode(6, QHeaderView.ResizeMode.ResizeToContents)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setAlternatingRowColors(True)
        self.table.cellDoubleClicked.connect(self._on_row_activated)
        layout.addWidget(self.table)

    # ── Rendering ───────────────────────────────────────────────────────

    @Slot()
    def refresh(self) -> None:
        """Re-run the filter and rebuild the table."""
        status = self.status_combo.currentData()
        query = self.search_input.text()
        self._visible = self.store.filter(status, query)

        self.table.setRowCount(len(self._visible))
        for row, inst in enumerate(self._visible):
            date_item = QTableWidgetItem(inst.date.strftime("%m/%d/%Y") if inst.date else "")
            date_item.setData(Qt.ItemDataRole.UserRole, inst.id)
            self.table.setItem(row, 0, date_item)
            self.table.setItem(row, 1, QTableWidgetItem(inst.customer_name))
            self.table.setItem(row, 2, QTableWidgetItem(inst.vehicle_info))
            self.table.setItem(row, 3, QTableWidgetItem(inst.installer.name))
            area_item = QTableWidgetItem(f"{inst.total_area:.1f} ft²")
            area_item.setTextAlignment(
                Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self.table.setItem(row, 4, area_item)

            badge = QLabel(status_badge_text(inst.status))
            badge.setStyleSheet(badge_style(status_color(inst.status)))
            badge.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.table.setCellWidget(row, 5, self._wrap(badge))
            self.table.setCellWidget(row, 6, self._action_buttons(inst.id))

        total = len(self.store)
        self.count_label.setText(f"{len(self._visible)} of {total} installations")

    def _action_buttons(self, installation_id: str) -> QWidget:
        btn_quality = QPushButton("🛡")
        btn_quality.setObjectName("icon_action")
        btn_quality.setToolTip("Record quality check")
        btn_quality.clicked.connect(lambda: self._on_quality_check(installation_id))

        btn_defect = QPushButton("⚠")
        btn_defect.setObjectName("icon_action")
        btn_defect.setToolTip("Report defect")
        btn_defect.clicked.connect(lambda: self._on_defect_report(installation_id))

        cell = QWidget()
        hl = QHBoxLayout(cell)
        hl.setContentsMargins(4, 0, 4, 0)
        hl.setSpacing(4)
        hl.addWidget(btn_quality)
        hl.addWidget(btn_defect)
        return cell

    @staticmethod
    def _wrap(widget: QWidget) -> QWidget:
        cell = QWidget()
        hl = QHBoxLayout(cell)
        hl.setContentsMargins(6, 2, 6, 2)
        hl.addWidget(widget)
        hl.addStretch()
        return cell

    # ── Actions ─────────────────────────────────────────────────────────

    @Slot()
    def _on_new(self) -> None:
        self._open_editor(None)

    @Slot(int, int)
    def _on_row_activated(self, row: int, _column: int) -> None:
        if 0 <= row < len(self._visible):
            self._open_editor(self._visible[row])

    def _open_editor(self, installation: Optional[Installation]) -> None:
        dialog = InstallationDialog(installation, self.installers,
                                    new_id=self.store.new_id, parent=self)
        while dialog.exec() == QDialog.DialogCode.Accepted:
            try:
                self.store.save(dialog.result_installation())
            except ValueError as exc:
                QMessageBox.warning(self, "Cannot Save Installation", str(exc))
                continue
            self.refresh()
            self.installations_changed.emit()
            break

    def _on_quality_check(self, installation_id: str) -> None:
        inst = self.store.get(installation_id)
        if inst is None:
            return
        dialog = QualityCheckDialog(inst, parent=self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.store.add_quality_check(installation_id, dialog.result_check())
            self.installations_changed.emit()

    def _on_defect_report(self, installation_id: str) -> None:
        inst = self.store.get(installation_id)
        if inst is None:
            return
        dialog = DefectReportDialog(inst, parent=self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.store.add_defect_report(installation_id, dialog.result_report())
            self.installations_changed.emit()


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The Installations tab. A QTableWidget shows store.filter(status, text)
#   and is rebuilt whenever the search box or the status combo changes.
#
# Data flow:
#   textChanged / currentIndexChanged → refresh() → store.filter() →
#   table rows. Double-click → InstallationDialog → store.save() →
#   refresh(). 🛡 / ⚠ buttons → quality dialogs → store.add_*().
#
# Key points:
#   - The dialog is re-opened with the user's input intact when a save is
#     rejected (e.g. enforced area mismatch), so nothing typed is lost.
#   - Rows keep the installation id in Qt.UserRole on the first column.
