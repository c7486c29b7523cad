"""
Installation Dialog — create a new installation or edit an existing one,
including its list of film cuts.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from PySide6.QtCore import Qt, QDate, Slot
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout, QLabel, QLineEdit,
    QComboBox, QDateEdit, QDoubleSpinBox, QPlainTextEdit, QPushButton,
    QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView,
    QDialogButtonBox, QMessageBox, QGroupBox,
)

from src.data.models import (
    Cut, CutStatus, Installation, InstallationStatus, Installer, InstallerRef,
)
from src.services.area_check import cut_area
from src.services.status_display import status_label

logger = logging.getLogger(__name__)

CUT_COLUMNS = ["Panel", "ft²", "Roll ID", "Film Type", "Status", "Recut Reason"]


class InstallationDialog(QDialog):
    """Form for one installation. Returns a new Installation object on accept."""

    def __init__(
        self,
        installation: Optional[Installation],
        installers: List[Installer],
        new_id: Callable[[], str],
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.original = installation
        self.installers = installers
        self._new_id = new_id
        self._cut_total = 0.0
        self._original_cuts = {c.id: c for c in installation.cuts} if installation else {}
        self.setWindowTitle("Edit Installation" if installation else "New Installation")
        self.setMinimumWidth(720)
        self._build_ui()
        if installation is not None:
            self._populate(installation)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.date_edit = QDateEdit()
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDate(QDate.currentDate())
        form.addRow("Date:", self.date_edit)

        self.customer_input = QLineEdit()
        self.customer_input.setPlaceholderText("Customer name")
        form.addRow("Customer:", self.customer_input)

        self.vehicle_input = QLineEdit()
        self.vehicle_input.setPlaceholderText("e.g. 2023 Tesla Model 3")
        form.addRow("Vehicle:", self.vehicle_input)

        self.installer_combo = QComboBox()
        for inst in self.installers:
            self.installer_combo.addItem(inst.name, inst.id)
        form.addRow("Installer:", self.installer_combo)

        self.status_combo = QComboBox()
        for status in InstallationStatus.ALL:
            self.status_combo.addItem(status_label(status), status)
        self.status_combo.setCurrentIndex(
            self.status_combo.findData(InstallationStatus.IN_PROGRESS))
        form.addRow("Status:", self.status_combo)

        area_row = QHBoxLayout()
        self.area_spin = QDoubleSpinBox()
        self.area_spin.setRange(0, 5000)
        self.area_spin.setDecimals(1)
        self.area_spin.setSuffix(" ft²")
        area_row.addWidget(self.area_spin)
        self.cut_total_label = QLabel("cuts: 0.0 ft²")
        self.cut_total_label.setObjectName("subtitle")
        area_row.addWidget(self.cut_total_label)
        use_cuts_btn = QPushButton("Use cut total")
        use_cuts_btn.clicked.connect(self._use_cut_total)
        area_row.addWidget(use_cuts_btn)
        area_row.addStretch()
        form.addRow("Total area:", area_row)

        self.notes_input = QPlainTextEdit()
        self.notes_input.setFixedHeight(60)
        form.addRow("Notes:", self.notes_input)
        layout.addLayout(form)

        # ── Cuts ─────────────────────────────────────────────────────
        cuts_group = QGroupBox("Cuts")
        cuts_layout = QVBoxLayout(cuts_group)
        self.cuts_table = QTableWidget(0, len(CUT_COLUMNS))
        self.cuts_table.setHorizontalHeaderLabels(CUT_COLUMNS)
        self.cuts_table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch)
        self.cuts_table.verticalHeader().setVisible(False)
        self.cuts_table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.cuts_table.itemChanged.connect(self._update_cut_total)
        cuts_layout.addWidget(self.cuts_table)

        btn_row = QHBoxLayout()
        add_btn = QPushButton("Add Cut")
        add_btn.clicked.connect(lambda: self._add_cut_row(None))
        remove_btn = QPushButton("Remove Selected")
        remove_btn.clicked.connect(self._remove_selected_cut)
        btn_row.addWidget(add_btn)
        btn_row.addWidget(remove_btn)
        btn_row.addStretch()
        cuts_layout.addLayout(btn_row)
        layout.addWidget(cuts_group)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _populate(self, inst: Installation) -> None:
        if inst.date:
            self.date_edit.setDate(QDate(inst.date.year, inst.date.month, inst.date.day))
        self.customer_input.setText(inst.customer_name)
        self.vehicle_input.setText(inst.vehicle_info)
        idx = self.installer_combo.findData(inst.installer.id)
        if idx < 0:
            # installer not on the roster any more, keep the reference
            self.installer_combo.addItem(inst.installer.name, inst.installer.id)
            idx = self.installer_combo.count() - 1
        self.installer_combo.setCurrentIndex(idx)
        self.status_combo.setCurrentIndex(max(self.status_combo.findData(inst.status), 0))
        self.area_spin.setValue(inst.total_area)
        self.notes_input.setPlainText(inst.notes or "")
        for cut in inst.cuts:
            self._add_cut_row(cut)
        self._update_cut_total()

    # ── Cuts table ──────────────────────────────────────────────────────

    def _add_cut_row(self, cut: Optional[Cut]) -> None:
        self.cuts_table.blockSignals(True)
        row = self.cuts_table.rowCount()
        self.cuts_table.insertRow(row)

        panel = QTableWidgetItem(cut.panel_name if cut else "")
        panel.setData(Qt.ItemDataRole.UserRole, cut.id if cut else None)
        self.cuts_table.setItem(row, 0, panel)
        self.cuts_table.setItem(row, 1, QTableWidgetItem(f"{cut.square_feet:.1f}" if cut else "0.0"))
        self.cuts_table.setItem(row, 2, QTableWidgetItem(cut.roll_id if cut else ""))
        self.cuts_table.setItem(row, 3, QTableWidgetItem(cut.film_type if cut else ""))

        status_combo = QComboBox()
        for status in CutStatus.ALL:
            status_combo.addItem(status.title(), status)
        if cut:
            status_combo.setCurrentIndex(max(status_combo.findData(cut.status), 0))
        self.cuts_table.setCellWidget(row, 4, status_combo)
        self.cuts_table.setItem(row, 5, QTableWidgetItem((cut.recut_reason or "") if cut else ""))
        self.cuts_table.blockSignals(False)
        self._update_cut_total()

    @Slot()
    def _remove_selected_cut(self) -> None:
        rows = sorted({i.row() for i in self.cuts_table.selectedIndexes()}, reverse=True)
        for row in rows:
            self.cuts_table.removeRow(row)
        self._update_cut_total()

    def _read_cuts(self) -> List[Cut]:
        """Turn table rows into Cut objects. Raises ValueError on bad input."""
        cuts: List[Cut] = []
        installation_id = self.original.id if self.original else ""
        for row in range(self.cuts_table.rowCount()):
            panel_item = self.cuts_table.item(row, 0)
            panel = panel_item.text().strip() if panel_item else ""
            if not panel:
                raise ValueError(f"Cut {row + 1}: panel name is required.")
            sqft_text = self._cell_text(row, 1)
            try:
                sqft = float(sqft_text)
            except ValueError:
                raise ValueError(f"Cut {row + 1}: '{sqft_text}' is not a number.") from None
            if sqft < 0:
                raise ValueError(f"Cut {row + 1}: area cannot be negative.")
            cut_id = panel_item.data(Qt.ItemDataRole.UserRole) or self._new_id()
            previous = self._original_cuts.get(cut_id)
            status = self.cuts_table.cellWidget(row, 4).currentData()
            reason = self._cell_text(row, 5) or None
            cuts.append(Cut(
                id=cut_id,
                installation_id=installation_id,
                panel_name=panel,
                square_feet=sqft,
                roll_id=self._cell_text(row, 2),
                film_type=self._cell_text(row, 3),
                status=status,
                recut_reason=reason if status == CutStatus.RECUT else None,
                created_at=previous.created_at if previous else datetime.now(timezone.utc),
            ))
        return cuts

    def _cell_text(self, row: int, col: int) -> str:
        item = self.cuts_table.item(row, col)
        return item.text().strip() if item else ""

    @Slot()
    def _update_cut_total(self) -> None:
        total = 0.0
        for row in range(self.cuts_table.rowCount()):
            try:
                total += float(self._cell_text(row, 1) or 0)
            except ValueError:
                continue
        self.cut_total_label.setText(f"cuts: {total:.1f} ft²")
        self._cut_total = total

    @Slot()
    def _use_cut_total(self) -> None:
        self._update_cut_total()
        self.area_spin.setValue(self._cut_total)

    # ── Result ──────────────────────────────────────────────────────────

    @Slot()
    def _on_accept(self) -> None:
        if not self.customer_input.text().strip():
            QMessageBox.warning(self, "Missing Info", "Please enter a customer name.")
            return
        if not self.vehicle_input.text().strip():
            QMessageBox.warning(self, "Missing Info", "Please enter the vehicle.")
            return
        if self.installer_combo.currentData() is None:
            QMessageBox.warning(self, "Missing Info", "Please pick an installer.")
            return
        try:
            self._read_cuts()
        except ValueError as exc:
            QMessageBox.warning(self, "Invalid Cut", str(exc))
            return
        self.accept()

    def result_installation(self) -> Installation:
        """Build the Installation the user entered (call after accept)."""
        qd = self.date_edit.date()
        base = self.original
        installation = Installation(
            id=base.id if base else self._new_id(),
            date=date(qd.year(), qd.month(), qd.day()),
            customer_name=self.customer_input.text().strip(),
            vehicle_info=self.vehicle_input.text().strip(),
            installer=InstallerRef(
                id=self.installer_combo.currentData(),
                name=self.installer_combo.currentText(),
            ),
            status=self.status_combo.currentData(),
            total_area=round(self.area_spin.value(), 1),
            cuts=self._read_cuts(),
            notes=self.notes_input.toPlainText().strip() or None,
            created_at=base.created_at if base else None,
            updated_at=base.updated_at if base else None,
            completed_at=base.completed_at if base else None,
            quality_checks=list(base.quality_checks) if base else [],
            defect_reports=list(base.defect_reports) if base else [],
        )
        logger.debug("Dialog produced installation %s with %d cuts (%.1f ft²)",
                     installation.id, len(installation.cuts), cut_area(installation))
        return installation
