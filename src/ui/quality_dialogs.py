"""
Quality dialogs — record a quality check or a defect report against an
installation. Both return a new record; the caller attaches it via the store.
"""

from __future__ import annotations

from datetime import date

from PySide6.QtCore import QDate, Slot
from PySide6.QtWidgets import (
    QDialog, QFormLayout, QLabel, QComboBox, QDateEdit, QSpinBox,
    QPlainTextEdit, QDialogButtonBox, QMessageBox,
)

from src.data.models import (
    DefectReport, Installation, QualityCheck, QualityCheckStatus,
)
from src.data.seed import DEFECT_TYPES


def _to_date(qd: QDate) -> date:
    return date(qd.year(), qd.month(), qd.day())


class QualityCheckDialog(QDialog):
    """Score an installation and note any issues found."""

    def __init__(self, installation: Installation, parent=None) -> None:
        super().__init__(parent)
        self.installation = installation
        self.setWindowTitle("Quality Check")
        self.setMinimumWidth(380)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QFormLayout(self)
        layout.addRow("Vehicle:", QLabel(self.installation.vehicle_info))

        self.date_edit = QDateEdit()
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDate(QDate.currentDate())
        layout.addRow("Date:", self.date_edit)

        self.score_spin = QSpinBox()
        self.score_spin.setRange(0, 100)
        self.score_spin.setValue(90)
        self.score_spin.setSuffix(" %")
        layout.addRow("Score:", self.score_spin)

        self.status_combo = QComboBox()
        for status in QualityCheckStatus.ALL:
            self.status_combo.addItem(status.replace("-", " ").title(), status)
        layout.addRow("Result:", self.status_combo)

        self.issues_spin = QSpinBox()
        self.issues_spin.setRange(0, 50)
        layout.addRow("Issues found:", self.issues_spin)

        self.notes_input = QPlainTextEdit()
        self.notes_input.setFixedHeight(60)
        layout.addRow("Notes:", self.notes_input)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

    @Slot()
    def _on_accept(self) -> None:
        status = self.status_combo.currentData()
        if status == QualityCheckStatus.PASSED and self.issues_spin.value() > 0:
            reply = QMessageBox.question(
                self, "Passed With Issues",
                "This check has issues but is marked as passed. Save anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return
        self.accept()

    def result_check(self) -> QualityCheck:
        return QualityCheck(
            installation_id=self.installation.id,
            date=_to_date(self.date_edit.date()),
            vehicle=self.installation.vehicle_info,
            score=self.score_spin.value(),
            status=self.status_combo.currentData(),
            issues=self.issues_spin.value(),
            notes=self.notes_input.toPlainText().strip() or None,
        )


class DefectReportDialog(QDialog):
    """Log a defect (bubbles, edge lifting, ...) on one panel."""

    def __init__(self, installation: Installation, parent=None) -> None:
        super().__init__(parent)
        self.installation = installation
        self.setWindowTitle("Report Defect")
        self.setMinimumWidth(380)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QFormLayout(self)
        layout.addRow("Vehicle:", QLabel(self.installation.vehicle_info))

        self.date_edit = QDateEdit()
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDate(QDate.currentDate())
        layout.addRow("Date:", self.date_edit)

        self.type_combo = QComboBox()
        self.type_combo.setEditable(True)
        self.type_combo.addItems(DEFECT_TYPES)
        layout.addRow("Defect:", self.type_combo)

        self.panel_combo = QComboBox()
        self.panel_combo.setEditable(True)
        self.panel_combo.addItems([c.panel_name for c in self.installation.cuts])
        layout.addRow("Panel:", self.panel_combo)

        self.severity_combo = QComboBox()
        self.severity_combo.addItem("Minor", "minor")
        self.severity_combo.addItem("Major", "major")
        layout.addRow("Severity:", self.severity_combo)

        self.description_input = QPlainTextEdit()
        self.description_input.setFixedHeight(70)
        layout.addRow("Description:", self.description_input)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

    @Slot()
    def _on_accept(self) -> None:
        if not self.type_combo.currentText().strip():
            QMessageBox.warning(self, "Missing Info", "Please choose a defect type.")
            return
        self.accept()

    def result_report(self) -> DefectReport:
        return DefectReport(
            installation_id=self.installation.id,
            date=_to_date(self.date_edit.date()),
            defect_type=self.type_combo.currentText().strip(),
            panel_name=self.panel_combo.currentText().strip(),
            severity=self.severity_combo.currentData(),
            description=self.description_input.toPlainText().strip() or None,
        )
