"""
Settings Panel — default filters, quality thresholds, area check, data export.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QPushButton,
    QGroupBox, QSpinBox, QDoubleSpinBox, QMessageBox, QFileDialog,
    QFormLayout, QScrollArea,
)

from src import config as prefs
from src.services.installer_metrics import TIME_RANGES
from src.services.status_display import STATUS_FILTER_OPTIONS

logger = logging.getLogger(__name__)


class SettingsWidget(QWidget):
    """Preferences panel. Emits settings_changed after every save."""

    settings_changed = Signal()

    def __init__(
        self,
        config: dict,
        export_csv: Callable[[], str],
        config_path: Optional[Path] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self._export_source = export_csv
        self._config_path = config_path
        self._setup_ui()
        self._load_values()

    def _setup_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        outer.addWidget(scroll)

        content = QWidget()
        layout = QVBoxLayout(content)
        layout.setSpacing(12)
        layout.setContentsMargins(20, 16, 20, 20)

        title = QLabel("Settings")
        title.setObjectName("title")
        layout.addWidget(title)

        # ── Defaults ─────────────────────────────────────────────────────
        defaults_group = QGroupBox("Defaults")
        defaults_form = QFormLayout(defaults_group)

        self.range_combo = QComboBox()
        for key, label, _days in TIME_RANGES:
            self.range_combo.addItem(label, key)
        defaults_form.addRow("Profile time range:", self.range_combo)

        self.status_combo = QComboBox()
        for value, label in STATUS_FILTER_OPTIONS:
            self.status_combo.addItem(label, value)
        defaults_form.addRow("Installations filter:", self.status_combo)
        layout.addWidget(defaults_group)

        # ── Quality thresholds ───────────────────────────────────────────
        quality_group = QGroupBox("Quality Score Bands")
        quality_form = QFormLayout(quality_group)
        self.good_spin = QSpinBox()
        self.good_spin.setRange(0, 100)
        self.good_spin.setSuffix(" %")
        quality_form.addRow("Good from:", self.good_spin)
        self.fair_spin = QSpinBox()
        self.fair_spin.setRange(0, 100)
        self.fair_spin.setSuffix(" %")
        quality_form.addRow("Fair from:", self.fair_spin)
        layout.addWidget(quality_group)

        # ── Area check ───────────────────────────────────────────────────
        area_group = QGroupBox("Cut Area Check")
        area_form = QFormLayout(area_group)
        self.area_mode_combo = QComboBox()
        self.area_mode_combo.addItem("Warn only (log mismatch)", prefs.AREA_CHECK_ADVISORY)
        self.area_mode_combo.addItem("Block saving on mismatch", prefs.AREA_CHECK_ENFORCE)
        area_form.addRow("Total vs. cuts:", self.area_mode_combo)
        self.tolerance_spin = QDoubleSpinBox()
        self.tolerance_spin.setRange(0.0, 50.0)
        self.tolerance_spin.setDecimals(2)
        self.tolerance_spin.setSingleStep(0.05)
        self.tolerance_spin.setSuffix(" ft²")
        area_form.addRow("Tolerance:", self.tolerance_spin)
        layout.addWidget(area_group)

        btn_row = QHBoxLayout()
        save_btn = QPushButton("Save Settings")
        save_btn.setObjectName("primary")
        save_btn.clicked.connect(self._save)
        btn_row.addWidget(save_btn)
        reset_btn = QPushButton("Reset to Defaults")
        reset_btn.clicked.connect(self._reset)
        btn_row.addWidget(reset_btn)
        btn_row.addStretch()
        layout.addLayout(btn_row)

        # ── Data ─────────────────────────────────────────────────────────
        data_group = QGroupBox("Data")
        data_layout = QHBoxLayout(data_group)
        note = QLabel("Installations live in memory for this session.")
        note.setObjectName("subtitle")
        data_layout.addWidget(note)
        data_layout.addStretch()
        export_btn = QPushButton("Export CSV")
        export_btn.clicked.connect(self._export_csv)
        data_layout.addWidget(export_btn)
        layout.addWidget(data_group)

        layout.addStretch()
        scroll.setWidget(content)

    def _load_values(self) -> None:
        cfg = self.config
        self.range_combo.setCurrentIndex(
            max(self.range_combo.findData(cfg["default_time_range"]), 0))
        self.status_combo.setCurrentIndex(
            max(self.status_combo.findData(cfg["default_status_filter"]), 0))
        self.good_spin.setValue(int(cfg["quality_thresholds"]["good"]))
        self.fair_spin.setValue(int(cfg["quality_thresholds"]["fair"]))
        self.area_mode_combo.setCurrentIndex(
            max(self.area_mode_combo.findData(cfg["area_check"]), 0))
        self.tolerance_spin.setValue(float(cfg["area_tolerance_sqft"]))

    @Slot()
    def _save(self) -> None:
        if self.fair_spin.value() > self.good_spin.value():
            QMessageBox.warning(self, "Quality Bands",
                                "The fair threshold cannot be above the good threshold.")
            return
        self.config.update({
            "default_time_range": self.range_combo.currentData(),
            "default_status_filter": self.status_combo.currentData(),
            "quality_thresholds": {
                "good": self.good_spin.value(),
                "fair": self.fair_spin.value(),
            },
            "area_check": self.area_mode_combo.currentData(),
            "area_tolerance_sqft": self.tolerance_spin.value(),
        })
        prefs.save_config(self.config, self._config_path)
        self.settings_changed.emit()

    @Slot()
    def _reset(self) -> None:
        reply = QMessageBox.question(
            self, "Reset Settings", "Restore all settings to their defaults?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        self.config.clear()
        self.config.update(prefs.reset_config(self._config_path))
        self._load_values()
        self.settings_changed.emit()

    @Slot()
    def _export_csv(self) -> None:
        csv_text = self._export_source()
        path, _ = QFileDialog.getSaveFileName(
            self, "Save CSV", "ppfdesk_installations.csv", "CSV files (*.csv)"
        )
        if path:
            Path(path).write_text(csv_text, encoding="utf-8")
            logger.info("Installations exported to %s", path)
            QMessageBox.information(self, "Export", f"Data exported to {path}")


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The Settings tab. Edits the shared preferences dict, writes it with
#   config.save_config() and tells MainWindow through settings_changed.
#
# Key points:
#   - The widget mutates the same dict MainWindow holds, so every view
#     reads the new values without copying.
#   - Export pulls CSV text from a callable (store.export_csv), so this
#     widget never touches installation records itself.
