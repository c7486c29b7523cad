"""
Installer Profile — one installer's efficiency, quality record and training.

Opened from the Installers tab. The header shows who the installer is; the
three tabs show Overview (efficiency, time, film, revenue, recent jobs),
Quality (pass rate, checks, common issues, monthly trend) and Training
(current plan, skill proficiency, achievements).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QDialog, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel,
    QComboBox, QFrame, QTabWidget, QProgressBar, QTableWidget,
    QTableWidgetItem, QHeaderView, QAbstractItemView, QListWidget,
    QSizePolicy, QScrollArea,
)

from src.data.models import (
    Installation, Installer, InstallerStats, QualityCheck, QualityMetrics,
    TrainingMetrics,
)
from src.services.installer_metrics import (
    DEFAULT_FAIR_SCORE, DEFAULT_GOOD_SCORE, TIME_RANGES, average_issues,
    calculate_efficiency, format_install_time, initials,
    install_minutes, installations_in_range, pass_rate, quality_band,
)
from src.services.status_display import QUALITY_BAND_COLORS, status_label
from src.ui import plot_backend
from src.ui.styles import badge_style

logger = logging.getLogger(__name__)

_SURFACE = "#181825"
_BORDER = "#313244"
_MUTED = "#a6adc8"

_ROLE_COLORS = {
    "Lead": "#cba6f7",
    "Installer": "#89b4fa",
    "Training": "#f9e2af",
}


class MetricCard(QFrame):
    """Value on top, small label underneath."""

    def __init__(self, label: str, accent: str = "#89b4fa",
                 tooltip: str = "", parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setMinimumWidth(130)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setFixedHeight(74)
        self.setStyleSheet(f"""
            MetricCard {{
                background-color: {_SURFACE};
                border-radius: 8px;
                border: 1px solid {_BORDER};
            }}
        """)
        if tooltip:
            self.setToolTip(tooltip)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 10, 14, 8)
        layout.setSpacing(2)

        self.value_label = QLabel("—")
        self.value_label.setObjectName("metric_value")
        self.value_label.setStyleSheet(f"color: {accent}; background: transparent;")
        self.name_label = QLabel(label)
        self.name_label.setObjectName("metric_label")
        self.name_label.setWordWrap(True)

        layout.addWidget(self.value_label)
        layout.addWidget(self.name_label)

    def set_value(self, value: Optional[float], fmt: str = "{:.1f}",
                  suffix: str = "") -> None:
        if value is not None:
            self.value_label.setText(fmt.format(value) + suffix)
        else:
            self.value_label.setText("—")

    def set_text(self, text: str) -> None:
        self.value_label.setText(text)


class SectionHeader(QLabel):
    """Small muted caption above a group of widgets."""

    def __init__(self, text: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(text.upper(), parent)
        self.setStyleSheet(f"""
            font-size: 11px; font-weight: 600; color: {_MUTED};
            background: transparent; letter-spacing: 1px;
            padding-top: 10px;
        """)


def _read_only_table(headers: List[str]) -> QTableWidget:
    table = QTableWidget(0, len(headers))
    table.setHorizontalHeaderLabels(headers)
    table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
    table.verticalHeader().setVisible(False)
    table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
    table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
    table.setAlternatingRowColors(True)
    table.setMinimumHeight(150)
    return table


class InstallerProfile(QDialog):
    """Profile dialog for a single installer."""

    def __init__(
        self,
        installer: Installer,
        stats: InstallerStats,
        installations: List[Installation],
        quality: QualityMetrics,
        training: TrainingMetrics,
        default_range: str = "all",
        thresholds: Optional[Dict[str, float]] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.installer = installer
        self.stats = stats
        self.installations = [i for i in installations if i.installer.id == installer.id]
        self.quality = quality
        self.training = training
        thresholds = thresholds or {}
        self._good = thresholds.get("good", DEFAULT_GOOD_SCORE)
        self._fair = thresholds.get("fair", DEFAULT_FAIR_SCORE)

        self.setWindowTitle(f"Installer Profile: {installer.name}")
        self.setMinimumSize(820, 640)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 18, 20, 18)
        layout.setSpacing(12)
        layout.addLayout(self._build_header(default_range))

        tabs = QTabWidget()
        tabs.addTab(self._scrolled(self._build_overview_tab()), "Overview")
        tabs.addTab(self._scrolled(self._build_quality_tab()), "Quality")
        tabs.addTab(self._scrolled(self._build_training_tab()), "Training")
        layout.addWidget(tabs)

        self._refresh_recent()

    # ── Header ──────────────────────────────────────────────────────────

    def _build_header(self, default_range: str) -> QHBoxLayout:
        header = QHBoxLayout()
        header.setSpacing(14)

        avatar = QLabel(initials(self.installer.name))
        avatar.setObjectName("avatar")
        avatar.setFixedSize(56, 56)
        avatar.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.addWidget(avatar)

        info = QVBoxLayout()
        name_row = QHBoxLayout()
        name = QLabel(self.installer.name)
        name.setObjectName("title")
        name_row.addWidget(name)
        role = QLabel(self.installer.role)
        role.setStyleSheet(badge_style(_ROLE_COLORS.get(self.installer.role, _MUTED)))
        name_row.addWidget(role)
        name_row.addStretch()
        info.addLayout(name_row)

        joined = self.installer.joined_date
        since = QLabel(f"Since {joined.strftime('%b %Y')}" if joined else "")
        since.setObjectName("subtitle")
        info.addWidget(since)
        header.addLayout(info)
        header.addStretch()

        self.range_combo = QComboBox()
        for key, label, _days in TIME_RANGES:
            self.range_combo.addItem(label, key)
        self.range_combo.setCurrentIndex(max(self.range_combo.findData(default_range), 0))
        self.range_combo.currentIndexChanged.connect(self._refresh_recent)
        header.addWidget(self.range_combo, alignment=Qt.AlignmentFlag.AlignTop)
        return header

    @staticmethod
    def _scrolled(content: QWidget) -> QScrollArea:
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        scroll.setWidget(content)
        return scroll

    # ── Overview ────────────────────────────────────────────────────────

    def _build_overview_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setSpacing(8)

        efficiency = calculate_efficiency(self.stats.average_install_time)
        layout.addWidget(SectionHeader("Efficiency Rating"))
        eff_row = QHBoxLayout()
        self.efficiency_bar = QProgressBar()
        self.efficiency_bar.setRange(0, 100)
        self.efficiency_bar.setTextVisible(False)
        self.efficiency_bar.setValue(int(round(efficiency)) if efficiency is not None else 0)
        eff_row.addWidget(self.efficiency_bar, 1)
        self.efficiency_label = QLabel(f"{efficiency:.1f}%" if efficiency is not None else "—")
        self.efficiency_label.setObjectName("metric_value")
        eff_row.addWidget(self.efficiency_label)
        layout.addLayout(eff_row)

        cards = QHBoxLayout()
        avg_card = MetricCard("Avg Install Time", "#89b4fa",
                              tooltip="Standard job is 8h 0m")
        avg_card.set_text(format_install_time(self.stats.average_install_time))
        film_card = MetricCard("Film Usage", "#94e2d5")
        film_card.set_value(self.stats.film_usage, fmt="{:,.0f}", suffix=" ft²")
        revenue_card = MetricCard("Revenue", "#a6e3a1")
        revenue_card.set_value(self.stats.revenue_generated, fmt="${:,.0f}")
        jobs_card = MetricCard("Installations", "#cba6f7")
        jobs_card.set_value(self.stats.total_installations, fmt="{:d}")
        certs_card = MetricCard("Certifications", "#f9e2af")
        certs_card.set_value(self.stats.certifications, fmt="{:d}")
        for card in (avg_card, film_card, revenue_card, jobs_card, certs_card):
            cards.addWidget(card)
        layout.addLayout(cards)

        layout.addWidget(SectionHeader("Recent Installations"))
        self.recent_table = _read_only_table(
            ["Date", "Vehicle", "Status", "Film Used", "Time", "Quality"])
        layout.addWidget(self.recent_table)
        self.recent_empty = QLabel("No installations in this period.")
        self.recent_empty.setObjectName("subtitle")
        layout.addWidget(self.recent_empty)
        layout.addStretch()
        return page

    @Slot()
    def _refresh_recent(self) -> None:
        """Fill the recent installations table for the selected time range."""
        rows = installations_in_range(self.installations, self.range_combo.currentData())
        self.recent_table.setRowCount(len(rows))
        for row, inst in enumerate(rows):
            self.recent_table.setItem(row, 0, QTableWidgetItem(
                inst.date.strftime("%m/%d/%Y") if inst.date else ""))
            self.recent_table.setItem(row, 1, QTableWidgetItem(inst.vehicle_info))
            self.recent_table.setItem(row, 2, QTableWidgetItem(status_label(inst.status)))
            self.recent_table.setItem(row, 3, QTableWidgetItem(f"{inst.total_area:.1f} ft²"))
            self.recent_table.setItem(row, 4, QTableWidgetItem(
                format_install_time(install_minutes(inst))))
            latest = inst.quality_checks[-1].score if inst.quality_checks else None
            self.recent_table.setItem(row, 5, self._score_item(latest))
        self.recent_empty.setVisible(not rows)
        logger.debug("Profile %s: %d installations in range %s",
                     self.installer.id, len(rows), self.range_combo.currentData())

    def _score_item(self, score: Optional[float]) -> QTableWidgetItem:
        if score is None:
            return QTableWidgetItem("—")
        item = QTableWidgetItem(f"{score:.0f}%")
        band = quality_band(score, self._good, self._fair)
        item.setForeground(QColor(QUALITY_BAND_COLORS[band]))
        return item

    # ── Quality ─────────────────────────────────────────────────────────

    def _quality_checks(self) -> List[QualityCheck]:
        """Checks recorded on this installer's jobs, newest first, then the history."""
        recorded = [c for inst in self.installations for c in inst.quality_checks]
        recorded.sort(key=lambda c: c.date.toordinal() if c.date else 0, reverse=True)
        return recorded + list(self.quality.recent_checks)

    def _build_quality_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setSpacing(8)
        checks = self._quality_checks()

        cards = QHBoxLayout()
        rate_card = MetricCard("Pass Rate", "#a6e3a1")
        rate_card.set_value(pass_rate(checks), fmt="{:.0f}", suffix="%")
        issues_card = MetricCard("Avg Issues / Install", "#fab387")
        issues_card.set_value(average_issues(checks), fmt="{:.1f}")
        rating_card = MetricCard("Quality Rating", "#f9e2af",
                                 tooltip="Quality score on a five point scale")
        score = self.stats.quality_score
        rating_card.set_value(score / 20 if score is not None else None, suffix=" / 5")
        for card in (rate_card, issues_card, rating_card):
            cards.addWidget(card)
        layout.addLayout(cards)

        layout.addWidget(SectionHeader("Recent Quality Checks"))
        table = _read_only_table(["Date", "Vehicle", "Score", "Result", "Issues"])
        table.setRowCount(len(checks))
        for row, check in enumerate(checks):
            table.setItem(row, 0, QTableWidgetItem(
                check.date.strftime("%m/%d/%Y") if check.date else ""))
            table.setItem(row, 1, QTableWidgetItem(check.vehicle))
            table.setItem(row, 2, self._score_item(check.score))
            table.setItem(row, 3, QTableWidgetItem(check.status.replace("-", " ").title()))
            table.setItem(row, 4, QTableWidgetItem(str(check.issues)))
        layout.addWidget(table)

        grid = QGridLayout()
        grid.addWidget(SectionHeader("Common Issues"), 0, 0)
        issues = QListWidget()
        for defect, count in self.quality.defect_types:
            issues.addItem(f"{defect}  ({count})")
        issues.setMaximumHeight(140)
        grid.addWidget(issues, 1, 0)
        grid.addWidget(plot_backend.plot_defect_types(self.quality.defect_types), 1, 1)
        layout.addLayout(grid)

        layout.addWidget(SectionHeader("Monthly Trend"))
        layout.addWidget(plot_backend.plot_quality_trend(self.quality.monthly_trend))
        layout.addStretch()
        return page

    # ── Training ────────────────────────────────────────────────────────

    def _build_training_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setSpacing(8)
        plan = self.training.current_plan

        layout.addWidget(SectionHeader("Current Training Plan"))
        plan_name = QLabel(plan.name or "No active plan")
        plan_name.setStyleSheet("font-size: 15px; font-weight: 600;")
        layout.addWidget(plan_name)
        progress_row = QHBoxLayout()
        plan_bar = QProgressBar()
        plan_bar.setRange(0, 100)
        plan_bar.setTextVisible(False)
        plan_bar.setValue(int(round(plan.progress)))
        progress_row.addWidget(plan_bar, 1)
        progress_row.addWidget(QLabel(f"{plan.progress:.0f}%"))
        layout.addLayout(progress_row)

        details = QHBoxLayout()
        milestone = MetricCard("Next Milestone", "#89b4fa")
        milestone.set_text(plan.next_milestone or "—")
        due = MetricCard("Due Date", "#fab387")
        due.set_text(plan.due_date.strftime("%b %d, %Y") if plan.due_date else "—")
        details.addWidget(milestone)
        details.addWidget(due)
        layout.addLayout(details)

        layout.addWidget(SectionHeader("Skill Proficiency"))
        for skill in self.training.skill_levels:
            row = QHBoxLayout()
            name = QLabel(skill.skill)
            name.setMinimumWidth(140)
            row.addWidget(name)
            bar = QProgressBar()
            bar.setRange(0, 100)
            bar.setTextVisible(False)
            bar.setValue(int(round(skill.level)))
            row.addWidget(bar, 1)
            row.addWidget(QLabel(f"{skill.level:.0f}%"))
            layout.addLayout(row)
        layout.addWidget(plot_backend.plot_skill_levels(self.training.skill_levels))

        layout.addWidget(SectionHeader("Recent Achievements"))
        achievements = QListWidget()
        for ach in self.training.recent_achievements:
            icon = "🏅" if ach.type == "certification" else "★"
            when = ach.date.strftime("%b %d, %Y") if ach.date else ""
            achievements.addItem(f"{icon}  {ach.title}    {when}")
        achievements.setMaximumHeight(120)
        layout.addWidget(achievements)
        layout.addStretch()
        return page


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The installer profile dialog. Everything is built once when the dialog
#   opens; only the recent installations table reacts to the time-range
#   combo.
#
# Data flow:
#   InstallerStats.average_install_time → calculate_efficiency() →
#   progress bar + "xx.x%". Installations → installations_in_range() →
#   recent table. QualityMetrics / TrainingMetrics → tables, lists and
#   the QtCharts views from plot_backend.
#
# Key points:
#   - Missing numbers show as "—" rather than 0.
#   - Quality scores are coloured by quality_band() using the thresholds
#     from the Settings tab.
