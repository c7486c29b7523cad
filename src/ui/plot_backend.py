"""
Interactive Chart Backend — glowing QtCharts on a dark background.

Used by the installer profile: monthly quality trend, skill proficiency and
common defect types. Every chart is a live QChartView with hover tooltips.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from PySide6.QtCore import Qt, QPointF, QMargins
from PySide6.QtGui import QColor, QPen, QBrush, QFont, QPainter, QCursor
from PySide6.QtWidgets import QToolTip
from PySide6.QtCharts import (
    QChart, QChartView, QLineSeries, QScatterSeries,
    QBarSeries, QBarSet, QHorizontalBarSeries,
    QBarCategoryAxis, QValueAxis, QCategoryAxis,
)

from src.data.models import SkillLevel

logger = logging.getLogger(__name__)

# ── Palette ──────────────────────────────────────────────────────────────────
BG        = QColor("#1e1e2e")
MUTED     = QColor("#a6adc8")
DIM       = QColor("#6c7086")
GRID_CLR  = QColor("#2a2a3c")

BLUE   = "#89b4fa"
GREEN  = "#a6e3a1"
RED    = "#f38ba8"
YELLOW = "#f9e2af"
PEACH  = "#fab387"
MAUVE  = "#cba6f7"


def _base_chart(title: str = "") -> QChart:
    """Empty dark chart shared by the profile plots; legend off, short series animation."""
    chart = QChart()
    chart.setBackgroundBrush(QBrush(BG))
    chart.setBackgroundRoundness(0)
    chart.setMargins(QMargins(8, 8, 8, 8))

    if title:
        chart.setTitle(title)
        font = QFont("Segoe UI", 10)
        font.setWeight(QFont.Weight.Normal)
        chart.setTitleFont(font)
        chart.setTitleBrush(QBrush(MUTED))

    chart.legend().setVisible(False)
    chart.setAnimationOptions(QChart.AnimationOption.SeriesAnimations)
    chart.setAnimationDuration(400)
    return chart


def _value_axis(label: str = "", visible_grid: bool = True) -> QValueAxis:
    """Numeric axis for scores, skill levels and defect counts."""
    axis = QValueAxis()
    axis.setLabelsColor(DIM)
    axis.setLabelsFont(QFont("Segoe UI", 8))
    axis.setGridLineColor(GRID_CLR)
    axis.setGridLineVisible(visible_grid)
    axis.setLineVisible(False)
    axis.setMinorGridLineVisible(False)
    axis.setTitleText(label)
    axis.setTitleBrush(QBrush(DIM))
    axis.setTitleFont(QFont("Segoe UI", 8))
    return axis


def _cat_axis(categories: list) -> QBarCategoryAxis:
    """Category axis for skill names and defect types."""
    axis = QBarCategoryAxis()
    axis.append(categories)
    axis.setLabelsColor(MUTED)
    axis.setLabelsFont(QFont("Segoe UI", 8))
    axis.setGridLineVisible(False)
    axis.setLineVisible(False)
    return axis


def _glow_line(chart: QChart, points: list, color_hex: str,
               x_axis, y_axis, width: float = 2.5) -> None:
    """Quality trend line: faded wide layers under one bright core line."""
    color = QColor(color_hex)

    for glow_w, alpha in [(width * 5, 15), (width * 3, 35), (width * 1.8, 70)]:
        glow = QLineSeries()
        for p in points:
            glow.append(p)
        glow_color = QColor(color)
        glow_color.setAlpha(alpha)
        pen = QPen(glow_color, glow_w)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        glow.setPen(pen)
        chart.addSeries(glow)
        glow.attachAxis(x_axis)
        glow.attachAxis(y_axis)

    core = QLineSeries()
    for p in points:
        core.append(p)
    pen = QPen(color, width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    core.setPen(pen)
    chart.addSeries(core)
    core.attachAxis(x_axis)
    core.attachAxis(y_axis)


def _hover_dots(chart: QChart, points: list, color_hex: str,
                x_axis, y_axis, labels: list) -> QScatterSeries:
    """One dot per month on the trend line; hovering shows "Mon: score%"."""
    dots = QScatterSeries()
    dots.setMarkerSize(9)
    dots.setColor(QColor(color_hex))
    dots.setBorderColor(QColor(0, 0, 0, 0))
    for p in points:
        dots.append(p)

    def _on_hover(point: QPointF, state: bool):
        if not state:
            return
        idx = min(range(len(points)), key=lambda i: abs(points[i].x() - point.x()))
        QToolTip.showText(QCursor.pos(), labels[idx])

    dots.hovered.connect(_on_hover)
    chart.addSeries(dots)
    dots.attachAxis(x_axis)
    dots.attachAxis(y_axis)
    return dots


def make_chart_view(chart: QChart) -> QChartView:
    """Antialiased view sized to fit a profile tab section."""
    view = QChartView(chart)
    view.setRenderHint(QPainter.RenderHint.Antialiasing)
    view.setStyleSheet("background: transparent; border: none;")
    view.setMinimumHeight(200)
    return view


# ── Public chart functions ───────────────────────────────────────────────────

def plot_quality_trend(monthly_trend: Sequence[Tuple[str, float]]) -> QChartView:
    chart = _base_chart("quality score trend")

    if not monthly_trend:
        chart.setTitle("quality score trend — no data yet")
        return make_chart_view(chart)

    x_axis = QCategoryAxis()
    x_axis.setLabelsPosition(QCategoryAxis.AxisLabelsPosition.AxisLabelsPositionOnValue)
    x_axis.setLabelsColor(MUTED)
    x_axis.setLabelsFont(QFont("Segoe UI", 8))
    x_axis.setGridLineColor(GRID_CLR)
    x_axis.setLineVisible(False)
    y_axis = _value_axis()
    chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)

    points: List[QPointF] = []
    labels: List[str] = []
    for i, (month, score) in enumerate(monthly_trend):
        x_axis.append(month, i)
        points.append(QPointF(i, score))
        labels.append(f"{month}: {score:.0f}%")

    _glow_line(chart, points, GREEN, x_axis, y_axis)
    _hover_dots(chart, points, GREEN, x_axis, y_axis, labels)

    scores = [s for _, s in monthly_trend]
    x_axis.setRange(-0.25, len(points) - 0.75)
    y_axis.setRange(max(0, min(scores) - 10), 100)
    return make_chart_view(chart)


def plot_skill_levels(skills: Sequence[SkillLevel]) -> QChartView:
    chart = _base_chart("skill proficiency")

    if not skills:
        chart.setTitle("skill proficiency — no data yet")
        return make_chart_view(chart)

    names = [s.skill for s in skills]
    x_axis = _value_axis()
    y_axis = _cat_axis(names)
    chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)

    bar_set = QBarSet("level")
    bar_set.setColor(QColor(MAUVE))
    bar_set.setBorderColor(QColor(0, 0, 0, 0))
    for s in skills:
        bar_set.append(s.level)

    series = QHorizontalBarSeries()
    series.append(bar_set)
    series.setBarWidth(0.5)

    def _hover(status, idx, barset):
        if status and 0 <= idx < len(names):
            QToolTip.showText(QCursor.pos(), f"{names[idx]}: {barset.at(idx):.0f}%")

    series.hovered.connect(_hover)
    chart.addSeries(series)
    series.attachAxis(x_axis)
    series.attachAxis(y_axis)

    x_axis.setRange(0, 100)
    return make_chart_view(chart)


def plot_defect_types(defect_types: Sequence[Tuple[str, int]]) -> QChartView:
    chart = _base_chart("common issues")

    if not defect_types:
        chart.setTitle("common issues — none reported")
        return make_chart_view(chart)

    names = [name for name, _ in defect_types]
    counts = [count for _, count in defect_types]

    x_axis = _cat_axis(names)
    y_axis = _value_axis()
    chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)

    bar_set = QBarSet("defects")
    bar_set.setColor(QColor(PEACH))
    bar_set.setBorderColor(QColor(0, 0, 0, 0))
    for c in counts:
        bar_set.append(float(c))

    series = QBarSeries()
    series.append(bar_set)
    series.setBarWidth(0.6)

    def _hover(status, idx, barset):
        if status and 0 <= idx < len(names):
            n = counts[idx]
            QToolTip.showText(QCursor.pos(), f"{names[idx]}: {n} report{'s' if n != 1 else ''}")

    series.hovered.connect(_hover)
    chart.addSeries(series)
    series.attachAxis(x_axis)
    series.attachAxis(y_axis)

    y_axis.setRange(0, max(counts) * 1.2 + 1)
    y_axis.setLabelFormat("%d")
    return make_chart_view(chart)
