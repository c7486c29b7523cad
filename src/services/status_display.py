"""
Status display mapping — label, colour and icon for each installation status.

Shared by the installations table badge and anything else that shows a
status. Kept free of Qt so it can be tested without a display.
"""

from __future__ import annotations

from typing import Dict, Tuple

from src.data.models import InstallationStatus

# status → (label, colour, icon)
_STATUS_STYLES: Dict[str, Tuple[str, str, str]] = {
    InstallationStatus.COMPLETED:   ("Completed",   "#a6e3a1", "✓"),
    InstallationStatus.IN_PROGRESS: ("In Progress", "#89b4fa", "◔"),
    InstallationStatus.NEEDS_RECUT: ("Needs Recut", "#fab387", "⚠"),
}

_FALLBACK_COLOR = "#a6adc8"
_FALLBACK_ICON = "•"

# Options for the status filter combo: (value, label)
STATUS_FILTER_OPTIONS = [
    ("all", "All Status"),
    (InstallationStatus.COMPLETED, "Completed"),
    (InstallationStatus.IN_PROGRESS, "In Progress"),
    (InstallationStatus.NEEDS_RECUT, "Needs Recut"),
]

# Quality score band → text colour
QUALITY_BAND_COLORS = {
    "good": "#a6e3a1",
    "fair": "#f9e2af",
    "poor": "#f38ba8",
}


def status_label(status: str) -> str:
    if status in _STATUS_STYLES:
        return _STATUS_STYLES[status][0]
    return status.replace("-", " ").title()


def status_color(status: str) -> str:
    if status in _STATUS_STYLES:
        return _STATUS_STYLES[status][1]
    return _FALLBACK_COLOR


def status_icon(status: str) -> str:
    if status in _STATUS_STYLES:
        return _STATUS_STYLES[status][2]
    return _FALLBACK_ICON


def status_badge_text(status: str) -> str:
    """Icon and label together, e.g. '⚠ Needs Recut'."""
    return f"{status_icon(status)} {status_label(status)}"
