"""
Installer performance metrics — efficiency rating and the other numbers
shown on the installer profile.

Design:
  - Efficiency compares an installer's average install time against a
    fixed 8-hour standard job and clamps the result to 0-100 %.
  - Missing data is reported as None, never as a fake 0.
  - Aggregates over installation records use numpy, like the rest of the
    stats code.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Iterable, List, Optional

import numpy as np

from src.data.models import (
    Installation,
    InstallationStatus,
    InstallerStats,
    QualityCheck,
    QualityCheckStatus,
)

logger = logging.getLogger(__name__)

STANDARD_INSTALL_MINUTES = 480
DEFAULT_GOOD_SCORE = 90
DEFAULT_FAIR_SCORE = 80


def calculate_efficiency(average_install_minutes: Optional[float]) -> Optional[float]:
    """
    Efficiency rating (percent) for an average install time.

    Exactly the standard time scores 100, twice the standard time scores 0,
    anything faster than standard is capped at 100. None or a non-finite
    average means "no data" and yields None.
    """
    if average_install_minutes is None or not math.isfinite(average_install_minutes):
        return None
    standard = STANDARD_INSTALL_MINUTES
    efficiency = ((standard - (average_install_minutes - standard)) / standard) * 100
    return float(min(max(efficiency, 0.0), 100.0))


def format_install_time(minutes: Optional[float]) -> str:
    """510 -> '8h 30m'."""
    if minutes is None:
        return "—"
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def quality_band(score: float, good: float = DEFAULT_GOOD_SCORE,
                 fair: float = DEFAULT_FAIR_SCORE) -> str:
    """Bucket a 0-100 quality score into 'good' / 'fair' / 'poor'."""
    if score >= good:
        return "good"
    if score >= fair:
        return "fair"
    return "poor"


def initials(name: str) -> str:
    """'Matt Anderson' -> 'MA'."""
    return "".join(part[0] for part in name.split() if part)


def pass_rate(checks: Iterable[QualityCheck]) -> Optional[float]:
    """Percent of checks that passed, None when there are no checks."""
    checks = list(checks)
    if not checks:
        return None
    passed = sum(1 for c in checks if c.status == QualityCheckStatus.PASSED)
    return passed / len(checks) * 100


def average_issues(checks: Iterable[QualityCheck]) -> Optional[float]:
    issues = [c.issues for c in checks]
    if not issues:
        return None
    return float(np.mean(issues))


def install_minutes(installation: Installation) -> Optional[float]:
    """Minutes from creation to completion of a completed installation."""
    if installation.status != InstallationStatus.COMPLETED:
        return None
    if not installation.created_at or not installation.completed_at:
        return None
    if installation.completed_at <= installation.created_at:
        return None
    return (installation.completed_at - installation.created_at).total_seconds() / 60.0


TIME_RANGES = [
    ("7d", "Last 7 Days", 7),
    ("30d", "Last 30 Days", 30),
    ("90d", "Last 90 Days", 90),
    ("1y", "Last Year", 365),
    ("all", "All Time", None),
]


def time_range_start(range_key: str, today: Optional[date] = None) -> Optional[date]:
    """First day included by a time-range key; None means no lower bound."""
    today = today or date.today()
    for key, _label, days in TIME_RANGES:
        if key == range_key:
            return today - timedelta(days=days) if days is not None else None
    raise ValueError(f"Unknown time range '{range_key}'.")


def installations_in_range(
    installations: Iterable[Installation], range_key: str,
    today: Optional[date] = None,
) -> List[Installation]:
    """Installations dated inside the range, newest first."""
    start = time_range_start(range_key, today)
    picked = [
        i for i in installations
        if start is None or (i.date is not None and i.date >= start)
    ]
    return sorted(picked, key=lambda i: i.date or date.min, reverse=True)


def summarize_installer(
    installer_id: str, installations: Iterable[Installation]
) -> InstallerStats:
    """
    Build an InstallerStats snapshot from installation records.

    Only what the records can tell us is filled in: job count, film usage,
    average install time (created → completed) and the
    mean quality-check score. Revenue and certifications stay at zero.
    """
    mine: List[Installation] = [
        i for i in installations if i.installer.id == installer_id
    ]
    if not mine:
        return InstallerStats()

    film_usage = float(np.sum([i.total_area for i in mine]))

    durations = [d for d in (install_minutes(i) for i in mine) if d is not None]
    avg_time = float(np.mean(durations)) if durations else None

    scores = [c.score for i in mine for c in i.quality_checks]
    quality_score = float(np.mean(scores)) if scores else None

    logger.debug("Summarized installer %s: %d installations", installer_id, len(mine))
    return InstallerStats(
        total_installations=len(mine),
        average_install_time=avg_time,
        film_usage=film_usage,
        quality_score=quality_score,
    )


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Turns raw installer numbers into what the profile dialog displays: the
#   efficiency percentage, "8h 30m" style durations, colour bands for
#   quality scores, and per-installer aggregates.
#
# The efficiency formula:
#   efficiency = (standard - (avg - standard)) / standard * 100
#              = (2 * standard - avg) / standard * 100
#   With standard = 480 min: 480 → 100 %, 720 → 50 %, 960 → 0 %.
#   Faster than standard would go above 100 %, so it is capped.
#
# Data flow:
#   InstallerStats.average_install_time → calculate_efficiency() →
#   QProgressBar + "xx.x%" label on the Overview tab.
