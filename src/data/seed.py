"""
Seed data for development and demos.

PPFDesk keeps no database: the installation list the app starts with comes
from here. Every loader returns fresh copies so callers can mutate freely.
"""

from __future__ import annotations

import copy
from datetime import date, datetime, timezone
from typing import Dict, List

from .models import (
    Achievement,
    Cut,
    CutStatus,
    DefectReport,
    Installation,
    InstallationStatus,
    Installer,
    InstallerRef,
    InstallerRole,
    InstallerStats,
    QualityCheck,
    QualityCheckStatus,
    QualityMetrics,
    SkillLevel,
    TrainingMetrics,
    TrainingPlan,
)


def _utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


# ── Installers ──────────────────────────────────────────────────────────────

_INSTALLERS: List[Installer] = [
    Installer(
        id="1", name="Matt Anderson", email="matt@ppfshop.example",
        first_name="Matt", last_name="Anderson",
        role=InstallerRole.LEAD, joined_date=date(2021, 6, 1),
    ),
    Installer(
        id="2", name="Sarah Kim", email="sarah@ppfshop.example",
        first_name="Sarah", last_name="Kim",
        role=InstallerRole.INSTALLER, joined_date=date(2022, 9, 12),
    ),
    Installer(
        id="3", name="Diego Ramos", email="diego@ppfshop.example",
        first_name="Diego", last_name="Ramos",
        role=InstallerRole.TRAINING, joined_date=date(2024, 1, 8),
    ),
]

_INSTALLER_STATS: Dict[str, InstallerStats] = {
    "1": InstallerStats(
        total_installations=156, average_install_time=510,
        film_usage=18750.5, revenue_generated=234500,
        certifications=4, quality_score=95, training_progress=75,
    ),
    "2": InstallerStats(
        total_installations=88, average_install_time=455,
        film_usage=9820.0, revenue_generated=121300,
        certifications=2, quality_score=91, training_progress=60,
    ),
    "3": InstallerStats(
        total_installations=12, average_install_time=720,
        film_usage=1140.0, revenue_generated=14800,
        certifications=0, quality_score=82, training_progress=30,
    ),
}

# ── Installations ───────────────────────────────────────────────────────────

_INSTALLATIONS: List[Installation] = [
    Installation(
        id="1",
        date=date(2024, 3, 15),
        customer_name="John Doe",
        vehicle_info="2023 Tesla Model 3",
        installer=InstallerRef(id="1", name="Matt Anderson"),
        status=InstallationStatus.COMPLETED,
        total_area=125.5,
        cuts=[
            Cut(id="c1", installation_id="1", panel_name="Hood",
                square_feet=15.5, roll_id="R123456",
                film_type="XPEL Ultimate Plus", status=CutStatus.COMPLETED,
                created_at=_utc(2024, 3, 15, 9, 0)),
            Cut(id="c2", installation_id="1", panel_name="Front Bumper",
                square_feet=12.0, roll_id="R123457",
                film_type="XPEL Ultimate Plus", status=CutStatus.COMPLETED,
                created_at=_utc(2024, 3, 15, 9, 30)),
        ],
        notes="Clean installation, customer very satisfied",
        created_at=_utc(2024, 3, 15, 9, 0),
        updated_at=_utc(2024, 3, 15, 14, 0),
        completed_at=_utc(2024, 3, 15, 14, 0),
    ),
    Installation(
        id="2",
        date=date(2024, 3, 14),
        customer_name="Priya Shah",
        vehicle_info="2024 BMW M4",
        installer=InstallerRef(id="2", name="Sarah Kim"),
        status=InstallationStatus.NEEDS_RECUT,
        total_area=40.0,
        cuts=[
            Cut(id="c3", installation_id="2", panel_name="Hood",
                square_feet=16.0, roll_id="R223001",
                film_type="SunTek Reaction", status=CutStatus.COMPLETED,
                created_at=_utc(2024, 3, 14, 8, 15)),
            Cut(id="c4", installation_id="2", panel_name="Left Fender",
                square_feet=12.0, roll_id="R223001",
                film_type="SunTek Reaction", status=CutStatus.RECUT,
                recut_reason="Edge lifting at wheel arch",
                created_at=_utc(2024, 3, 14, 9, 0)),
            Cut(id="c5", installation_id="2", panel_name="Right Fender",
                square_feet=12.0, roll_id="R223002",
                film_type="SunTek Reaction", status=CutStatus.COMPLETED,
                created_at=_utc(2024, 3, 14, 9, 40)),
        ],
        notes="Left fender to be redone Monday",
        created_at=_utc(2024, 3, 14, 8, 0),
        updated_at=_utc(2024, 3, 14, 16, 30),
    ),
    Installation(
        id="3",
        date=date(2024, 3, 16),
        customer_name="Alex Turner",
        vehicle_info="2022 Porsche 911 GT3",
        installer=InstallerRef(id="1", name="Matt Anderson"),
        status=InstallationStatus.IN_PROGRESS,
        total_area=0.0,
        cuts=[],
        created_at=_utc(2024, 3, 16, 8, 30),
        updated_at=_utc(2024, 3, 16, 8, 30),
    ),
    Installation(
        id="4",
        date=date(2024, 3, 12),
        customer_name="Maria Lopez",
        vehicle_info="2024 Tesla Model Y",
        installer=InstallerRef(id="3", name="Diego Ramos"),
        status=InstallationStatus.COMPLETED,
        total_area=22.5,
        cuts=[
            Cut(id="c6", installation_id="4", panel_name="Front Bumper",
                square_feet=13.0, roll_id="R123457",
                film_type="XPEL Ultimate Plus", status=CutStatus.COMPLETED,
                created_at=_utc(2024, 3, 12, 10, 0)),
            Cut(id="c7", installation_id="4", panel_name="Mirrors",
                square_feet=2.5, roll_id="R123457",
                film_type="XPEL Ultimate Plus", status=CutStatus.COMPLETED,
                created_at=_utc(2024, 3, 12, 11, 0)),
            Cut(id="c8", installation_id="4", panel_name="Headlights",
                square_feet=7.0, roll_id="R330010",
                film_type="XPEL Ultimate Plus", status=CutStatus.COMPLETED,
                created_at=_utc(2024, 3, 12, 11, 30)),
        ],
        created_at=_utc(2024, 3, 12, 9, 30),
        updated_at=_utc(2024, 3, 12, 17, 45),
        completed_at=_utc(2024, 3, 12, 17, 45),
    ),
]

# ── Quality & training (profile tabs) ───────────────────────────────────────

_QUALITY_METRICS = QualityMetrics(
    recent_checks=[
        QualityCheck(id="1", installation_id="1", date=date(2024, 3, 15),
                     vehicle="2023 Tesla Model 3", score=95,
                     status=QualityCheckStatus.PASSED, issues=0),
        QualityCheck(id="2", installation_id="2", date=date(2024, 3, 14),
                     vehicle="2024 BMW M4", score=88,
                     status=QualityCheckStatus.NEEDS_REVIEW, issues=2),
    ],
    defect_types=[
        ("Bubbles", 3),
        ("Edge Lifting", 2),
        ("Dirt Inclusion", 1),
    ],
    monthly_trend=[
        ("Jan", 90),
        ("Feb", 92),
        ("Mar", 95),
    ],
)

_TRAINING_METRICS = TrainingMetrics(
    current_plan=TrainingPlan(
        name="Advanced PPF Certification",
        progress=75,
        next_milestone="Complex Curves Assessment",
        due_date=date(2024, 4, 1),
    ),
    recent_achievements=[
        Achievement(id="1", title="Surface Preparation Mastery",
                    date=date(2024, 3, 10), type="skill"),
        Achievement(id="2", title="Basic PPF Certification",
                    date=date(2024, 2, 15), type="certification"),
    ],
    skill_levels=[
        SkillLevel("Surface Preparation", 95),
        SkillLevel("Basic Installation", 90),
        SkillLevel("Complex Curves", 75),
        SkillLevel("Quality Control", 85),
    ],
)

DEFECT_TYPES = ["Bubbles", "Edge Lifting", "Dirt Inclusion", "Stretch Marks", "Misalignment"]


# ── Loaders ─────────────────────────────────────────────────────────────────

def load() -> List[Installation]:
    """Return the starting installation list."""
    return copy.deepcopy(_INSTALLATIONS)


def load_installers() -> List[Installer]:
    return copy.deepcopy(_INSTALLERS)


def load_installer_stats() -> Dict[str, InstallerStats]:
    """Stats keyed by installer id."""
    return copy.deepcopy(_INSTALLER_STATS)


def load_quality_metrics() -> QualityMetrics:
    return copy.deepcopy(_QUALITY_METRICS)


def load_training_metrics() -> TrainingMetrics:
    return copy.deepcopy(_TRAINING_METRICS)


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Supplies the fixture data the app runs on: installers, their stats,
#   a handful of installations with cuts, and the quality/training numbers
#   the profile dialog shows.
#
# Key points:
#   - Installation "1" has total_area 125.5 but only 27.5 ft² of cuts.
#     The advisory area check flags it on every save.
#   - Installation "3" has no cuts yet (job just started).
#   - deepcopy on every load: the store mutates what it is given, the
#     module-level fixtures are never touched.
