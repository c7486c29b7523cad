"""
Data models for PPFDesk.

Plain dataclasses for everything the dashboard shows: installations and
their cuts, installers and their stats, quality checks, defect reports and
training progress. Every layer (store, services, UI) speaks these types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple


class InstallationStatus:
    """Lifecycle states of an installation."""
    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    NEEDS_RECUT = "needs-recut"

    ALL = (COMPLETED, IN_PROGRESS, NEEDS_RECUT)


class CutStatus:
    COMPLETED = "completed"
    RECUT = "recut"
    FAILED = "failed"

    ALL = (COMPLETED, RECUT, FAILED)


class InstallerRole:
    LEAD = "Lead"
    INSTALLER = "Installer"
    TRAINING = "Training"

    ALL = (LEAD, INSTALLER, TRAINING)


class QualityCheckStatus:
    PASSED = "passed"
    NEEDS_REVIEW = "needs-review"
    FAILED = "failed"

    ALL = (PASSED, NEEDS_REVIEW, FAILED)


@dataclass
class InstallerRef:
    """The slice of an installer that an installation carries around."""
    id: str = ""
    name: str = ""


@dataclass
class Cut:
    """One piece of film applied to one panel."""
    id: str = ""
    installation_id: str = ""
    panel_name: str = ""
    square_feet: float = 0.0
    roll_id: str = ""
    film_type: str = ""
    status: str = CutStatus.COMPLETED
    recut_reason: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class QualityCheck:
    """Inspection result recorded against an installation."""
    id: str = ""
    installation_id: str = ""
    date: Optional[date] = None
    vehicle: str = ""
    score: int = 0                 # 0-100
    status: str = QualityCheckStatus.PASSED
    issues: int = 0
    notes: Optional[str] = None


@dataclass
class DefectReport:
    id: str = ""
    installation_id: str = ""
    date: Optional[date] = None
    defect_type: str = ""          # 'Bubbles', 'Edge Lifting', 'Dirt Inclusion', ...
    panel_name: str = ""
    severity: str = "minor"        # 'minor' | 'major'
    description: Optional[str] = None


@dataclass
class Installation:
    """
    A single PPF job on a customer's vehicle.

    status is one of InstallationStatus.ALL. total_area is entered by hand
    and is expected (not guaranteed) to match the sum of the cuts.
    """
    id: str = ""
    date: Optional[date] = None
    customer_name: str = ""
    vehicle_info: str = ""
    installer: InstallerRef = field(default_factory=InstallerRef)
    status: str = InstallationStatus.IN_PROGRESS
    total_area: float = 0.0
    cuts: List[Cut] = field(default_factory=list)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None    # set when status first becomes completed
    quality_checks: List[QualityCheck] = field(default_factory=list)
    defect_reports: List[DefectReport] = field(default_factory=list)


@dataclass
class Installer:
    id: str = ""
    name: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: str = InstallerRole.INSTALLER
    joined_date: Optional[date] = None


@dataclass
class InstallerStats:
    """Read-only performance snapshot handed to the profile dialog."""
    total_installations: int = 0
    average_install_time: Optional[float] = None   # minutes
    film_usage: float = 0.0                        # square feet
    revenue_generated: float = 0.0
    certifications: int = 0
    quality_score: Optional[float] = None
    training_progress: Optional[float] = None


@dataclass
class QualityMetrics:
    recent_checks: List[QualityCheck] = field(default_factory=list)
    defect_types: List[Tuple[str, int]] = field(default_factory=list)
    monthly_trend: List[Tuple[str, float]] = field(default_factory=list)


@dataclass
class TrainingPlan:
    name: str = ""
    progress: float = 0.0          # percent
    next_milestone: str = ""
    due_date: Optional[date] = None


@dataclass
class Achievement:
    id: str = ""
    title: str = ""
    date: Optional[date] = None
    type: str = "skill"            # 'skill' | 'certification'


@dataclass
class SkillLevel:
    skill: str = ""
    level: float = 0.0             # percent


@dataclass
class TrainingMetrics:
    current_plan: TrainingPlan = field(default_factory=TrainingPlan)
    recent_achievements: List[Achievement] = field(default_factory=list)
    skill_levels: List[SkillLevel] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Defines the "shape" of every object the shop dashboard deals with as
#   Python dataclasses. They carry data only; behaviour lives in the store
#   and the services.
#
# Key classes:
#   - Installation / Cut: one job and the film pieces applied during it.
#     Cuts belong to exactly one installation (installation_id).
#   - Installer / InstallerRef: full staff record vs. the id+name pair an
#     installation keeps.
#   - InstallerStats: aggregated numbers shown in the profile dialog.
#   - QualityCheck / DefectReport: inspection data attached to a job.
#   - QualityMetrics / TrainingMetrics: what the Quality and Training tabs
#     of the profile render.
#
# Data flow:
#   seed.load() → Installation objects → InstallationStore → filter →
#   InstallationsView table; InstallerStats → installer_metrics → profile.
