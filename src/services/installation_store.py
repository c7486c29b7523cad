"""
Installation Store — the one place the installation list is held and changed.

Every other module asks the store for installations and hands saved records
back to it. Nothing is written to disk; the list lives as long as the app.
"""

from __future__ import annotations

import csv
import io
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from src.data.models import DefectReport, Installation, InstallationStatus, QualityCheck
from src.services.area_check import DEFAULT_TOLERANCE_SQFT, check_area, cut_area
from src.services.installation_filter import STATUS_FILTER_ALL, filter_installations

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "id", "date", "customer_name", "vehicle_info", "installer",
    "status", "total_area", "cut_count", "cut_area",
]


class InstallationStore:
    """
    Owns the installation collection for the running session.

    Mutations go through save() (replace-by-id or prepend) and the two
    attach methods. Records are never deleted.
    """

    def __init__(
        self,
        installations: Optional[Iterable[Installation]] = None,
        enforce_area: bool = False,
        area_tolerance: float = DEFAULT_TOLERANCE_SQFT,
    ) -> None:
        self._installations: List[Installation] = list(installations or [])
        self.enforce_area = enforce_area
        self.area_tolerance = area_tolerance

    # ── Reads ───────────────────────────────────────────────────────────────

    def list_installations(self) -> List[Installation]:
        return list(self._installations)

    def get(self, installation_id: str) -> Optional[Installation]:
        for inst in self._installations:
            if inst.id == installation_id:
                return inst
        return None

    def filter(self, status_filter: str = STATUS_FILTER_ALL,
               query: str = "") -> List[Installation]:
        return filter_installations(self._installations, status_filter, query)

    def __len__(self) -> int:
        return len(self._installations)

    # ── Writes ──────────────────────────────────────────────────────────────

    def save(self, installation: Installation) -> List[Installation]:
        """
        Insert or update an installation and return the updated list.

        An existing id is replaced where it stands; a new id goes to the
        front. Raises AreaMismatchError when area enforcement is on and the
        cuts disagree with total_area.
        """
        check_area(installation, enforce=self.enforce_area,
                   tolerance=self.area_tolerance)

        now = datetime.now(timezone.utc)
        if installation.created_at is None:
            installation.created_at = now
        installation.updated_at = now
        if installation.status == InstallationStatus.COMPLETED:
            if installation.completed_at is None:
                installation.completed_at = now
        else:
            installation.completed_at = None
        for cut in installation.cuts:
            cut.installation_id = installation.id

        for idx, existing in enumerate(self._installations):
            if existing.id == installation.id:
                self._installations[idx] = installation
                logger.info("Updated installation %s", installation.id)
                break
        else:
            self._installations.insert(0, installation)
            logger.info("Added installation %s for %s",
                        installation.id, installation.customer_name)
        return self.list_installations()

    def add_quality_check(self, installation_id: str,
                          check: QualityCheck) -> QualityCheck:
        inst = self._require(installation_id)
        check.installation_id = installation_id
        if not check.id:
            check.id = self.new_id()
        inst.quality_checks.append(check)
        logger.info("Quality check %s (score %d) recorded for installation %s",
                    check.id, check.score, installation_id)
        return check

    def add_defect_report(self, installation_id: str,
                          report: DefectReport) -> DefectReport:
        inst = self._require(installation_id)
        report.installation_id = installation_id
        if not report.id:
            report.id = self.new_id()
        inst.defect_reports.append(report)
        logger.info("Defect '%s' reported for installation %s",
                    report.defect_type, installation_id)
        return report

    # ── Helpers ─────────────────────────────────────────────────────────────

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex[:12]

    def _require(self, installation_id: str) -> Installation:
        inst = self.get(installation_id)
        if inst is None:
            raise KeyError(f"No installation with id '{installation_id}'.")
        return inst

    # ── Data export ─────────────────────────────────────────────────────────

    def export_csv(self) -> str:
        """Return all installations as CSV text (header row included)."""
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for inst in self._installations:
            writer.writerow([
                inst.id,
                inst.date.isoformat() if inst.date else "",
                inst.customer_name,
                inst.vehicle_info,
                inst.installer.name,
                inst.status,
                f"{inst.total_area:.1f}",
                len(inst.cuts),
                f"{cut_area(inst):.1f}",
            ])
        return buf.getvalue()


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Holds the list of installations for the session and is the only code
#   that changes it. The UI never edits the list directly.
#
# Key methods:
#   - save(): replace-by-id (keeps the row where it was) or prepend (new
#     jobs show up first). Stamps updated_at (and completed_at the first
#     time a job is saved as completed) and re-points every cut at
#     its owning installation.
#   - add_quality_check() / add_defect_report(): attach inspection data.
#   - filter(): the search box + status combo, delegated to
#     installation_filter.
#   - export_csv(): one line per installation for spreadsheets.
#
# Data flow:
#   seed.load() → InstallationStore → InstallationsView.refresh()
#   InstallationDialog accepted → store.save(record) → table re-rendered
