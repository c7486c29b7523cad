"""Unit tests for the data layer (models, seed data)."""

import pytest
from datetime import datetime

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.data import seed
from src.data.models import (
    Cut, CutStatus, Installation, InstallationStatus, InstallerRef,
    InstallerRole, InstallerStats, QualityCheckStatus,
)


@pytest.fixture
def installations():
    return seed.load()


class TestModels:
    def test_installation_defaults(self):
        inst = Installation(id="x")
        assert inst.status == InstallationStatus.IN_PROGRESS
        assert inst.cuts == []
        assert inst.quality_checks == []
        assert inst.defect_reports == []
        assert inst.installer == InstallerRef()

    def test_default_lists_not_shared(self):
        a = Installation(id="a")
        b = Installation(id="b")
        a.cuts.append(Cut(id="c"))
        assert b.cuts == []

    def test_installer_stats_defaults(self):
        stats = InstallerStats()
        assert stats.total_installations == 0
        assert stats.average_install_time is None
        assert stats.quality_score is None

    def test_status_constants(self):
        assert InstallationStatus.ALL == ("completed", "in-progress", "needs-recut")
        assert CutStatus.RECUT in CutStatus.ALL
        assert QualityCheckStatus.NEEDS_REVIEW == "needs-review"
        assert InstallerRole.ALL == ("Lead", "Installer", "Training")


class TestSeed:
    def test_load_returns_installations(self, installations):
        assert len(installations) == 4
        assert all(isinstance(i, Installation) for i in installations)

    def test_load_returns_fresh_copies(self):
        first = seed.load()
        first[0].customer_name = "Changed"
        first[0].cuts.clear()
        second = seed.load()
        assert second[0].customer_name == "John Doe"
        assert len(second[0].cuts) == 2

    def test_cuts_belong_to_their_installation(self, installations):
        for inst in installations:
            for cut in inst.cuts:
                assert cut.installation_id == inst.id

    def test_statuses_are_known(self, installations):
        for inst in installations:
            assert inst.status in InstallationStatus.ALL
            for cut in inst.cuts:
                assert cut.status in CutStatus.ALL

    def test_timestamps_are_utc(self, installations):
        for inst in installations:
            assert isinstance(inst.created_at, datetime)
            assert inst.created_at.tzinfo is not None
            assert inst.updated_at >= inst.created_at
            if inst.status == InstallationStatus.COMPLETED:
                assert inst.completed_at > inst.created_at
            else:
                assert inst.completed_at is None

    def test_recut_has_reason(self, installations):
        recuts = [c for i in installations for c in i.cuts if c.status == CutStatus.RECUT]
        assert recuts
        assert all(c.recut_reason for c in recuts)

    def test_installation_refs_match_roster(self, installations):
        roster = {i.id: i.name for i in seed.load_installers()}
        for inst in installations:
            assert roster[inst.installer.id] == inst.installer.name

    def test_stats_keyed_by_installer(self):
        stats = seed.load_installer_stats()
        assert set(stats) == {i.id for i in seed.load_installers()}
        assert stats["1"].average_install_time == 510

    def test_profile_metrics(self):
        quality = seed.load_quality_metrics()
        training = seed.load_training_metrics()
        assert len(quality.recent_checks) == 2
        assert quality.defect_types[0] == ("Bubbles", 3)
        assert [m for m, _ in quality.monthly_trend] == ["Jan", "Feb", "Mar"]
        assert training.current_plan.progress == 75
        assert all(0 <= s.level <= 100 for s in training.skill_levels)

    def test_defect_types_list(self):
        assert "Edge Lifting" in seed.DEFECT_TYPES
