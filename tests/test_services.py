"""Unit tests for the service layer."""

import logging
import pytest
from datetime import date, datetime, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.data import seed
from src.data.models import (
    Cut, DefectReport, Installation, InstallationStatus, InstallerRef,
    QualityCheck, QualityCheckStatus,
)
from src.services.area_check import (
    AreaMismatchError, area_discrepancy, check_area, cut_area,
)
from src.services.installation_filter import filter_installations
from src.services.installation_store import CSV_HEADERS, InstallationStore
from src.services.installer_metrics import (
    STANDARD_INSTALL_MINUTES, average_issues, calculate_efficiency,
    format_install_time, initials, install_minutes, installations_in_range,
    pass_rate, quality_band, summarize_installer, time_range_start,
)
from src.services.status_display import (
    STATUS_FILTER_OPTIONS, status_badge_text, status_color, status_icon,
    status_label,
)


@pytest.fixture
def installations():
    return seed.load()


@pytest.fixture
def store(installations):
    return InstallationStore(installations)


def _installation(inst_id, total_area, cut_areas, **kwargs):
    cuts = [
        Cut(id=f"{inst_id}-{n}", installation_id=inst_id,
            panel_name=f"Panel {n}", square_feet=sqft)
        for n, sqft in enumerate(cut_areas)
    ]
    return Installation(
        id=inst_id, date=date(2024, 3, 20), customer_name="Test Customer",
        vehicle_info="2020 Honda Civic",
        installer=InstallerRef(id="2", name="Sarah Kim"),
        total_area=total_area, cuts=cuts, **kwargs,
    )


class TestInstallationFilter:
    @pytest.mark.parametrize("status", InstallationStatus.ALL)
    def test_status_filter_keeps_only_that_status(self, installations, status):
        result = filter_installations(installations, status, "")
        assert all(i.status == status for i in result)
        assert len(result) == sum(1 for i in installations if i.status == status)

    def test_all_with_empty_query_returns_everything_in_order(self, installations):
        result = filter_installations(installations, "all", "")
        assert [i.id for i in result] == [i.id for i in installations]

    @pytest.mark.parametrize("query", ["tesla", "TESLA", "doe", "m4", "Porsche", "zzz"])
    def test_query_matches_customer_or_vehicle(self, installations, query):
        result = filter_installations(installations, "all", query)
        for inst in result:
            q = query.lower()
            assert q in inst.customer_name.lower() or q in inst.vehicle_info.lower()

    def test_query_is_case_insensitive(self, installations):
        lower = filter_installations(installations, "all", "tesla")
        upper = filter_installations(installations, "all", "TeSLa")
        assert [i.id for i in lower] == [i.id for i in upper] == ["1", "4"]

    def test_query_matches_customer_name(self, installations):
        result = filter_installations(installations, "all", "priya")
        assert [i.id for i in result] == ["2"]

    def test_status_and_query_combine(self, installations):
        result = filter_installations(installations, InstallationStatus.COMPLETED, "model")
        assert [i.id for i in result] == ["1", "4"]
        result = filter_installations(installations, InstallationStatus.NEEDS_RECUT, "tesla")
        assert result == []

    @pytest.mark.parametrize("status,query", [
        ("all", ""), ("completed", "tesla"), ("in-progress", "a"), ("needs-recut", "bmw"),
    ])
    def test_filter_is_idempotent(self, installations, status, query):
        once = filter_installations(installations, status, query)
        twice = filter_installations(once, status, query)
        assert [i.id for i in twice] == [i.id for i in once]

    def test_empty_input(self):
        assert filter_installations([], "all", "anything") == []


class TestEfficiency:
    def test_standard_time_is_full_efficiency(self):
        assert calculate_efficiency(STANDARD_INSTALL_MINUTES) == 100.0

    def test_twice_standard_time_is_zero(self):
        assert calculate_efficiency(960) == 0.0

    def test_faster_than_standard_is_clamped(self):
        assert calculate_efficiency(240) == 100.0

    def test_zero_minutes_is_clamped_to_full(self):
        assert calculate_efficiency(0) == 100.0

    def test_between_standard_and_double(self):
        assert calculate_efficiency(720) == 50.0
        assert calculate_efficiency(510) == pytest.approx(93.75)

    def test_slower_than_double_floors_at_zero(self):
        assert calculate_efficiency(2000) == 0.0

    def test_negative_follows_formula_and_clamps(self):
        assert calculate_efficiency(-60) == 100.0

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf")])
    def test_missing_data_is_none(self, value):
        assert calculate_efficiency(value) is None

    def test_result_is_float(self):
        assert isinstance(calculate_efficiency(600), float)


class TestInstallerMetrics:
    def test_format_install_time(self):
        assert format_install_time(510) == "8h 30m"
        assert format_install_time(480) == "8h 0m"
        assert format_install_time(45) == "0h 45m"
        assert format_install_time(479.6) == "7h 59m"
        assert format_install_time(59.99) == "0h 59m"
        assert format_install_time(None) == "—"

    def test_quality_band(self):
        assert quality_band(95) == "good"
        assert quality_band(90) == "good"
        assert quality_band(85) == "fair"
        assert quality_band(79.9) == "poor"
        assert quality_band(85, good=80, fair=70) == "good"

    def test_initials(self):
        assert initials("Matt Anderson") == "MA"
        assert initials("Cher") == "C"
        assert initials("  Sarah   Kim ") == "SK"

    def test_pass_rate_and_average_issues(self):
        checks = seed.load_quality_metrics().recent_checks
        assert pass_rate(checks) == 50.0
        assert average_issues(checks) == 1.0
        assert pass_rate([]) is None
        assert average_issues([]) is None

    def test_install_minutes_only_for_completed(self, installations):
        by_id = {i.id: i for i in installations}
        assert install_minutes(by_id["1"]) == 300.0
        assert install_minutes(by_id["3"]) is None
        assert install_minutes(Installation(status=InstallationStatus.COMPLETED)) is None

    def test_time_range_start(self):
        today = date(2024, 3, 20)
        assert time_range_start("7d", today) == date(2024, 3, 13)
        assert time_range_start("1y", today) == date(2023, 3, 21)
        assert time_range_start("all", today) is None
        with pytest.raises(ValueError, match="Unknown time range"):
            time_range_start("5y", today)

    def test_installations_in_range_newest_first(self, installations):
        today = date(2024, 3, 20)
        recent = installations_in_range(installations, "7d", today)
        assert [i.id for i in recent] == ["3", "1", "2"]
        everything = installations_in_range(installations, "all", today)
        assert [i.id for i in everything] == ["3", "1", "2", "4"]

    def test_summarize_installer(self, installations):
        stats = summarize_installer("1", installations)
        assert stats.total_installations == 2
        assert stats.film_usage == pytest.approx(125.5)
        assert stats.average_install_time == pytest.approx(300.0)
        assert stats.quality_score is None

    def test_summarize_installer_uses_quality_checks(self, installations):
        installations[3].quality_checks.append(
            QualityCheck(id="q", installation_id="4", score=80))
        stats = summarize_installer("3", installations)
        assert stats.quality_score == pytest.approx(80.0)

    def test_summarize_unknown_installer(self, installations):
        stats = summarize_installer("99", installations)
        assert stats.total_installations == 0
        assert stats.average_install_time is None


class TestAreaCheck:
    def test_consistent_installation(self, installations):
        inst = next(i for i in installations if i.id == "2")
        assert cut_area(inst) == pytest.approx(40.0)
        assert area_discrepancy(inst) == pytest.approx(0.0)
        assert check_area(inst) is True
        assert check_area(inst, enforce=True) is True

    def test_inconsistent_installation_advisory_logs(self, installations, caplog):
        inst = next(i for i in installations if i.id == "1")
        assert area_discrepancy(inst) == pytest.approx(98.0)
        with caplog.at_level(logging.WARNING):
            assert check_area(inst) is False
        assert "cuts add up to 27.5" in caplog.text

    def test_inconsistent_installation_enforced_raises(self, installations):
        inst = next(i for i in installations if i.id == "1")
        with pytest.raises(AreaMismatchError, match="125.5"):
            check_area(inst, enforce=True)

    def test_mismatch_error_is_value_error(self):
        assert issubclass(AreaMismatchError, ValueError)

    def test_no_cuts_is_consistent(self, installations):
        inst = next(i for i in installations if i.id == "3")
        assert check_area(inst, enforce=True) is True

    def test_within_tolerance(self):
        inst = _installation("t", 10.03, [4.0, 6.0])
        assert check_area(inst, enforce=True) is True
        assert check_area(inst, tolerance=0.01) is False
        with pytest.raises(AreaMismatchError):
            check_area(inst, enforce=True, tolerance=0.01)


class TestInstallationStore:
    def test_list_is_a_copy(self, store):
        listed = store.list_installations()
        listed.clear()
        assert len(store) == 4

    def test_get(self, store):
        assert store.get("2").customer_name == "Priya Shah"
        assert store.get("missing") is None

    def test_save_new_prepends(self, store):
        new = _installation("new", 10.0, [10.0])
        result = store.save(new)
        assert result[0] is new
        assert len(result) == 5
        assert [i.id for i in result[1:]] == ["1", "2", "3", "4"]

    def test_save_existing_replaces_in_place(self, store):
        edited = _installation("2", 40.0, [16.0, 12.0, 12.0])
        edited.customer_name = "Priya S."
        result = store.save(edited)
        assert [i.id for i in result] == ["1", "2", "3", "4"]
        assert result[1].customer_name == "Priya S."
        assert len(store) == 4

    def test_save_stamps_timestamps(self, store):
        before = datetime.now(timezone.utc)
        new = _installation("new", 5.0, [5.0])
        store.save(new)
        assert new.created_at is not None
        assert new.updated_at >= before

        original_created = store.get("1").created_at
        edited = store.get("1")
        store.save(edited)
        assert edited.created_at == original_created
        assert edited.updated_at >= before

    def test_save_restamps_cut_owner(self, store):
        new = _installation("abc", 6.0, [6.0])
        new.cuts[0].installation_id = "somewhere-else"
        store.save(new)
        assert all(c.installation_id == "abc" for c in store.get("abc").cuts)

    def test_save_advisory_mismatch_still_saves(self, store, caplog):
        bad = _installation("bad", 50.0, [10.0])
        with caplog.at_level(logging.WARNING):
            store.save(bad)
        assert store.get("bad") is bad
        assert "Installation bad" in caplog.text

    def test_save_enforced_mismatch_rejected(self, installations):
        store = InstallationStore(installations, enforce_area=True)
        bad = _installation("bad", 50.0, [10.0])
        with pytest.raises(AreaMismatchError):
            store.save(bad)
        assert store.get("bad") is None
        assert len(store) == 4

    def test_save_enforced_consistent_accepted(self, installations):
        store = InstallationStore(installations, enforce_area=True)
        store.save(_installation("ok", 10.0, [4.0, 6.0]))
        assert store.list_installations()[0].id == "ok"

    def test_filter_delegates(self, store):
        assert [i.id for i in store.filter("completed", "")] == ["1", "4"]
        assert [i.id for i in store.filter()] == ["1", "2", "3", "4"]

    def test_add_quality_check(self, store):
        check = QualityCheck(score=92, status=QualityCheckStatus.PASSED,
                             vehicle="2024 BMW M4")
        saved = store.add_quality_check("2", check)
        assert saved.id
        assert saved.installation_id == "2"
        assert store.get("2").quality_checks == [check]

    def test_add_defect_report(self, store):
        report = DefectReport(defect_type="Bubbles", panel_name="Hood")
        store.add_defect_report("1", report)
        assert report.installation_id == "1"
        assert store.get("1").defect_reports[-1] is report

    def test_attach_to_unknown_installation(self, store):
        with pytest.raises(KeyError, match="nope"):
            store.add_quality_check("nope", QualityCheck())
        with pytest.raises(KeyError):
            store.add_defect_report("nope", DefectReport())

    def test_new_ids_are_unique(self, store):
        ids = {store.new_id() for _ in range(50)}
        assert len(ids) == 50

    def test_editing_completed_job_keeps_duration(self, store):
        job = store.get("1")
        completed = job.completed_at
        job.notes = "Fixed a typo"
        store.save(job)
        assert job.completed_at == completed
        assert install_minutes(store.get("1")) == 300.0
        assert summarize_installer("1", store.list_installations()).average_install_time == 300.0

    def test_completed_at_stamped_once(self, store):
        job = _installation("new", 5.0, [5.0])
        store.save(job)
        assert job.completed_at is None

        job.status = InstallationStatus.COMPLETED
        store.save(job)
        first = job.completed_at
        assert first is not None
        assert first >= job.created_at

        job.notes = "Customer picked up"
        store.save(job)
        assert job.completed_at == first

    def test_reopened_job_clears_completed_at(self, store):
        job = store.get("4")
        job.status = InstallationStatus.NEEDS_RECUT
        store.save(job)
        assert job.completed_at is None
        assert install_minutes(job) is None

    def test_export_csv(self, store):
        lines = store.export_csv().strip().split("\n")
        assert lines[0] == ",".join(CSV_HEADERS)
        assert len(lines) == 5
        assert lines[1] == (
            "1,2024-03-15,John Doe,2023 Tesla Model 3,Matt Anderson,"
            "completed,125.5,2,27.5"
        )

    def test_export_csv_empty_store(self):
        assert InstallationStore().export_csv() == ",".join(CSV_HEADERS) + "\n"


class TestStatusDisplay:
    def test_labels(self):
        assert status_label("completed") == "Completed"
        assert status_label("in-progress") == "In Progress"
        assert status_label("needs-recut") == "Needs Recut"

    def test_every_status_has_distinct_color_and_icon(self):
        colors = {status_color(s) for s in InstallationStatus.ALL}
        icons = {status_icon(s) for s in InstallationStatus.ALL}
        assert len(colors) == len(InstallationStatus.ALL)
        assert len(icons) == len(InstallationStatus.ALL)
        assert all(c.startswith("#") and len(c) == 7 for c in colors)

    def test_unknown_status_falls_back(self):
        assert status_label("on-hold") == "On Hold"
        assert status_icon("on-hold") == "•"
        assert status_color("on-hold") not in {
            status_color(s) for s in InstallationStatus.ALL}

    def test_badge_text(self):
        assert status_badge_text("needs-recut") == "⚠ Needs Recut"

    def test_filter_options_cover_all_statuses(self):
        values = [v for v, _ in STATUS_FILTER_OPTIONS]
        assert values[0] == "all"
        assert set(values[1:]) == set(InstallationStatus.ALL)
