from __future__ import annotations

import pytest

from src.site_pulse.site_pulse.core.exceptions import AggregateReconciliationError
from src.site_pulse.site_pulse.daily_targets.model import DailyAggregateRecord
from src.site_pulse.site_pulse.daily_targets.service import DailyAggregateReconciler, merge_fragment
from src.site_pulse.site_pulse.hourly_reports.model import HourlyEntry, ReportHeader


def header(**overrides) -> ReportHeader:
    values = dict(project_name="P-100", customer_name="Sunrise Energy", incharge="R. Mehta", site_location="Block 4")
    values.update(overrides)
    return ReportHeader(**values)


def entry(label: str, achieved: str, *, activity: str = "Mounted frame", problems=()) -> HourlyEntry:
    return HourlyEntry(period_label=label, activities=[activity], achievements=[achieved], problems=list(problems))


def test_merge_fragment_first_and_later_values():
    assert merge_fragment(None, "9am-12pm", "Installed panel A") == "Installed panel A"
    assert merge_fragment("Installed panel A", "12pm-3pm", "Installed panel B") == (
        "Installed panel A. 12pm-3pm: Installed panel B"
    )
    assert merge_fragment("Installed panel A", "12pm-3pm", "  ") == "Installed panel A"


def test_first_submission_creates_record(targets_repo):
    reconciler = DailyAggregateReconciler(targets_repo)

    outcome = reconciler.reconcile(token="t", report_date="2024-06-01", header=header(), entry=entry("9am-12pm", "Installed panel A"))

    assert outcome.created is True
    stored = targets_repo.records[outcome.record_id]
    assert stored.project_no == "P-100"
    assert stored.daily_target_achieved == "Installed panel A"
    assert stored.additional_activity == "Activity 1: Mounted frame"
    assert stored.problem_faced == ""
    assert stored.customer_name == "Sunrise Energy"


def test_reconciling_same_entry_twice_appends_twice(targets_repo):
    reconciler = DailyAggregateReconciler(targets_repo)
    same = entry("9am-12pm", "Installed panel A")

    reconciler.reconcile(token="t", report_date="2024-06-01", header=header(), entry=same)
    outcome = reconciler.reconcile(token="t", report_date="2024-06-01", header=header(), entry=same)

    assert outcome.created is False
    assert targets_repo.records[outcome.record_id].daily_target_achieved == (
        "Installed panel A. 9am-12pm: Installed panel A"
    )


def test_headers_are_first_writer_wins(targets_repo):
    reconciler = DailyAggregateReconciler(targets_repo)
    reconciler.reconcile(
        token="t", report_date="2024-06-01", header=header(site_location=""), entry=entry("9am-12pm", "Panel A")
    )

    outcome = reconciler.reconcile(
        token="t",
        report_date="2024-06-01",
        header=header(customer_name="Someone Else", site_location="Block 9", daily_target_planned="20 panels"),
        entry=entry("12pm-3pm", "Panel B"),
    )

    stored = targets_repo.records[outcome.record_id]
    assert stored.customer_name == "Sunrise Energy"
    assert stored.site_location == "Block 9"
    assert stored.daily_target_planned == "Auto-generated from hourly session activities"


def test_problem_text_only_added_when_present(targets_repo):
    reconciler = DailyAggregateReconciler(targets_repo)
    reconciler.reconcile(token="t", report_date="2024-06-01", header=header(), entry=entry("9am-12pm", "Panel A"))

    outcome = reconciler.reconcile(
        token="t",
        report_date="2024-06-01",
        header=header(),
        entry=entry("12pm-3pm", "Panel B", activity="Wired strings", problems=["Cable short"]),
    )

    stored = targets_repo.records[outcome.record_id]
    assert stored.problem_faced == "Problem 1: Cable short"
    assert stored.additional_activity == "Activity 1: Mounted frame. 12pm-3pm: Activity 1: Wired strings"


def test_records_are_kept_per_project(targets_repo):
    reconciler = DailyAggregateReconciler(targets_repo)

    a = reconciler.reconcile(token="t", report_date="2024-06-01", header=header(), entry=entry("9am-12pm", "Panel A"))
    b = reconciler.reconcile(
        token="t", report_date="2024-06-01", header=header(project_name="P-200"), entry=entry("9am-12pm", "Trench 1")
    )

    assert a.record_id != b.record_id
    assert targets_repo.records[b.record_id].daily_target_achieved == "Trench 1"


def test_backend_failure_is_wrapped(targets_repo):
    targets_repo.fail = True

    with pytest.raises(AggregateReconciliationError) as exc:
        DailyAggregateReconciler(targets_repo).reconcile(
            token="t", report_date="2024-06-01", header=header(), entry=entry("9am-12pm", "Panel A")
        )

    assert "Unable to save daily target" in str(exc.value)


class ShiftedDateTargets:
    """Backend that serialises the stored DATE as a UTC timestamp of local midnight."""

    def __init__(self):
        self.updated = []

    def find_id(self, *, token, report_date, project_no):
        return 1

    def get(self, *, token, record_id):
        return DailyAggregateRecord.from_api(
            {"id": record_id, "report_date": "2024-05-31T18:30:00.000Z", "project_no": "P-100", "daily_target_achieved": "Panel A"}
        )

    def create(self, *, token, payload):
        raise AssertionError("record already exists")

    def update(self, *, token, record_id, payload):
        self.updated.append((record_id, payload))
        return True


def test_update_always_sends_the_submission_date():
    targets = ShiftedDateTargets()

    outcome = DailyAggregateReconciler(targets).reconcile(
        token="t", report_date="2024-06-01", header=header(), entry=entry("12pm-3pm", "Panel B")
    )

    record_id, payload = targets.updated[0]
    assert record_id == 1
    assert payload["reportDate"] == "2024-06-01"
    assert outcome.record.daily_target_achieved == "Panel A. 12pm-3pm: Panel B"
