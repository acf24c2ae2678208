from __future__ import annotations

from datetime import date, datetime

import pytest

from src.site_pulse.site_pulse.container import assemble
from src.site_pulse.site_pulse.core.exceptions import NetworkError
from src.site_pulse.site_pulse.daily_targets.model import DailyAggregateRecord
from src.site_pulse.site_pulse.hourly_reports.model import ExistingReport, HourlyEntry, ReportDraft
from src.site_pulse.site_pulse.periods.scheduler import default_periods
from src.site_pulse.site_pulse.projects.model import AssignedProject
from src.site_pulse.site_pulse.users.model import Actor


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeHourlyReportRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: list[ExistingReport] = []
        self.created: list[dict] = []
        self.updated: list[tuple[int, dict]] = []
        self.list_calls = 0

    def seed(self, *, report_date: str, time_period: str) -> ExistingReport:
        row = ExistingReport(report_id=self._next_id, report_date=report_date, time_period=time_period)
        self._next_id += 1
        self.rows.append(row)
        return row

    def list_for_date(self, *, token, report_date):
        self.list_calls += 1
        return [r for r in self.rows if r.report_date == report_date]

    def create(self, *, token, payload):
        self.created.append(payload)
        row = ExistingReport(
            report_id=self._next_id,
            report_date=payload["reportDate"],
            time_period=payload["timePeriod"],
            period_name=payload.get("periodName"),
            project_name=payload.get("projectName"),
            hourly_activity=payload.get("hourlyActivity"),
            hourly_achieved=payload.get("hourlyAchieved"),
        )
        self._next_id += 1
        self.rows.append(row)
        return row.report_id

    def update(self, *, token, report_id, payload):
        self.updated.append((report_id, payload))
        return True


class FakeDailyTargetRepo:
    def __init__(self):
        self._next_id = 1
        self.records: dict[int, DailyAggregateRecord] = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise NetworkError("Unable to save daily target", status_code=500)

    def find_id(self, *, token, report_date, project_no):
        self._check()
        for rid, r in self.records.items():
            if r.report_date == report_date and r.project_no == project_no:
                return rid
        return None

    def get(self, *, token, record_id):
        self._check()
        return self.records.get(int(record_id))

    def create(self, *, token, payload):
        self._check()
        rid = self._next_id
        self._next_id += 1
        self.records[rid] = DailyAggregateRecord.from_api({**payload, "id": rid})
        return rid

    def update(self, *, token, record_id, payload):
        self._check()
        self.records[int(record_id)] = DailyAggregateRecord.from_api({**payload, "id": record_id})
        return True


class FakeProjectRepo:
    def __init__(self, projects=None):
        self.projects = list(projects or [])

    def list_assigned(self, *, token):
        return list(self.projects)


class FakeAuthRepo:
    def __init__(self):
        self.users = {
            "asha": (
                "secret",
                {"success": True, "token": "tok-asha", "user": {"id": 7, "employeeId": "E007", "name": "Asha Rao", "role": "Engineer"}},
            )
        }

    def login(self, *, username, password):
        known = self.users.get(username)
        if not known or known[0] != password:
            return {"success": False, "message": "Invalid credentials"}
        return known[1]


@pytest.fixture
def actor() -> Actor:
    return Actor(token="tok-asha", user_id=7, employee_id="E007", name="Asha Rao", role="Engineer")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 10, 0))


@pytest.fixture
def hourly_repo() -> FakeHourlyReportRepo:
    return FakeHourlyReportRepo()


@pytest.fixture
def targets_repo() -> FakeDailyTargetRepo:
    return FakeDailyTargetRepo()


@pytest.fixture
def projects_repo() -> FakeProjectRepo:
    return FakeProjectRepo(
        [
            AssignedProject(
                project_id=3,
                project_no="P-100",
                name="Solar Farm North",
                customer_name="Sunrise Energy",
                incharge="R. Mehta",
                site_location="Block 4",
                start_date="2024-05-01",
                end_date="2024-09-30",
            )
        ]
    )


@pytest.fixture
def container(hourly_repo, targets_repo, projects_repo, clock):
    return assemble(
        auth_repo=FakeAuthRepo(),
        hourly_reports_repo=hourly_repo,
        daily_targets_repo=targets_repo,
        projects_repo=projects_repo,
        clock=clock,
    )


@pytest.fixture
def make_draft():
    """Draft for 2024-06-01 on project P-100 with one filled period."""

    def _make(label: str = "9am-12pm", *, activities=("Mounted frame",), achievements=("Installed panel A",), **entry_fields):
        draft = ReportDraft.for_date(date(2024, 6, 1), default_periods())
        draft.header.project_name = "P-100"
        entry: HourlyEntry = draft.entries[label]
        entry.activities = list(activities)
        entry.achievements = list(achievements)
        for key, value in entry_fields.items():
            setattr(entry, key, value)
        return draft

    return _make
