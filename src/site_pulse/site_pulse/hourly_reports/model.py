from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from ..common.datetime_utils import format_date_for_backend, parse_backend_date, parse_iso_date
from ..core.constants import DEFAULT_DAILY_TARGET_PLANNED
from ..core.enums import YesNo
from ..periods.model import Period

if TYPE_CHECKING:
    from ..projects.model import AssignedProject


def _clean(lines: Sequence[str]) -> list[str]:
    return [line.strip() for line in lines if line and line.strip()]


@dataclass
class HourlyEntry:
    """Draft of one period's report, held in form state until submitted."""

    period_label: str
    period_name: str = ""
    activities: list[str] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)
    problem_faced: str = ""
    problem_resolved: str = ""
    reason_if_not_resolved: str = ""
    problem_start_time: str = ""
    problem_end_time: str = ""
    online_support_required: str = ""
    online_support_start_time: str = ""
    online_support_end_time: str = ""
    support_engineer_name: str = ""
    engineer_remark: str = ""
    incharge_remark: str = ""

    @classmethod
    def blank(cls, period: Period) -> "HourlyEntry":
        return cls(period_label=period.label, period_name=period.name)

    @classmethod
    def from_json(cls, data: Mapping[str, Any], *, period: Optional[Period] = None) -> "HourlyEntry":
        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value).strip()

        def lines(key: str) -> list[str]:
            value = data.get(key)
            if value is None:
                return []
            if isinstance(value, str):
                return [value]
            return [str(v) for v in value if v is not None]

        label = text("timePeriod") or (period.label if period else "")
        return cls(
            period_label=label,
            period_name=text("periodName") or (period.name if period else ""),
            activities=lines("activities"),
            achievements=lines("achievements"),
            problems=lines("problems"),
            problem_faced=text("problemFaced"),
            problem_resolved=text("problemResolved"),
            reason_if_not_resolved=text("reasonIfNotResolved"),
            problem_start_time=text("problemStartTime"),
            problem_end_time=text("problemEndTime"),
            online_support_required=text("onlineSupportRequired"),
            online_support_start_time=text("onlineSupportStartTime"),
            online_support_end_time=text("onlineSupportEndTime"),
            support_engineer_name=text("supportEngineerName"),
            engineer_remark=text("engineerRemark"),
            incharge_remark=text("inchargeRemark"),
        )

    def to_json(self) -> dict:
        return {
            "timePeriod": self.period_label,
            "periodName": self.period_name,
            "activities": list(self.activities),
            "achievements": list(self.achievements),
            "problems": list(self.problems),
            "problemFaced": self.problem_faced,
            "problemResolved": self.problem_resolved,
            "reasonIfNotResolved": self.reason_if_not_resolved,
            "problemStartTime": self.problem_start_time,
            "problemEndTime": self.problem_end_time,
            "onlineSupportRequired": self.online_support_required,
            "onlineSupportStartTime": self.online_support_start_time,
            "onlineSupportEndTime": self.online_support_end_time,
            "supportEngineerName": self.support_engineer_name,
            "engineerRemark": self.engineer_remark,
            "inchargeRemark": self.incharge_remark,
        }

    @property
    def activity_text(self) -> str:
        return "\n".join(f"Activity {i}: {a}" for i, a in enumerate(_clean(self.activities), start=1))

    @property
    def achievement_text(self) -> str:
        return "\n".join(_clean(self.achievements))

    @property
    def problem_text(self) -> str:
        return "\n".join(f"Problem {i}: {p}" for i, p in enumerate(_clean(self.problems), start=1))


@dataclass
class ReportHeader:
    """Per-day fields shared by every period of a report."""

    project_name: str = ""
    daily_target_planned: str = ""
    location_type: str = ""
    customer_name: str = ""
    incharge: str = ""
    site_location: str = ""
    site_start_date: str = ""
    site_end_date: str = ""

    @property
    def planned_or_default(self) -> str:
        return self.daily_target_planned.strip() or DEFAULT_DAILY_TARGET_PLANNED

    _JSON_KEYS = (
        ("project_name", "projectName"),
        ("daily_target_planned", "dailyTargetPlanned"),
        ("location_type", "locationType"),
        ("customer_name", "customerName"),
        ("incharge", "incharge"),
        ("site_location", "siteLocation"),
        ("site_start_date", "siteStartDate"),
        ("site_end_date", "siteEndDate"),
    )

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ReportHeader":
        values = {}
        for attr, key in cls._JSON_KEYS:
            value = data.get(key)
            values[attr] = "" if value is None else str(value).strip()
        return cls(**values)

    def to_json(self) -> dict:
        return {key: getattr(self, attr) for attr, key in self._JSON_KEYS}

    def apply_project(self, project: "AssignedProject") -> None:
        """Pre-fill blank header fields from an assigned project."""
        fills = {
            "project_name": project.project_no or project.name,
            "customer_name": project.customer_name,
            "incharge": project.incharge,
            "site_location": project.site_location,
            "site_start_date": project.start_date,
            "site_end_date": project.end_date,
        }
        for attr, value in fills.items():
            if value and not getattr(self, attr).strip():
                setattr(self, attr, value)


@dataclass
class ReportDraft:
    """Form state for one report date: header plus one entry per period."""

    report_date: Optional[date]
    header: ReportHeader = field(default_factory=ReportHeader)
    entries: dict[str, HourlyEntry] = field(default_factory=dict)

    @classmethod
    def for_date(cls, report_date: Optional[date], periods: Sequence[Period]) -> "ReportDraft":
        return cls(report_date=report_date, entries={p.label: HourlyEntry.blank(p) for p in periods})

    @classmethod
    def from_json(cls, data: Mapping[str, Any], periods: Sequence[Period]) -> "ReportDraft":
        """Build a draft from the browser form body.

        Entries come from "hourlyEntries" (a list of entry objects keyed by
        timePeriod); periods the body does not mention start blank.
        """
        raw_date = data.get("reportDate")
        report_date = None
        if raw_date is not None and str(raw_date).strip():
            report_date = parse_iso_date(format_date_for_backend(str(raw_date)))

        draft = cls.for_date(report_date, periods)
        draft.header = ReportHeader.from_json(data)

        by_label = {p.label: p for p in periods}
        for item in data.get("hourlyEntries") or []:
            if not isinstance(item, Mapping):
                continue
            label = str(item.get("timePeriod") or "").strip()
            if label in by_label:
                draft.entries[label] = HourlyEntry.from_json(item, period=by_label[label])
        return draft

    def to_json(self) -> dict:
        data = {"reportDate": self.report_date.isoformat() if self.report_date else ""}
        data.update(self.header.to_json())
        data["hourlyEntries"] = [e.to_json() for e in self.entries.values()]
        return data

    def entry(self, period_label: str) -> Optional[HourlyEntry]:
        return self.entries.get(period_label)

    def reset_entry(self, period: Period) -> None:
        self.entries[period.label] = HourlyEntry.blank(period)

    def achievement_contributions(self) -> list[str]:
        return [e.achievement_text for e in self.entries.values() if e.achievement_text]


@dataclass(frozen=True)
class ExistingReport:
    """Server-confirmed hourly report for one period of one day."""

    report_id: int
    report_date: str
    time_period: str
    period_name: Optional[str] = None
    project_name: Optional[str] = None
    hourly_activity: Optional[str] = None
    hourly_achieved: Optional[str] = None
    problem_faced: Optional[str] = None
    problem_resolved: Optional[str] = None
    problem_start_time: Optional[str] = None
    problem_end_time: Optional[str] = None
    online_support_required: Optional[str] = None
    online_support_start_time: Optional[str] = None
    online_support_end_time: Optional[str] = None
    support_engineer_name: Optional[str] = None
    engineer_remark: Optional[str] = None
    incharge_remark: Optional[str] = None
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "ExistingReport":
        def s(key: str) -> Optional[str]:
            value = row.get(key)
            return None if value is None else str(value)

        return cls(
            report_id=int(row["id"]),
            report_date=parse_backend_date(row.get("report_date")),
            time_period=str(row.get("time_period") or ""),
            period_name=s("period_name"),
            project_name=s("project_name"),
            hourly_activity=s("hourly_activity"),
            hourly_achieved=s("hourly_achieved"),
            problem_faced=s("problem_faced_by_engineer_hourly"),
            problem_resolved=s("problem_resolved_or_not"),
            problem_start_time=s("problem_occur_start_time"),
            problem_end_time=s("problem_resolved_end_time"),
            online_support_required=s("online_support_required_for_which_problem"),
            online_support_start_time=s("online_support_time"),
            online_support_end_time=s("online_support_end_time"),
            support_engineer_name=s("engineer_name_who_gives_online_support"),
            engineer_remark=s("engineer_remark"),
            incharge_remark=s("project_incharge_remark"),
            employee_id=s("employee_id"),
            employee_name=s("employee_name"),
            created_at=s("created_at"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "report_date": self.report_date,
            "time_period": self.time_period,
            "period_name": self.period_name,
            "project_name": self.project_name,
            "hourly_activity": self.hourly_activity,
            "hourly_achieved": self.hourly_achieved,
            "problem_faced_by_engineer_hourly": self.problem_faced,
            "problem_resolved_or_not": self.problem_resolved,
            "created_at": self.created_at,
        }


def build_payload(
    *,
    report_date: str,
    header: ReportHeader,
    entry: HourlyEntry,
    employee_id: str,
    employee_name: str,
) -> dict:
    """Request body for POST/PUT /hourly-report (field names are the backend's)."""
    planned = header.planned_or_default
    return {
        "reportDate": report_date,
        "timePeriod": entry.period_label.strip(),
        "periodName": entry.period_name,
        "projectName": header.project_name.strip(),
        "dailyTargetPlanned": planned,
        "dailyTarget": planned,
        "hourlyActivity": entry.activity_text,
        "hourlyAchieved": entry.achievement_text,
        "problemFacedByEngineerHourly": entry.problem_text,
        "problemFaced": entry.problem_faced or YesNo.NO.value,
        "problemResolvedOrNot": entry.problem_resolved,
        "reasonIfNotResolved": entry.reason_if_not_resolved,
        "problemOccurStartTime": entry.problem_start_time,
        "problemResolvedEndTime": entry.problem_end_time,
        "onlineSupportRequiredForWhichProblem": entry.online_support_required,
        "onlineSupportTime": entry.online_support_start_time,
        "onlineSupportEndTime": entry.online_support_end_time,
        "engineerNameWhoGivesOnlineSupport": entry.support_engineer_name,
        "engineerRemark": entry.engineer_remark,
        "projectInchargeRemark": entry.incharge_remark,
        "employee_id": employee_id,
        "employee_name": employee_name,
        "locationType": header.location_type,
        "customerName": header.customer_name,
        "incharge": header.incharge,
        "siteLocation": header.site_location,
        "siteStartDate": header.site_start_date,
        "siteEndDate": header.site_end_date,
    }
