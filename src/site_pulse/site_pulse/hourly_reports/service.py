from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import missing_fields, raise_if_errors
from ..core.enums import YesNo
from ..core.exceptions import (
    AggregateReconciliationError,
    AuthenticationError,
    DomainError,
    DuplicateSubmissionError,
    NoActiveSessionError,
)
from ..daily_targets.service import DailyAggregateReconciler
from ..periods.model import Period
from ..sessions.service import SessionStateTracker, SessionTrackerRegistry
from ..users.model import Actor
from .model import HourlyEntry, ReportDraft, build_payload
from .repository import HourlyReportRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    report_id: int
    period_label: str
    warnings: tuple[str, ...] = ()
    aggregate_id: Optional[int] = None
    updated: bool = False

    @property
    def message(self) -> str:
        verb = "updated" if self.updated else "saved"
        return f"{self.period_label} report {verb} successfully!"

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "timePeriod": self.period_label,
            "message": self.message,
            "warnings": list(self.warnings),
            "dailyTargetId": self.aggregate_id,
        }


def _required_errors(draft: ReportDraft, period_label: str, entry: Optional[HourlyEntry]) -> list[str]:
    return missing_fields(
        [
            ("Report Date", draft.report_date.isoformat() if draft.report_date else ""),
            ("Time Period", period_label),
            ("Project Name", draft.header.project_name),
            ("Hourly Activity", entry.activity_text if entry else ""),
        ]
    )


def _answered(value: str, answer: YesNo) -> bool:
    return value.strip().lower() == answer.value.lower()


def _conditional_errors(entry: HourlyEntry) -> list[str]:
    fields: list[tuple[str, Optional[str]]] = []
    if _answered(entry.problem_faced, YesNo.YES):
        fields.append(("Problem Resolved Or Not", entry.problem_resolved))
        if _answered(entry.problem_resolved, YesNo.NO):
            fields.append(("Reason If Not Resolved", entry.reason_if_not_resolved))
    if _answered(entry.problem_resolved, YesNo.YES):
        fields += [
            ("Problem Start Time", entry.problem_start_time),
            ("Problem End Time", entry.problem_end_time),
        ]
    if entry.online_support_required.strip():
        fields += [
            ("Online Support Start Time", entry.online_support_start_time),
            ("Online Support End Time", entry.online_support_end_time),
            ("Support Engineer Name", entry.support_engineer_name),
        ]
    return missing_fields(fields)


class ReportSubmissionCoordinator:
    """Use case: submit (or edit) exactly one period's hourly report.

    Preconditions are checked in a fixed order, each with its own error:
    credential, open session, required fields, duplicate, conditional fields.
    None of them needs a network call beyond the tracker's cached reports.
    A label that already has a report for the date is a duplicate whether or
    not its window is still open.
    """

    def __init__(
        self,
        reports: HourlyReportRepository,
        reconciler: DailyAggregateReconciler,
        trackers: SessionTrackerRegistry,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._reports = reports
        self._reconciler = reconciler
        self._trackers = trackers
        self._clock = clock

    @staticmethod
    def _require_actor(actor: Optional[Actor]) -> Actor:
        if actor is None or not actor.token:
            raise AuthenticationError("Authentication required. Please login again.")
        return actor

    def _open_period(self, tracker: Optional[SessionStateTracker], now: datetime) -> Optional[Period]:
        if tracker is not None:
            return tracker.open_period(now)
        editable = self._trackers.scheduler.editable_periods(now)
        return editable[0] if editable else None

    @staticmethod
    def _reject_duplicate(tracker: SessionStateTracker, label: str, date_str: str) -> None:
        existing = tracker.report_for(label)
        if existing is not None:
            raise DuplicateSubmissionError(
                f"A report for {label} on {date_str} already exists (id {existing.report_id}), use edit instead"
            )

    def submit(
        self,
        *,
        actor: Optional[Actor],
        draft: ReportDraft,
        period_label: str,
        now: Optional[datetime] = None,
    ) -> SubmissionResult:
        actor = self._require_actor(actor)
        now = now or self._clock()
        label = (period_label or "").strip()
        date_str = draft.report_date.isoformat() if draft.report_date else ""

        tracker = self._trackers.get(actor, date_str) if date_str else None
        if label and tracker is not None and self._trackers.scheduler.find(label) is not None:
            self._reject_duplicate(tracker, label, date_str)

        open_period = self._open_period(tracker, now)
        if open_period is None or (label and label != open_period.label):
            logger.info("Rejected %s submission by %s at %s: no open session", label or "-", actor.employee_id, now)
            raise NoActiveSessionError("You may only submit during an open session or its 30-minute grace period")

        period = open_period
        entry = draft.entry(period.label) if label else None
        raise_if_errors(_required_errors(draft, label, entry))

        self._reject_duplicate(tracker, period.label, date_str)

        raise_if_errors(_conditional_errors(entry))

        payload = build_payload(
            report_date=date_str,
            header=draft.header,
            entry=entry,
            employee_id=actor.employee_id,
            employee_name=actor.name,
        )
        report_id = self._reports.create(token=actor.token, payload=payload)
        logger.info("Saved %s report %s for %s on %s", period.label, report_id, actor.employee_id, date_str)

        warnings: list[str] = []
        aggregate_id = None
        try:
            outcome = self._reconciler.reconcile(
                token=actor.token, report_date=date_str, header=draft.header, entry=entry
            )
            aggregate_id = outcome.record_id
        except AggregateReconciliationError as e:
            warnings.append(str(e))

        draft.reset_entry(period)
        warnings.extend(self._refresh(actor, date_str))

        return SubmissionResult(
            report_id=report_id,
            period_label=period.label,
            warnings=tuple(warnings),
            aggregate_id=aggregate_id,
        )

    def edit(
        self,
        *,
        actor: Optional[Actor],
        report_id: int,
        draft: ReportDraft,
        period_label: str,
    ) -> SubmissionResult:
        """Full-field overwrite of an existing report; no window restriction."""
        actor = self._require_actor(actor)
        label = (period_label or "").strip()
        entry = draft.entry(label) if label else None

        errors = _required_errors(draft, label, entry)
        if entry is not None:
            errors += _conditional_errors(entry)
        raise_if_errors(errors)

        date_str = draft.report_date.isoformat()
        payload = build_payload(
            report_date=date_str,
            header=draft.header,
            entry=entry,
            employee_id=actor.employee_id,
            employee_name=actor.name,
        )
        self._reports.update(token=actor.token, report_id=int(report_id), payload=payload)
        logger.info("Updated %s report %s for %s on %s", label, report_id, actor.employee_id, date_str)

        warnings = self._refresh(actor, date_str)
        return SubmissionResult(report_id=int(report_id), period_label=label, warnings=tuple(warnings), updated=True)

    def _refresh(self, actor: Actor, date_str: str) -> list[str]:
        try:
            self._trackers.get(actor, date_str).refresh()
        except DomainError as e:
            logger.warning("Could not refresh sessions for %s on %s: %s", actor.employee_id, date_str, e)
            return [f"Session status could not be refreshed: {e}"]
        return []
