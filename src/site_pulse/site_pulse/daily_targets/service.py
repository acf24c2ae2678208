from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..core.exceptions import AggregateReconciliationError, DomainError
from ..hourly_reports.model import HourlyEntry, ReportHeader
from .model import HEADER_FIELDS, DailyAggregateRecord
from .repository import DailyTargetRepository

logger = logging.getLogger(__name__)


def merge_fragment(previous: Optional[str], label: str, text: Optional[str]) -> str:
    """Append one period's text to an accumulated narrative field.

    >>> merge_fragment("", "9am-12pm", "Installed panel A")
    'Installed panel A'
    >>> merge_fragment("Installed panel A", "12pm-3pm", "Installed panel B")
    'Installed panel A. 12pm-3pm: Installed panel B'
    """
    prev = (previous or "").strip()
    text = (text or "").strip()
    if not text:
        return prev
    if not prev:
        return text
    return f"{prev}. {label}: {text}"


@dataclass(frozen=True)
class ReconcileOutcome:
    record_id: int
    created: bool
    record: DailyAggregateRecord


class DailyAggregateReconciler:
    """Upsert the per-day aggregate by merging one submitted period into it.

    Read-merge-write without a transaction: two actors on the same project/date
    can lose an update. Reconciling the same entry twice appends it twice.
    """

    def __init__(self, targets: DailyTargetRepository):
        self._targets = targets

    @staticmethod
    def merge(
        existing: Optional[DailyAggregateRecord],
        *,
        report_date: str,
        header: ReportHeader,
        entry: HourlyEntry,
    ) -> DailyAggregateRecord:
        base = existing or DailyAggregateRecord(report_date=report_date, project_no=header.project_name.strip())
        label = entry.period_label.strip()

        merged = replace(
            base,
            report_date=report_date,
            project_no=base.project_no or header.project_name.strip(),
            daily_target_achieved=merge_fragment(base.daily_target_achieved, label, entry.achievement_text),
            additional_activity=merge_fragment(base.additional_activity, label, entry.activity_text),
            problem_faced=merge_fragment(base.problem_faced, label, entry.problem_text),
        )

        incoming = {
            "daily_target_planned": header.planned_or_default,
            "customer_name": header.customer_name,
            "incharge": header.incharge,
            "site_location": header.site_location,
            "site_start_date": header.site_start_date,
            "site_end_date": header.site_end_date,
            "location_type": header.location_type,
        }
        backfill = {
            name: (incoming[name] or "").strip()
            for name in HEADER_FIELDS
            if not getattr(merged, name).strip() and (incoming[name] or "").strip()
        }
        return replace(merged, **backfill) if backfill else merged

    def reconcile(self, *, token: str, report_date: str, header: ReportHeader, entry: HourlyEntry) -> ReconcileOutcome:
        project = header.project_name.strip()
        try:
            record_id = self._targets.find_id(token=token, report_date=report_date, project_no=project)
            existing = self._targets.get(token=token, record_id=record_id) if record_id else None
            merged = self.merge(existing, report_date=report_date, header=header, entry=entry)

            if existing is None:
                new_id = self._targets.create(token=token, payload=merged.to_payload())
                merged = replace(merged, record_id=new_id)
                logger.info("Created daily target %s for %s on %s", new_id, project, report_date)
                return ReconcileOutcome(record_id=new_id, created=True, record=merged)

            self._targets.update(token=token, record_id=int(record_id), payload=merged.to_payload())
            logger.info("Merged %s into daily target %s (%s on %s)", entry.period_label, record_id, project, report_date)
            return ReconcileOutcome(record_id=int(record_id), created=False, record=merged)
        except (DomainError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Daily target reconciliation failed for %s on %s: %s", project, report_date, e)
            raise AggregateReconciliationError(f"Daily target could not be updated: {e}") from e
