from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SessionStatus
from ..hourly_reports.model import ExistingReport
from ..periods.model import Period


@dataclass(frozen=True)
class SessionState:
    """Derived editability/submission state of one period."""

    period: Period
    status: SessionStatus
    can_edit: bool
    report: Optional[ExistingReport] = None

    def to_dict(self) -> dict:
        return {
            "label": self.period.label,
            "name": self.period.name,
            "status": self.status.value,
            "canEdit": self.can_edit,
            "report": self.report.to_dict() if self.report else None,
        }


@dataclass(frozen=True)
class SessionSnapshot:
    """SessionStatus map for one report date, keyed by period key."""

    report_date: str
    computed_at: datetime
    states: dict[str, SessionState]

    @property
    def active(self) -> Optional[SessionState]:
        for state in self.states.values():
            if state.status == SessionStatus.ACTIVE:
                return state
        return None

    def to_dict(self) -> dict:
        active = self.active
        return {
            "reportDate": self.report_date,
            "computedAt": self.computed_at.isoformat(timespec="seconds"),
            "activePeriod": active.period.label if active else None,
            "sessions": {key: state.to_dict() for key, state in self.states.items()},
        }
