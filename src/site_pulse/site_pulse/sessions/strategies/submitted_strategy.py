from __future__ import annotations

from typing import Optional

from ...core.enums import SessionStatus
from ...hourly_reports.model import ExistingReport
from ...periods.model import Period
from ..model import SessionState
from .base import SessionStrategy


class SubmittedStrategy(SessionStrategy):
    """The backend already holds a report for this period."""

    def decide(self, *, period: Period, report: Optional[ExistingReport]) -> SessionState:
        return SessionState(period=period, status=SessionStatus.SUBMITTED, can_edit=False, report=report)
