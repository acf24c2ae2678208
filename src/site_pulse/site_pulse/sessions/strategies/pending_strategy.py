from __future__ import annotations

from typing import Optional

from ...core.enums import SessionStatus
from ...hourly_reports.model import ExistingReport
from ...periods.model import Period
from ..model import SessionState
from .base import SessionStrategy


class PendingStrategy(SessionStrategy):
    """Period has not started yet, or is queued behind an earlier open period."""

    def decide(self, *, period: Period, report: Optional[ExistingReport]) -> SessionState:
        return SessionState(period=period, status=SessionStatus.PENDING, can_edit=False)
