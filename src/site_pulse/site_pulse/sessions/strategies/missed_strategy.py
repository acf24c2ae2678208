from __future__ import annotations

from typing import Optional

from ...core.enums import SessionStatus
from ...hourly_reports.model import ExistingReport
from ...periods.model import Period
from ..model import SessionState
from .base import SessionStrategy


class MissedStrategy(SessionStrategy):
    """Window and grace period are over without a report."""

    def decide(self, *, period: Period, report: Optional[ExistingReport]) -> SessionState:
        return SessionState(period=period, status=SessionStatus.MISSED, can_edit=False)
