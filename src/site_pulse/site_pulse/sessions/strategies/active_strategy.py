from __future__ import annotations

from typing import Optional

from ...core.enums import SessionStatus
from ...hourly_reports.model import ExistingReport
from ...periods.model import Period
from ..model import SessionState
from .base import SessionStrategy


class ActiveStrategy(SessionStrategy):
    """Open window or grace period, nothing submitted yet."""

    def decide(self, *, period: Period, report: Optional[ExistingReport]) -> SessionState:
        return SessionState(period=period, status=SessionStatus.ACTIVE, can_edit=True)
