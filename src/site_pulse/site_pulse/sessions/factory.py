from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..hourly_reports.model import ExistingReport
from ..periods.model import PeriodWindow
from .strategies.active_strategy import ActiveStrategy
from .strategies.base import SessionStrategy
from .strategies.missed_strategy import MissedStrategy
from .strategies.pending_strategy import PendingStrategy
from .strategies.submitted_strategy import SubmittedStrategy


@dataclass
class SessionStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_period(
        self,
        *,
        window: PeriodWindow,
        report: Optional[ExistingReport],
        active_taken: bool = False,
    ) -> SessionStrategy:
        if report is not None:
            return SubmittedStrategy()
        if window.is_future:
            return PendingStrategy()
        if window.is_editable:
            # Only one period may be active; a later one waits for the earlier grace window.
            return PendingStrategy() if active_taken else ActiveStrategy()
        return MissedStrategy()
