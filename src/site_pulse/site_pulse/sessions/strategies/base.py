from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...hourly_reports.model import ExistingReport
from ...periods.model import Period
from ..model import SessionState


class SessionStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a period's session status."""

    @abstractmethod
    def decide(self, *, period: Period, report: Optional[ExistingReport]) -> SessionState:
        raise NotImplementedError
