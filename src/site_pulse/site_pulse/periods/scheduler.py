from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_PERIODS
from ..core.exceptions import ValidationError
from .model import Period, PeriodWindow


def default_periods() -> list[Period]:
    return [Period(label=label, name=name, start_hour=start, end_hour=end) for label, name, start, end in DEFAULT_PERIODS]


class PeriodScheduler:
    """Pure time classification of the day's reporting periods."""

    def __init__(self, periods: Optional[Sequence[Period]] = None, *, grace_minutes: int = DEFAULT_GRACE_MINUTES):
        self._periods = tuple(periods if periods is not None else default_periods())
        self._grace_minutes = int(grace_minutes)
        self._check_contiguous(self._periods)

    @staticmethod
    def _check_contiguous(periods: Sequence[Period]) -> None:
        if not periods:
            raise ValidationError("At least one reporting period is required")
        for p in periods:
            if not 0 <= p.start_hour < p.end_hour <= 24:
                raise ValidationError(f"Invalid hours for period {p.label}")
        for prev, nxt in zip(periods, periods[1:]):
            if prev.end_hour != nxt.start_hour:
                raise ValidationError(f"Periods {prev.label} and {nxt.label} are not contiguous")

    @property
    def periods(self) -> tuple[Period, ...]:
        return self._periods

    @property
    def grace_minutes(self) -> int:
        return self._grace_minutes

    def classify(self, period: Period, now: datetime) -> PeriodWindow:
        hour, minute = now.hour, now.minute

        # Start hour counts at any minute; the end hour only at exactly :00.
        is_open = (
            period.start_hour < hour < period.end_hour
            or hour == period.start_hour
            or (hour == period.end_hour and minute == 0)
        )
        is_grace = is_open or (hour == period.end_hour and minute <= self._grace_minutes)
        is_future = hour < period.start_hour

        return PeriodWindow(is_open=is_open, is_future=is_future, is_grace=is_grace)

    def is_editable(self, period: Period, now: datetime) -> bool:
        return self.classify(period, now).is_editable

    def editable_periods(self, now: datetime) -> list[Period]:
        return [p for p in self._periods if self.is_editable(p, now)]

    def find(self, label: str) -> Optional[Period]:
        label = (label or "").strip()
        for p in self._periods:
            if p.label == label:
                return p
        return None
