from __future__ import annotations

import logging
import threading
import time
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import TRACKER_DATES_PER_USER, TRACKER_IDLE_SECONDS
from ..core.enums import SessionStatus
from ..hourly_reports.model import ExistingReport
from ..hourly_reports.repository import HourlyReportRepository
from ..periods.model import Period
from ..periods.scheduler import PeriodScheduler
from ..users.model import Actor
from .factory import SessionStrategyFactory
from .model import SessionSnapshot, SessionState

logger = logging.getLogger(__name__)


def compute_session_states(
    scheduler: PeriodScheduler,
    reports: Iterable[ExistingReport],
    now: datetime,
    *,
    factory: Optional[SessionStrategyFactory] = None,
) -> dict[str, SessionState]:
    """Pure function of (now, reports, periods): one SessionState per period key."""
    factory = factory or SessionStrategyFactory()

    by_label: dict[str, ExistingReport] = {}
    for r in reports:
        by_label.setdefault(r.time_period.strip(), r)

    states: dict[str, SessionState] = {}
    active_taken = False
    for period in scheduler.periods:
        report = by_label.get(period.label)
        window = scheduler.classify(period, now)
        strategy = factory.for_period(window=window, report=report, active_taken=active_taken)
        state = strategy.decide(period=period, report=report)
        if state.status == SessionStatus.ACTIVE:
            active_taken = True
        states[period.key] = state
    return states


class SessionStateTracker:
    """Session status of one actor's report date.

    Holds the last fetched ExistingReport set; every recompute is synchronous and
    gives the same result for the same (now, reports).
    """

    def __init__(
        self,
        scheduler: PeriodScheduler,
        reports: HourlyReportRepository,
        *,
        actor: Actor,
        report_date: str,
        clock: Callable[[], datetime] = now_local,
        factory: Optional[SessionStrategyFactory] = None,
    ):
        self._scheduler = scheduler
        self._reports_repo = reports
        self._actor = actor
        self._report_date = report_date
        self._clock = clock
        self._factory = factory or SessionStrategyFactory()
        self._reports: tuple[ExistingReport, ...] = ()
        self._last: Optional[SessionSnapshot] = None
        self._listeners: list[Callable[[SessionSnapshot], None]] = []
        self._lock = threading.RLock()

    @property
    def actor(self) -> Actor:
        return self._actor

    @property
    def report_date(self) -> str:
        return self._report_date

    @property
    def existing_reports(self) -> tuple[ExistingReport, ...]:
        return self._reports

    @property
    def last_snapshot(self) -> Optional[SessionSnapshot]:
        return self._last

    def subscribe(self, listener: Callable[[SessionSnapshot], None]) -> None:
        self._listeners.append(listener)

    def refresh(self) -> SessionSnapshot:
        """Re-fetch the submitted periods for the date, then recompute."""
        reports = self._reports_repo.list_for_date(token=self._actor.token, report_date=self._report_date)
        logger.debug("Fetched %d report(s) for %s on %s", len(reports), self._actor.employee_id, self._report_date)
        return self.set_reports(reports)

    def set_reports(self, reports: Sequence[ExistingReport]) -> SessionSnapshot:
        # The backend already scopes the list to the report date; rows match on time_period only.
        with self._lock:
            self._reports = tuple(reports)
        return self.tick()

    def snapshot(self, now: Optional[datetime] = None) -> SessionSnapshot:
        now = now or self._clock()
        with self._lock:
            reports = self._reports
        states = compute_session_states(self._scheduler, reports, now, factory=self._factory)
        return SessionSnapshot(report_date=self._report_date, computed_at=now, states=states)

    def tick(self) -> SessionSnapshot:
        snap = self.snapshot()
        previous = self._last
        self._last = snap
        if previous is None or previous.states != snap.states:
            for listener in list(self._listeners):
                listener(snap)
        return snap

    def report_for(self, period_label: str) -> Optional[ExistingReport]:
        label = (period_label or "").strip()
        with self._lock:
            for r in self._reports:
                if r.time_period.strip() == label:
                    return r
        return None

    def open_period(self, now: Optional[datetime] = None) -> Optional[Period]:
        """Period a submission is accepted for at `now`, if any.

        The active period wins; otherwise the earliest editable one (already
        submitted at that point).
        """
        now = now or self._clock()
        active = self.snapshot(now).active
        if active is not None:
            return active.period
        editable = self._scheduler.editable_periods(now)
        return editable[0] if editable else None


class SessionTrackerRegistry:
    """One tracker per (actor, report date) for the web process.

    Trackers idle for `idle_seconds` are evicted, and each user keeps at most
    `max_dates_per_user` dates (least recently used goes first).
    """

    def __init__(
        self,
        scheduler: PeriodScheduler,
        reports: HourlyReportRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        factory: Optional[SessionStrategyFactory] = None,
        timer: Callable[[], float] = time.monotonic,
        idle_seconds: float = TRACKER_IDLE_SECONDS,
        max_dates_per_user: int = TRACKER_DATES_PER_USER,
    ):
        self._scheduler = scheduler
        self._reports = reports
        self._clock = clock
        self._factory = factory or SessionStrategyFactory()
        self._timer = timer
        self._idle_seconds = idle_seconds
        self._max_dates = max(1, int(max_dates_per_user))
        self._trackers: dict[tuple[int, str], SessionStateTracker] = {}
        self._touched: dict[tuple[int, str], float] = {}
        self._lock = threading.Lock()

    @property
    def scheduler(self) -> PeriodScheduler:
        return self._scheduler

    def get(self, actor: Actor, report_date: str) -> SessionStateTracker:
        key = (actor.user_id, report_date)
        with self._lock:
            self._evict_idle()
            tracker = self._trackers.get(key)
            if tracker is not None and tracker.actor == actor:
                self._touched[key] = self._timer()
                return tracker

        # First access (or a new login): fetch outside the lock.
        tracker = SessionStateTracker(
            self._scheduler,
            self._reports,
            actor=actor,
            report_date=report_date,
            clock=self._clock,
            factory=self._factory,
        )
        tracker.refresh()
        with self._lock:
            current = self._trackers.get(key)
            if current is not None and current.actor == actor:
                tracker = current
            else:
                self._trackers[key] = tracker
            self._touched[key] = self._timer()
            self._trim_user(actor.user_id)
        return tracker

    def _forget(self, key: tuple[int, str]) -> None:
        self._trackers.pop(key, None)
        self._touched.pop(key, None)

    def _evict_idle(self) -> None:
        cutoff = self._timer() - self._idle_seconds
        stale = [k for k, seen in self._touched.items() if seen < cutoff]
        for k in stale:
            self._forget(k)
        if stale:
            logger.debug("Evicted %d idle session tracker(s)", len(stale))

    def _trim_user(self, user_id: int) -> None:
        keys = sorted((k for k in self._trackers if k[0] == user_id), key=lambda k: self._touched.get(k, 0.0))
        for k in keys[: max(0, len(keys) - self._max_dates)]:
            self._forget(k)

    def drop(self, actor: Actor) -> int:
        with self._lock:
            keys = [k for k in self._trackers if k[0] == actor.user_id]
            for k in keys:
                self._forget(k)
        return len(keys)

    def trackers(self) -> list[SessionStateTracker]:
        with self._lock:
            self._evict_idle()
            return list(self._trackers.values())

    def tick_all(self) -> None:
        for tracker in self.trackers():
            tracker.tick()
