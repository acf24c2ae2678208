from src.site_pulse.site_pulse.hourly_reports.model import ExistingReport
from src.site_pulse.site_pulse.periods.model import PeriodWindow
from src.site_pulse.site_pulse.sessions.factory import SessionStrategyFactory
from src.site_pulse.site_pulse.sessions.strategies.active_strategy import ActiveStrategy
from src.site_pulse.site_pulse.sessions.strategies.missed_strategy import MissedStrategy
from src.site_pulse.site_pulse.sessions.strategies.pending_strategy import PendingStrategy
from src.site_pulse.site_pulse.sessions.strategies.submitted_strategy import SubmittedStrategy


OPEN = PeriodWindow(is_open=True, is_future=False, is_grace=True)
FUTURE = PeriodWindow(is_open=False, is_future=True, is_grace=False)
CLOSED = PeriodWindow(is_open=False, is_future=False, is_grace=False)


def test_report_wins_over_window():
    report = ExistingReport(report_id=1, report_date="2024-06-01", time_period="9am-12pm")

    strategy = SessionStrategyFactory().for_period(window=OPEN, report=report)

    assert isinstance(strategy, SubmittedStrategy)


def test_open_window_without_report_is_active():
    assert isinstance(SessionStrategyFactory().for_period(window=OPEN, report=None), ActiveStrategy)


def test_second_editable_period_waits():
    strategy = SessionStrategyFactory().for_period(window=OPEN, report=None, active_taken=True)

    assert isinstance(strategy, PendingStrategy)


def test_future_and_closed_windows():
    factory = SessionStrategyFactory()

    assert isinstance(factory.for_period(window=FUTURE, report=None), PendingStrategy)
    assert isinstance(factory.for_period(window=CLOSED, report=None), MissedStrategy)
