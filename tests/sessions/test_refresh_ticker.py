import threading
import time

import pytest

from src.site_pulse.site_pulse.sessions.ticker import RefreshTicker


def test_ticks_until_stopped():
    calls = []
    done = threading.Event()

    def tick():
        calls.append(1)
        if len(calls) >= 3:
            done.set()

    ticker = RefreshTicker(tick, interval_seconds=0.01)
    with ticker:
        assert ticker.running
        assert done.wait(2)

    assert not ticker.running
    count = len(calls)
    time.sleep(0.05)
    assert len(calls) == count


def test_failing_tick_does_not_stop_the_loop():
    calls = []
    done = threading.Event()

    def tick():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("backend hiccup")
        done.set()

    with RefreshTicker(tick, interval_seconds=0.01):
        assert done.wait(2)

    assert len(calls) >= 2


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        RefreshTicker(lambda: None, interval_seconds=0)
