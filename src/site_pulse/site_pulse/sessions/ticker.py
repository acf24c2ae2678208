from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..core.constants import DEFAULT_REFRESH_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class RefreshTicker:
    """Periodic task that recomputes session state.

    Runs `tick` once immediately and then every `interval_seconds` on a daemon
    thread until `stop()` is called. A failing tick is logged and the loop goes on.
    """

    def __init__(
        self,
        tick: Callable[[], object],
        *,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        name: str = "session-refresh",
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._tick = tick
        self._interval = float(interval_seconds)
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "RefreshTicker":
        if self.running:
            return self
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.info("Started %s ticker (every %gs)", self._name, self._interval)
        return self

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info("Stopped %s ticker", self._name)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self._tick()
            except Exception:
                logger.exception("%s tick failed", self._name)
            if self._stop.wait(self._interval):
                break

    def __enter__(self) -> "RefreshTicker":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
