from __future__ import annotations

import importlib
import logging
import os
import sys
import time
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.site_pulse.site_pulse.common.datetime_utils import format_date_for_backend
from src.site_pulse.site_pulse.container import build_container
from src.site_pulse.site_pulse.sessions.model import SessionSnapshot
from src.site_pulse.site_pulse.sessions.ticker import RefreshTicker


def _print_snapshot(snapshot: SessionSnapshot) -> None:
    line = "  ".join(f"{s.period.label}={s.status.value}" for s in snapshot.states.values())
    print(f"[{snapshot.computed_at:%H:%M}] {snapshot.report_date}  {line}")


def main() -> None:
    """Log in as SITE_PULSE_USERNAME and print session status changes until Ctrl+C."""
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    container = build_container(
        api_config={"base_url": settings.API_BASE_URL, "timeout_seconds": settings.API_TIMEOUT_SECONDS},
        grace_minutes=settings.GRACE_MINUTES,
    )
    actor = container.auth_service.authenticate(
        os.getenv("SITE_PULSE_USERNAME", ""),
        os.getenv("SITE_PULSE_PASSWORD", ""),
    )

    raw_date = os.getenv("REPORT_DATE", "")
    report_date = format_date_for_backend(raw_date) if raw_date.strip() else container.clock().date().isoformat()

    tracker = container.trackers.get(actor, report_date)
    tracker.subscribe(_print_snapshot)
    _print_snapshot(tracker.tick())

    with RefreshTicker(container.trackers.tick_all, interval_seconds=settings.REFRESH_INTERVAL_SECONDS):
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            print("OK: stopped")


if __name__ == "__main__":
    main()
