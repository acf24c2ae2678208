from __future__ import annotations

from typing import Sequence

from ..backend.connection import ApiConnection
from ..backend.http_base import send
from ..core.exceptions import NetworkError
from .model import ExistingReport
from .repository import HourlyReportRepository


class HttpHourlyReportRepository(HourlyReportRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_for_date(self, *, token: str, report_date: str) -> Sequence[ExistingReport]:
        rows = send(self._conn, "GET", f"/hourly-report/{report_date}", token=token) or []
        if not isinstance(rows, list):
            raise NetworkError("Unexpected hourly report list from backend")
        return [ExistingReport.from_api(r) for r in rows]

    def create(self, *, token: str, payload: dict) -> int:
        data = send(self._conn, "POST", "/hourly-report", token=token, json=payload) or {}
        return int(data.get("id") or 0)

    def update(self, *, token: str, report_id: int, payload: dict) -> bool:
        send(self._conn, "PUT", f"/hourly-report/{int(report_id)}", token=token, json=payload)
        return True
