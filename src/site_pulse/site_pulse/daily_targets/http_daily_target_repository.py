from __future__ import annotations

from typing import Optional

from ..backend.connection import ApiConnection
from ..backend.http_base import send
from ..core.exceptions import NetworkError
from .model import DailyAggregateRecord
from .repository import DailyTargetRepository


class HttpDailyTargetRepository(DailyTargetRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def find_id(self, *, token: str, report_date: str, project_no: str) -> Optional[int]:
        data = send(
            self._conn,
            "GET",
            "/daily-target/check-report-date",
            token=token,
            params={"date": report_date, "projectNo": project_no},
        ) or {}
        if not isinstance(data, dict):
            raise NetworkError("Unexpected daily target lookup response from backend")
        if not data.get("exists") or data.get("id") is None:
            return None
        return int(data["id"])

    def get(self, *, token: str, record_id: int) -> Optional[DailyAggregateRecord]:
        data = send(self._conn, "GET", f"/daily-target/{int(record_id)}", token=token)
        if not data:
            return None
        if not isinstance(data, dict):
            raise NetworkError("Unexpected daily target response from backend")
        # Some deployments wrap the row as {"report": {...}}.
        if isinstance(data.get("report"), dict):
            data = data["report"]
        return DailyAggregateRecord.from_api(data)

    def create(self, *, token: str, payload: dict) -> int:
        data = send(self._conn, "POST", "/daily-target", token=token, json=payload) or {}
        if not isinstance(data, dict):
            raise NetworkError("Unexpected daily target response from backend")
        return int(data.get("id") or 0)

    def update(self, *, token: str, record_id: int, payload: dict) -> bool:
        send(self._conn, "PUT", f"/daily-target/{int(record_id)}", token=token, json=payload)
        return True
