from __future__ import annotations

from typing import Optional, Protocol

from .model import DailyAggregateRecord


class DailyTargetRepository(Protocol):
    def find_id(self, *, token: str, report_date: str, project_no: str) -> Optional[int]:
        raise NotImplementedError

    def get(self, *, token: str, record_id: int) -> Optional[DailyAggregateRecord]:
        raise NotImplementedError

    def create(self, *, token: str, payload: dict) -> int:
        raise NotImplementedError

    def update(self, *, token: str, record_id: int, payload: dict) -> bool:
        raise NotImplementedError
