from __future__ import annotations

from typing import Protocol, Sequence

from .model import ExistingReport


class HourlyReportRepository(Protocol):
    def list_for_date(self, *, token: str, report_date: str) -> Sequence[ExistingReport]:
        raise NotImplementedError

    def create(self, *, token: str, payload: dict) -> int:
        raise NotImplementedError

    def update(self, *, token: str, report_id: int, payload: dict) -> bool:
        """Full-field overwrite of an existing report."""

        raise NotImplementedError
