from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_backend_date


# (attribute, camelCase key, snake_case column)
_FIELDS = (
    ("report_date", "reportDate", "report_date"),
    ("project_no", "projectNo", "project_no"),
    ("daily_target_planned", "dailyTargetPlanned", "daily_target_planned"),
    ("daily_target_achieved", "dailyTargetAchieved", "daily_target_achieved"),
    ("additional_activity", "additionalActivity", "additional_activity"),
    ("problem_faced", "problemFaced", "problem_faced"),
    ("customer_name", "customerName", "customer_name"),
    ("incharge", "incharge", "incharge"),
    ("site_location", "siteLocation", "site_location"),
    ("site_start_date", "siteStartDate", "site_start_date"),
    ("site_end_date", "siteEndDate", "site_end_date"),
    ("location_type", "locationType", "location_type"),
)

# Filled once by the first submission of the day, never overwritten afterwards.
HEADER_FIELDS = (
    "daily_target_planned",
    "customer_name",
    "incharge",
    "site_location",
    "site_start_date",
    "site_end_date",
    "location_type",
)


@dataclass(frozen=True)
class DailyAggregateRecord:
    """Per-day, per-project record that accumulates every period's narrative."""

    record_id: Optional[int] = None
    report_date: str = ""
    project_no: str = ""
    daily_target_planned: str = ""
    daily_target_achieved: str = ""
    additional_activity: str = ""
    problem_faced: str = ""
    customer_name: str = ""
    incharge: str = ""
    site_location: str = ""
    site_start_date: str = ""
    site_end_date: str = ""
    location_type: str = ""

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "DailyAggregateRecord":
        values: dict[str, Any] = {}
        for attr, camel, snake in _FIELDS:
            value = row.get(camel)
            if value is None:
                value = row.get(snake)
            values[attr] = "" if value is None else str(value)
        values["report_date"] = parse_backend_date(values["report_date"])
        raw_id = row.get("id")
        return cls(record_id=int(raw_id) if raw_id is not None else None, **values)

    def to_payload(self) -> dict:
        return {camel: getattr(self, attr) for attr, camel, _ in _FIELDS}
