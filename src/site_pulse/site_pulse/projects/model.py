from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

_PLACEHOLDERS = {"Not specified", "Not assigned"}


def _pick(row: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = row.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text and text not in _PLACEHOLDERS:
            return text
    return ""


@dataclass(frozen=True)
class AssignedProject:
    project_id: Optional[int]
    project_no: str
    name: str
    customer_name: str = ""
    incharge: str = ""
    site_location: str = ""
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "AssignedProject":
        raw_id = row.get("id")
        name = _pick(row, "project_name", "projectName", "name")
        return cls(
            project_id=int(raw_id) if raw_id is not None else None,
            project_no=_pick(row, "project_no", "projectNo") or name,
            name=name,
            customer_name=_pick(row, "customer_name", "customerName", "customer"),
            incharge=_pick(row, "incharge", "project_incharge", "projectIncharge"),
            site_location=_pick(row, "site_location", "siteLocation", "location"),
            start_date=_pick(row, "start_date", "startDate", "site_start_date")[:10],
            end_date=_pick(row, "end_date", "endDate", "site_end_date")[:10],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.project_id,
            "projectNo": self.project_no,
            "name": self.name,
            "customerName": self.customer_name,
            "incharge": self.incharge,
            "siteLocation": self.site_location,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }
