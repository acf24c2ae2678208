from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Derived state of one reporting period at a given instant."""

    PENDING = "pending"
    ACTIVE = "active"
    SUBMITTED = "submitted"
    MISSED = "missed"


class YesNo(str, Enum):
    """Values the backend stores for yes/no form fields."""

    YES = "Yes"
    NO = "No"
