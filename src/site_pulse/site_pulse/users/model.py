from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Actor:
    """The logged-in employee plus the bearer credential issued by the backend.

    Note: This is what we store into the Flask session after login.
    """

    token: str
    user_id: int
    employee_id: str
    name: str
    role: str = ""

    SESSION_KEYS = ("token", "user_id", "employee_id", "name", "role")

    @classmethod
    def from_login(cls, token: str, user: Mapping[str, Any]) -> "Actor":
        return cls(
            token=token,
            user_id=int(user.get("id") or 0),
            employee_id=str(user.get("employeeId") or user.get("id") or ""),
            name=str(user.get("name") or user.get("username") or ""),
            role=str(user.get("role") or ""),
        )

    @classmethod
    def from_session(cls, data: Mapping[str, Any]) -> Optional["Actor"]:
        token = data.get("token")
        if not token:
            return None
        return cls(
            token=str(token),
            user_id=int(data.get("user_id") or 0),
            employee_id=str(data.get("employee_id") or ""),
            name=str(data.get("name") or ""),
            role=str(data.get("role") or ""),
        )

    def to_session(self) -> dict:
        return {key: getattr(self, key) for key in self.SESSION_KEYS}
