from __future__ import annotations

from typing import Any

from ..core.exceptions import NetworkError


def unwrap_project_rows(payload: Any) -> list[dict]:
    """Return the project rows of an assigned-projects response.

    The backend has answered with {"projects": [...]}, {"assignments": [...]}
    or a bare list depending on the role and version.
    """
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict) and isinstance(payload.get("projects"), list):
        rows = payload["projects"]
    elif isinstance(payload, dict) and isinstance(payload.get("assignments"), list):
        rows = payload["assignments"]
    elif payload is None:
        rows = []
    else:
        raise NetworkError("Unexpected assigned projects response from backend")
    return [r for r in rows if isinstance(r, dict)]
