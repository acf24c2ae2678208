from __future__ import annotations

from typing import Any, Protocol


class AuthRepository(Protocol):
    def login(self, *, username: str, password: str) -> dict[str, Any]:
        """Return the backend's login body: {"token": ..., "user": {...}}."""

        raise NotImplementedError
