from __future__ import annotations

from typing import Any

from ..backend.connection import ApiConnection
from ..backend.http_base import send
from .repository import AuthRepository


class HttpAuthRepository(AuthRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def login(self, *, username: str, password: str) -> dict[str, Any]:
        data = send(
            self._conn,
            "POST",
            "/auth/login",
            token=None,
            json={"username": username, "password": password},
            anonymous=True,
        )
        return data if isinstance(data, dict) else {}
