from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError
from .model import Actor
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login) against the backend."""

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def authenticate(self, username: str, password: str) -> Actor:
        username = require_non_empty(username, "Username")
        password = require_non_empty(password, "Password")

        data = self._auth.login(username=username, password=password)
        token = data.get("token")
        user = data.get("user")
        if data.get("success") is False or not token or not isinstance(user, dict):
            logger.info("Login rejected for %s", username)
            raise AuthenticationError(str(data.get("message") or "Invalid username or password"))

        actor = Actor.from_login(str(token), user)
        logger.info("Logged in %s (%s)", actor.employee_id, actor.role or "no role")
        return actor
