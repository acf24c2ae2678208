from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateSubmissionError,
    NetworkError,
    NoActiveSessionError,
    ValidationError,
)
from ..users.model import Actor

logger = logging.getLogger(__name__)


def current_actor():
    return Actor.from_session(session)


def json_error(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def error_response(e: Exception):
    """Translate a raised exception into (json, status)."""
    if isinstance(e, ValidationError):
        return json_error(str(e), 400, errors=e.errors)
    if isinstance(e, AuthenticationError):
        return json_error(str(e), 401)
    if isinstance(e, (NoActiveSessionError, AuthorizationError)):
        return json_error(str(e), 403)
    if isinstance(e, DuplicateSubmissionError):
        return json_error(str(e), 409)
    if isinstance(e, NetworkError):
        return json_error(str(e), 502, statusCode=e.status_code)
    logger.exception("Unexpected error")
    return json_error("Unexpected server error", 500)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_actor() is None:
            return json_error("Authentication required. Please login again.", 401)
        return view(*args, **kwargs)

    return wrapper
