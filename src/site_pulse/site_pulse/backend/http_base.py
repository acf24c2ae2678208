from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.exceptions import AuthenticationError, DuplicateSubmissionError, NetworkError
from .connection import ApiConnection

logger = logging.getLogger(__name__)


def server_message(response: requests.Response) -> str:
    """Best-effort extraction of the backend's own error text."""
    fallback = f"{response.status_code} {response.reason or ''}".strip()
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or fallback

    if not isinstance(data, dict):
        return fallback

    message = data.get("message") or data.get("error") or fallback
    if isinstance(message, dict):
        message = message.get("message") or fallback
    if data.get("sqlMessage"):
        return f"{message} ({data['sqlMessage']})"
    return str(message)


def send(
    conn: ApiConnection,
    method: str,
    path: str,
    *,
    token: Optional[str],
    params: Optional[dict] = None,
    json: Any = None,
    anonymous: bool = False,
) -> Any:
    """Issue one request and return the decoded JSON body (or None).

    No retries: failures surface immediately to the caller.
    """
    headers = {"Content-Type": "application/json"}
    if not anonymous:
        if not token:
            raise AuthenticationError("Authentication required. Please login again.")
        headers["Authorization"] = f"Bearer {token}"

    url = conn.url(path)
    try:
        response = conn.session.request(method, url, headers=headers, params=params, json=json, timeout=conn.timeout)
    except requests.Timeout:
        logger.warning("%s %s timed out", method, url)
        raise NetworkError(f"Request timed out after {conn.timeout:g}s - server might be down or slow")
    except requests.ConnectionError:
        logger.warning("%s %s: backend unreachable", method, url)
        raise NetworkError("Backend is unreachable. Please check your connection and try again.")
    except requests.RequestException as e:
        logger.warning("%s %s failed: %s", method, url, e)
        raise NetworkError(str(e))

    if response.status_code >= 400:
        message = server_message(response)
        logger.info("%s %s -> %s: %s", method, url, response.status_code, message)
        if response.status_code == 401:
            raise AuthenticationError(message)
        if response.status_code == 409:
            raise DuplicateSubmissionError(message)
        raise NetworkError(message, status_code=response.status_code)

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        raise NetworkError(f"Unexpected response from {url}", status_code=response.status_code)
