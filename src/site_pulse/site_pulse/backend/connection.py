from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS


@dataclass
class ApiConfig:
    base_url: str
    timeout_seconds: float = DEFAULT_API_TIMEOUT_SECONDS


class ApiConnection:
    """Singleton-like HTTP session factory for the reporting backend.

    Note: One requests.Session is shared so keep-alive connections are reused.
    """

    _instance: Optional["ApiConnection"] = None

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @classmethod
    def get_instance(cls, config: ApiConfig) -> "ApiConnection":
        if cls._instance is None:
            cls._instance = ApiConnection(config)
        return cls._instance

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def timeout(self) -> float:
        return float(self._config.timeout_seconds)

    def url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"
