from __future__ import annotations

from typing import Sequence

from ..backend.connection import ApiConnection
from ..backend.http_base import send
from .adapter import unwrap_project_rows
from .model import AssignedProject
from .repository import ProjectRepository


class HttpProjectRepository(ProjectRepository):
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_assigned(self, *, token: str) -> Sequence[AssignedProject]:
        payload = send(self._conn, "GET", "/projects/assigned-projects", token=token)
        return [AssignedProject.from_api(r) for r in unwrap_project_rows(payload)]
