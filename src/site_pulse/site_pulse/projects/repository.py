from __future__ import annotations

from typing import Protocol, Sequence

from .model import AssignedProject


class ProjectRepository(Protocol):
    def list_assigned(self, *, token: str) -> Sequence[AssignedProject]:
        raise NotImplementedError
