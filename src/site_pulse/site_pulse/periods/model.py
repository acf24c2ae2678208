from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Period:
    """A fixed daily reporting window, e.g. 9am-12pm."""

    label: str
    name: str
    start_hour: int
    end_hour: int

    @property
    def key(self) -> str:
        return self.name.lower().replace(" session", "").strip()


@dataclass(frozen=True)
class PeriodWindow:
    """Classification of one instant against one period."""

    is_open: bool
    is_future: bool
    is_grace: bool

    @property
    def is_editable(self) -> bool:
        return self.is_grace
