from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def missing_fields(fields: Iterable[tuple[str, Optional[str]]]) -> list[str]:
    """Collect a complaint for every (label, value) pair whose value is blank."""
    return [f"{label} is required" for label, value in fields if not (value or "").strip()]


def raise_if_errors(errors: list[str]) -> None:
    if errors:
        raise ValidationError(errors)
