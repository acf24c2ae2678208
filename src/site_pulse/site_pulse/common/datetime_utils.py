from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_date_for_backend(value: Union[date, datetime, str, None]) -> str:
    """Normalize a report date to the YYYY-MM-DD form the backend expects.

    Accepts date/datetime objects, "YYYY-MM-DD" strings and ISO datetime strings.
    Blank or unparsable input is an error; it never falls back to today.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = (value or "").strip()
    if not text:
        raise ValidationError("Report Date is required")

    try:
        return parse_iso_date(text).isoformat()
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        raise ValidationError(f"Report Date is invalid: {text!r}")


def parse_backend_date(value: Union[date, datetime, str, None]) -> str:
    """Calendar date of a DATE column as the backend serialised it.

    The backend may send "2024-06-01" or a UTC timestamp of local midnight
    ("2024-05-31T18:30:00.000Z"); timestamps with an offset are shifted into
    local time before the date is taken.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value.isoformat()
    else:
        text = str(value).strip()
        if not text:
            return ""
        try:
            return parse_iso_date(text).isoformat()
        except ValueError:
            pass
        try:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text[:10]

    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date().isoformat()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
