from datetime import date, datetime, timezone

import pytest

from src.site_pulse.site_pulse.common.datetime_utils import format_date_for_backend, parse_backend_date
from src.site_pulse.site_pulse.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value",
    [
        date(2024, 6, 1),
        datetime(2024, 6, 1, 17, 45),
        "2024-06-01",
        " 2024-06-01 ",
        "2024-06-01T09:30:00",
        "2024-06-01T09:30:00.000Z",
    ],
)
def test_accepted_inputs(value):
    assert format_date_for_backend(value) == "2024-06-01"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_is_required_not_today(value):
    with pytest.raises(ValidationError) as exc:
        format_date_for_backend(value)

    assert exc.value.errors == ["Report Date is required"]


@pytest.mark.parametrize("value", ["06/01/2024", "2024-13-01", "tomorrow"])
def test_unparsable_dates_rejected(value):
    with pytest.raises(ValidationError):
        format_date_for_backend(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-06-01", "2024-06-01"),
        (date(2024, 6, 1), "2024-06-01"),
        ("2024-06-01T09:30:00", "2024-06-01"),
        (None, ""),
        ("", ""),
    ],
)
def test_backend_dates(value, expected):
    assert parse_backend_date(value) == expected


def test_backend_utc_timestamp_is_read_in_local_time():
    expected = datetime(2024, 5, 31, 18, 30, tzinfo=timezone.utc).astimezone().date().isoformat()

    assert parse_backend_date("2024-05-31T18:30:00.000Z") == expected
