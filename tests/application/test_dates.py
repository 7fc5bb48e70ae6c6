import datetime as dt

import pytest

from booker.application.dates import (
    add_days,
    day_key,
    format_relative_label,
    parse_day,
    start_of_day,
)

REF = dt.date(2024, 3, 10)


# ---------- start_of_day ----------


def test_start_of_day_strips_time():
    assert start_of_day(dt.datetime(2024, 3, 10, 23, 59, 59, 999)) == REF


def test_start_of_day_keeps_dates():
    assert start_of_day(REF) == REF


def test_start_of_day_iso_strings():
    assert start_of_day("2024-03-10") == REF
    assert start_of_day("2024-03-10T08:15:00") == REF


def test_start_of_day_epoch_millis_uses_local_time():
    noon = dt.datetime(2024, 3, 10, 12, 0)
    millis = int(noon.timestamp() * 1000)
    assert start_of_day(millis) == REF


def test_start_of_day_defaults_to_today():
    assert start_of_day() == dt.date.today()


@pytest.mark.parametrize("garbage", ["not a date", "2024-13-45", object(), [], True])
def test_start_of_day_falls_back_to_today(garbage):
    assert start_of_day(garbage) == dt.date.today()


def test_parse_day_is_strict():
    assert parse_day("nope") is None
    assert parse_day(False) is None
    assert parse_day(None) is None


def test_parse_day_aware_datetime_converted_to_local():
    moment = dt.datetime(2024, 3, 10, 12, 0, tzinfo=dt.timezone.utc)
    assert parse_day(moment) == moment.astimezone().date()


# ---------- add_days ----------


@pytest.mark.parametrize(
    "start, n, expected",
    [
        (dt.date(2023, 12, 31), 1, dt.date(2024, 1, 1)),
        (dt.date(2024, 2, 28), 1, dt.date(2024, 2, 29)),
        (dt.date(2024, 3, 1), -1, dt.date(2024, 2, 29)),
        (dt.date(2024, 3, 9), 1, dt.date(2024, 3, 10)),  # US DST start
        (dt.date(2024, 10, 26), 2, dt.date(2024, 10, 28)),  # EU DST end
        (REF, 0, REF),
        (REF, 25, dt.date(2024, 4, 4)),
    ],
)
def test_add_days_by_calendar_day(start, n, expected):
    assert add_days(start, n) == expected


def test_day_key_is_iso():
    assert day_key(REF) == "2024-03-10"


# ---------- format_relative_label ----------


def test_relative_labels():
    assert format_relative_label(REF, REF) == "Today"
    assert format_relative_label(REF + dt.timedelta(days=1), REF) == "Tomorrow"
    assert format_relative_label(REF + dt.timedelta(days=2), REF) == "Day after tomorrow"


def test_other_days_use_weekday_format():
    day = dt.date(2024, 3, 20)
    expected = f"{day:%A}, 20 {day:%b}"
    assert format_relative_label(day, REF) == expected


def test_past_days_are_not_relative():
    yesterday = REF - dt.timedelta(days=1)
    assert format_relative_label(yesterday, REF) not in ("Today", "Tomorrow")


def test_label_accepts_serialized_days():
    assert format_relative_label("2024-03-11", "2024-03-10") == "Tomorrow"


def test_invalid_dates_get_sentinel_label():
    assert format_relative_label("garbage", REF) == "invalid date"
    assert format_relative_label(REF, None) == "invalid date"
