import datetime as dt

from booker.application.clock import SimulatedClock

D = dt.date(2024, 3, 10)


def test_clock_without_offset_is_real_day():
    clock = SimulatedClock(today_provider=lambda: D)
    assert clock.today() == D
    assert clock.is_simulated is False


def test_advance_and_reset():
    clock = SimulatedClock(today_provider=lambda: D)

    clock.advance_day()
    assert clock.advance_day() == dt.date(2024, 3, 12)
    assert clock.offset == 2
    assert clock.is_simulated is True

    assert clock.reset_date() == D
    assert clock.offset == 0


def test_offset_crosses_month_boundary():
    clock = SimulatedClock(offset=22, today_provider=lambda: D)
    assert clock.today() == dt.date(2024, 4, 1)


def test_provider_datetimes_are_normalized():
    clock = SimulatedClock(today_provider=lambda: dt.datetime(2024, 3, 10, 23, 59))
    assert clock.today() == D
