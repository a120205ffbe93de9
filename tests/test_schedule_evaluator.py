"""Tests for schedule activation."""

from datetime import UTC, datetime, time
from zoneinfo import ZoneInfo

from entur_departures.application.services import is_active
from entur_departures.domain.models import Schedule

MON, TUE, WED, THU, FRI, SAT, SUN = range(7)


def _at(year_month_day: tuple[int, int, int], hour: int, minute: int, second: int = 0) -> datetime:
    return datetime(*year_month_day, hour, minute, second)


# 2024-01-15 is a Monday, 2024-01-19 a Friday, 2024-01-20 a Saturday
MONDAY = (2024, 1, 15)
FRIDAY = (2024, 1, 19)
SATURDAY = (2024, 1, 20)


def test_when_no_schedule_then_always_active() -> None:
    """Given no schedule, when evaluating at any time, then the slot is active."""
    assert is_active(None, _at(MONDAY, 3, 0)) is True
    assert is_active(None, _at(SATURDAY, 23, 59, 59)) is True


def test_when_inside_non_wrapping_window_then_active_including_end() -> None:
    """Given 07:00-09:00 on Mondays, when evaluating around the end, then the end is inclusive."""
    schedule = Schedule(start=time(7, 0), end=time(9, 0), days=frozenset({MON}))

    assert is_active(schedule, _at(MONDAY, 8, 59, 59)) is True
    assert is_active(schedule, _at(MONDAY, 9, 0, 0)) is True
    assert is_active(schedule, _at(MONDAY, 9, 0, 1)) is False


def test_when_at_window_start_then_active() -> None:
    """Given 07:00-09:00, when evaluating at 07:00 and just before, then start is inclusive."""
    schedule = Schedule(start=time(7, 0), end=time(9, 0), days=frozenset({MON}))

    assert is_active(schedule, _at(MONDAY, 7, 0, 0)) is True
    assert is_active(schedule, _at(MONDAY, 6, 59, 59)) is False


def test_when_a_fraction_past_the_end_then_inactive() -> None:
    """Given a 09:00 end, when now is half a second past it, then the slot is no longer active."""
    schedule = Schedule(start=time(7, 0), end=time(9, 0), days=frozenset({MON}))

    assert is_active(schedule, datetime(2024, 1, 15, 9, 0, 0, 500_000)) is False
    assert is_active(schedule, datetime(2024, 1, 15, 8, 59, 59, 999_999)) is True


def test_when_weekday_not_in_schedule_then_inactive() -> None:
    """Given a Monday-only window, when evaluating on Tuesday inside the hours, then inactive."""
    schedule = Schedule(start=time(7, 0), end=time(9, 0), days=frozenset({MON}))

    assert is_active(schedule, datetime(2024, 1, 16, 8, 0)) is False


def test_when_wrapping_window_before_midnight_then_active() -> None:
    """Given 22:00-06:00 on Fridays, when evaluating Friday 23:30, then active."""
    schedule = Schedule(start=time(22, 0), end=time(6, 0), days=frozenset({FRI}))

    assert is_active(schedule, _at(FRIDAY, 23, 30)) is True
    assert is_active(schedule, _at(FRIDAY, 21, 59)) is False


def test_when_wrapping_window_after_midnight_then_uses_current_weekday() -> None:
    """Given 22:00-06:00 on Fridays only, when evaluating Saturday 00:00, then inactive."""
    schedule = Schedule(start=time(22, 0), end=time(6, 0), days=frozenset({FRI}))

    assert is_active(schedule, _at(SATURDAY, 0, 0)) is False


def test_when_wrapping_window_includes_next_day_then_active_after_midnight() -> None:
    """Given 22:00-06:00 on Fridays and Saturdays, when evaluating Saturday 05:00, then active."""
    schedule = Schedule(start=time(22, 0), end=time(6, 0), days=frozenset({FRI, SAT}))

    assert is_active(schedule, _at(SATURDAY, 5, 0)) is True
    assert is_active(schedule, _at(SATURDAY, 6, 0, 1)) is False


def test_when_wrapping_window_early_morning_on_listed_day_then_active() -> None:
    """Given 22:00-06:00 on Fridays, when evaluating Friday 05:00, then active."""
    schedule = Schedule(start=time(22, 0), end=time(6, 0), days=frozenset({FRI}))

    assert is_active(schedule, _at(FRIDAY, 5, 0)) is True


def test_when_weekday_set_empty_then_never_active() -> None:
    """Given a schedule without weekdays, when evaluating, then never active and no error."""
    schedule = Schedule(start=time(0, 0), end=time(23, 59), days=frozenset())

    for day in range(15, 22):
        assert is_active(schedule, datetime(2024, 1, day, 12, 0)) is False


def test_when_now_is_timezone_aware_then_local_wall_clock_is_used() -> None:
    """Given an aware local time, when evaluating, then its own wall clock and weekday are used."""
    schedule = Schedule(start=time(7, 0), end=time(9, 0), days=frozenset({MON}))
    utc_instant = datetime(2024, 1, 15, 7, 30, tzinfo=UTC)  # 08:30 in Oslo

    assert is_active(schedule, utc_instant.astimezone(ZoneInfo("Europe/Oslo"))) is True
    assert is_active(schedule, utc_instant.astimezone(ZoneInfo("America/New_York"))) is False
