from datetime import date, datetime, timedelta
import calendar

import pytest

from scheduler.services.exceptions import (
    EmptyRuleError,
    InvalidRuleParameterError,
    InvalidStartDateError,
    MissingRuleParameterError,
    UnsupportedRuleKindError,
)
from scheduler.services.next_date import following_date, format_date, next_date, parse_date

# Monday
NOW = datetime(2025, 3, 10)


@pytest.mark.parametrize(
    "now, start, rule, expected",
    [
        (NOW, "20250301", "d 7", "20250315"),
        (NOW, "20250310", "d 1", "20250310"),
        (datetime(2025, 3, 10, 23, 59), "20250310", "d 1", "20250310"),
        (NOW, "20250320", "d 7", "20250320"),
        (NOW, "20240101", "d 400", "20260311"),
        (NOW, "20200115", "y", "20260115"),
        (NOW, "20250310", "y", "20250310"),
        (datetime(2024, 3, 1), "20240229", "y", "20250301"),
    ],
)
def test_daily_and_yearly_stop_on_or_after_today(now, start, rule, expected):
    assert next_date(now, start, rule) == expected


@pytest.mark.parametrize(
    "now, start, rule, expected",
    [
        (NOW, "20250310", "w 1", "20250317"),
        (NOW, "20250310", "w 3", "20250312"),
        (NOW, "20250310", "w 7", "20250316"),
        (NOW, "20250101", "w 1,5", "20250314"),
        (datetime(2025, 3, 9, 23, 0), "20250301", "w 1", "20250310"),
        (NOW, "20250401", "w 2", "20250408"),
    ],
)
def test_weekly_is_strictly_after_now(now, start, rule, expected):
    assert next_date(now, start, rule) == expected


@pytest.mark.parametrize(
    "now, start, rule, expected",
    [
        (datetime(2024, 2, 1), "20240201", "m -1", "20240229"),
        (datetime(2025, 2, 1), "20250201", "m -1", "20250228"),
        (datetime(2025, 2, 1), "20250201", "m -2", "20250227"),
        (NOW, "20250301", "m 1,15", "20250315"),
        (datetime(2025, 4, 1), "20250401", "m 31", "20250531"),
        (NOW, "20250310", "m 1 6,12", "20250601"),
        (datetime(2025, 1, 1), "20250101", "m 29 2", "20280229"),
        (NOW, "20250310", "m 10", "20250410"),
    ],
)
def test_monthly(now, start, rule, expected):
    assert next_date(now, start, rule) == expected


@pytest.mark.parametrize(
    "start, rule, error",
    [
        ("bad-date", "d 1", InvalidStartDateError),
        ("2025-01-01", "d 1", InvalidStartDateError),
        ("20251301", "d 1", InvalidStartDateError),
        ("20250101", "", EmptyRuleError),
        ("20250101", "   ", EmptyRuleError),
        ("20250101", "d 500", InvalidRuleParameterError),
        ("20250101", "d", MissingRuleParameterError),
        ("20250101", "w 0", InvalidRuleParameterError),
        ("20250101", "m 1 13", InvalidRuleParameterError),
        ("20250101", "x 1", UnsupportedRuleKindError),
        ("99991231", "w 1", InvalidStartDateError),
        ("99991231", "m 1", InvalidStartDateError),
        ("99991231", "m -1", InvalidStartDateError),
    ],
)
def test_errors(start, rule, error):
    with pytest.raises(error):
        next_date(NOW, start, rule)


def test_start_date_checked_before_rule():
    with pytest.raises(InvalidStartDateError):
        next_date(NOW, "nope", "x 1")


def test_daily_returns_smallest_reachable_date():
    now = datetime(2025, 6, 15, 12, 30)
    for interval in (1, 2, 5, 30, 400):
        for offset in (-800, -31, -1, 0, 1, 45):
            start = now.date() + timedelta(days=offset)
            result = parse_date(next_date(now, format_date(start), f"d {interval}"))
            steps = (result - start).days
            assert steps % interval == 0
            assert result >= start
            assert result >= now.date()
            assert result == start or result - timedelta(days=interval) < now.date()


def test_weekly_results_match_weekday_set():
    now = datetime(2025, 6, 15, 8, 0)
    for weekdays in ({1}, {2, 4}, {6, 7}, {1, 2, 3, 4, 5, 6, 7}):
        rule = "w " + ",".join(str(day) for day in sorted(weekdays))
        for offset in range(-10, 10):
            start = now.date() + timedelta(days=offset)
            result = parse_date(next_date(now, format_date(start), rule))
            assert result.isoweekday() in weekdays
            assert datetime.combine(result, datetime.min.time()) > now
            assert result > start


def test_monthly_results_match_day_and_month_sets():
    now = datetime(2025, 1, 20)
    for rule, days, months in (
        ("m -1", {-1}, set(range(1, 13))),
        ("m -2,5 3,11", {-2, 5}, {3, 11}),
        ("m 30 1,2,3", {30}, {1, 2, 3}),
    ):
        start = "20250101"
        for _ in range(6):
            result = parse_date(next_date(now, start, rule))
            last_day = calendar.monthrange(result.year, result.month)[1]
            assert result.month in months
            assert (
                result.day in days
                or (-1 in days and result.day == last_day)
                or (-2 in days and result.day == last_day - 1)
            )
            assert result > now.date()
            start = format_date(result)


def test_inclusive_versus_strict_boundary():
    today = "20250310"
    assert next_date(NOW, today, "d 1") == today
    assert next_date(NOW, today, "y") == today
    assert next_date(NOW, today, "w 1") == "20250317"
    assert next_date(NOW, today, "m 10") == "20250410"


class TestFollowingDate:
    def test_daily_moves_past_current_date(self):
        assert following_date(NOW, "20250310", "d 1") == "20250311"
        assert following_date(NOW, "20250320", "d 3") == "20250323"

    def test_daily_overdue_catches_up_to_today(self):
        assert following_date(NOW, "20250301", "d 7") == "20250315"
        assert following_date(NOW, "20250309", "d 1") == "20250310"

    def test_yearly_moves_one_year(self):
        assert following_date(NOW, "20250310", "y") == "20260310"

    def test_weekly_and_monthly_unchanged(self):
        assert following_date(NOW, "20250310", "w 1") == "20250317"
        assert following_date(NOW, "20250320", "w 5") == "20250321"
        assert following_date(NOW, "20250310", "m 10") == "20250410"

    def test_errors(self):
        with pytest.raises(EmptyRuleError):
            following_date(NOW, "20250310", "")
        with pytest.raises(InvalidStartDateError):
            following_date(NOW, "garbage", "d 1")
        with pytest.raises(InvalidStartDateError):
            following_date(NOW, "99991231", "d 1")
        with pytest.raises(InvalidStartDateError):
            following_date(NOW, "99991231", "y")


def test_format_and_parse_dates():
    assert parse_date("20240229") == date(2024, 2, 29)
    assert format_date(date(2025, 1, 5)) == "20250105"
    with pytest.raises(ValueError):
        parse_date("2025015")
