"""Next-date calculation for repeating tasks."""
from datetime import date, datetime, time, timedelta
import calendar

from scheduler.services.exceptions import EmptyRuleError, InvalidStartDateError
from scheduler.services.recurrence_validator import (
    DailyRule,
    MonthlyRule,
    RecurrenceRule,
    RecurrenceValidator,
    WeeklyRule,
    YearlyRule,
)

# Canonical date format used by the API and the database (YYYYMMDD).
DATE_FORMAT = "%Y%m%d"

_ONE_DAY = timedelta(days=1)


def parse_date(value: str) -> date:
    """Parse a YYYYMMDD string; raises ValueError on anything else."""
    if len(value) != 8 or not value.isdigit():
        raise ValueError(f"date {value!r} does not match YYYYMMDD")
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time())


def _add_year(value: date) -> date:
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        # Feb 29 overflows into the following March.
        return date(value.year + 1, 3, 1)


def _matches_month_day(candidate: date, rule: MonthlyRule) -> bool:
    if candidate.day in rule.days:
        return True
    last_day = calendar.monthrange(candidate.year, candidate.month)[1]
    if -1 in rule.days and candidate.day == last_day:
        return True
    if -2 in rule.days and candidate.day == last_day - 1:
        return True
    return False


def _advance(now: datetime, start: date, rule: RecurrenceRule) -> date:
    today = now.date()
    current = start

    if isinstance(rule, DailyRule):
        step = timedelta(days=rule.interval)
        while current < today:
            current += step
        return current

    if isinstance(rule, YearlyRule):
        while current < today:
            current = _add_year(current)
        return current

    if isinstance(rule, WeeklyRule):
        while True:
            current += _ONE_DAY
            if current.isoweekday() in rule.weekdays and datetime.combine(current, time()) > now:
                return current

    # MonthlyRule
    while True:
        current += _ONE_DAY
        if current.month not in rule.months:
            continue
        if _matches_month_day(current, rule) and datetime.combine(current, time()) > now:
            return current


def next_date(now: datetime, start_date: str, rule_text: str) -> str:
    """
    Calculate the next occurrence of a repeating task.

    Daily and yearly rules advance from the start date (zero or more steps)
    until they reach now's calendar day or later, so a start date of today is
    returned unchanged. Weekly and monthly rules step forward one day at a time
    and return the first matching date strictly after now.

    Args:
        now: Reference moment, usually datetime.now()
        start_date: Start date in YYYYMMDD format
        rule_text: Repeat rule, e.g. "d 1", "w 1,3,5", "m 1,15 1,6", "y"

    Returns:
        The next date in YYYYMMDD format

    Raises:
        EmptyRuleError: If rule_text is empty
        InvalidStartDateError: If start_date is not a YYYYMMDD date, or no
            occurrence after it fits before the end of year 9999
        RecurrenceError: Any parse error raised by RecurrenceValidator.parse
    """
    if not rule_text:
        raise EmptyRuleError("Repeat rule must not be empty")

    try:
        start = parse_date(start_date)
    except ValueError as e:
        raise InvalidStartDateError(f"Invalid start date: {e}")

    rule = RecurrenceValidator.parse(rule_text)
    if rule is None:
        raise EmptyRuleError("Repeat rule must not be empty")

    try:
        return format_date(_advance(now, start, rule))
    except (OverflowError, ValueError):
        # Stepping ran past year 9999.
        raise InvalidStartDateError(f"No occurrence of {rule_text!r} after {start_date} fits the calendar")


def following_date(now: datetime, start_date: str, rule_text: str) -> str:
    """
    Date a repeating task moves to once its current occurrence is done.

    The result is strictly after start_date and never before today. Daily and
    yearly rules accept today as a match, so the reference moment is moved to
    the day after start_date for them.
    """
    rule = RecurrenceValidator.parse(rule_text) if rule_text else None
    if rule is not None and rule.inclusive:
        try:
            floor = datetime.combine(parse_date(start_date) + _ONE_DAY, time())
        except (OverflowError, ValueError) as e:
            raise InvalidStartDateError(f"Invalid start date: {e}")
        now = max(now, floor)
    return next_date(now, start_date, rule_text)
