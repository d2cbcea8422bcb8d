"""Recurrence Validator.

Parses the compact repeat rule grammar used by tasks:

    d <N>               every N days, 1 <= N <= 400
    w <list>            on ISO weekdays (1=Monday .. 7=Sunday), e.g. "w 1,3,5"
    m <days> [months]   on days of month, -1 = last day, -2 = second-to-last,
                        optionally limited to months, e.g. "m 1,-1 1,6"
    y                   every year on the start date

An empty rule means the task does not repeat.

A monthly rule whose days can never fall in its months, such as "m 31 2" or
"m 30 2,4", is rejected: no date would ever match it. "m 29 2" is accepted
and lands on leap years.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Union
import re

from scheduler.services.exceptions import (
    InvalidRuleParameterError,
    MissingRuleParameterError,
    UnsupportedRuleKindError,
)

MAX_DAILY_INTERVAL = 400
ALL_MONTHS = frozenset(range(1, 13))

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class DailyRule:
    interval: int

    # Daily and yearly rules stop on-or-after today, the others strictly after now.
    inclusive = True


@dataclass(frozen=True)
class WeeklyRule:
    weekdays: FrozenSet[int]

    inclusive = False


@dataclass(frozen=True)
class MonthlyRule:
    days: FrozenSet[int]
    months: FrozenSet[int] = field(default=ALL_MONTHS)

    inclusive = False


@dataclass(frozen=True)
class YearlyRule:
    inclusive = True


RecurrenceRule = Union[DailyRule, WeeklyRule, MonthlyRule, YearlyRule]


def _parse_int(token: str, what: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise InvalidRuleParameterError(f"Invalid {what}: {token!r}")
    return int(token)


def _parse_int_list(token: str, what: str, allowed: FrozenSet[int]) -> FrozenSet[int]:
    values = set()
    for item in token.split(","):
        value = _parse_int(item, what)
        if value not in allowed:
            raise InvalidRuleParameterError(f"{what.capitalize()} out of range: {value}")
        values.add(value)
    return frozenset(values)


_WEEKDAYS = frozenset(range(1, 8))
_MONTH_DAYS = frozenset(range(1, 32)) | {-1, -2}

# Longest length of each month over any year (February counts its leap day).
_MONTH_LENGTHS = {1: 31, 2: 29, 3: 31, 4: 30, 5: 31, 6: 30, 7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31}


def _day_fits(day: int, month: int) -> bool:
    return day < 0 or day <= _MONTH_LENGTHS[month]


class RecurrenceValidator:
    """Validate and parse task repeat rules."""

    @staticmethod
    def parse(rule_text: str) -> Optional[RecurrenceRule]:
        """
        Parse a repeat rule into its typed form.

        Args:
            rule_text: Repeat rule string, e.g. "d 7" or "m 1,15 1,6"

        Returns:
            The parsed rule, or None for the empty (non-repeating) rule

        Raises:
            UnsupportedRuleKindError: If the first token is not d, w, m or y
            MissingRuleParameterError: If a required parameter is absent
            InvalidRuleParameterError: If a parameter is unparsable or out of range
        """
        parts: List[str] = rule_text.split()
        if not parts:
            return None

        kind = parts[0]
        if kind == "d":
            if len(parts) < 2:
                raise MissingRuleParameterError("Missing day interval for rule 'd'")
            if len(parts) > 2:
                raise InvalidRuleParameterError("Rule 'd' takes exactly one parameter")
            interval = _parse_int(parts[1], "day interval")
            if interval < 1 or interval > MAX_DAILY_INTERVAL:
                raise InvalidRuleParameterError(
                    f"Day interval must be between 1 and {MAX_DAILY_INTERVAL}, got {interval}"
                )
            return DailyRule(interval)

        if kind == "w":
            if len(parts) < 2:
                raise MissingRuleParameterError("Missing weekday list for rule 'w'")
            return WeeklyRule(_parse_int_list(parts[1], "weekday", _WEEKDAYS))

        if kind == "m":
            if len(parts) < 2:
                raise MissingRuleParameterError("Missing day list for rule 'm'")
            days = _parse_int_list(parts[1], "day of month", _MONTH_DAYS)
            months = ALL_MONTHS
            if len(parts) >= 3:
                months = _parse_int_list(parts[2], "month", ALL_MONTHS)
            if not any(_day_fits(day, month) for day in days for month in months):
                raise InvalidRuleParameterError(
                    f"No configured day of month occurs in the configured months: {rule_text!r}"
                )
            return MonthlyRule(days, months)

        if kind == "y":
            if len(parts) != 1:
                raise InvalidRuleParameterError("Rule 'y' takes no parameters")
            return YearlyRule()

        raise UnsupportedRuleKindError(f"Unsupported repeat rule: {kind!r}")

    @staticmethod
    def validate(rule_text: str) -> None:
        """Raise if the repeat rule is malformed; the empty rule is valid."""
        RecurrenceValidator.parse(rule_text)
