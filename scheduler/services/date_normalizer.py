"""Task date normalization applied on create and update."""
from datetime import datetime
from typing import Any

from scheduler.services.exceptions import InvalidDateError, InvalidRecurrenceError, RecurrenceError
from scheduler.services.next_date import format_date, next_date, parse_date, start_of_day


def normalize_task_date(task: Any, now: datetime) -> None:
    """
    Validate and normalize task.date in place.

    - An empty date defaults to today.
    - A non-repeating task cannot be scheduled in the past: past dates become today.
    - A repeating task dated today or earlier moves to its next occurrence.

    Args:
        task: Object with string attributes ``date`` and ``repeat``
        now: Reference moment

    Raises:
        InvalidDateError: If task.date is not a YYYYMMDD date
        InvalidRecurrenceError: If the next occurrence cannot be calculated
    """
    if not task.date:
        task.date = format_date(now.date())

    try:
        task_day = datetime.combine(parse_date(task.date), datetime.min.time())
    except ValueError as e:
        raise InvalidDateError(f"Invalid date: {e}")

    today = start_of_day(now)

    if task.repeat:
        try:
            upcoming = next_date(now, task.date, task.repeat)
        except RecurrenceError as e:
            raise InvalidRecurrenceError(e)

        if task_day <= today:
            task.date = upcoming
    elif task_day < today:
        task.date = format_date(now.date())
