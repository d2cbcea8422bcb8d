"""Errors raised by the recurrence engine and the task date normalizer."""
from typing import Optional


class RecurrenceError(ValueError):
    """Base exception for recurrence rule and task date errors"""
    code = "RECURRENCE_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class EmptyRuleError(RecurrenceError):
    code = "EMPTY_RULE"


class InvalidStartDateError(RecurrenceError):
    code = "INVALID_START_DATE"


class UnsupportedRuleKindError(RecurrenceError):
    code = "UNSUPPORTED_RULE_KIND"


class InvalidRuleError(RecurrenceError):
    """Rule kind is known but its parameters are malformed."""
    code = "INVALID_RULE"


class MissingRuleParameterError(InvalidRuleError):
    code = "MISSING_RULE_PARAMETER"


class InvalidRuleParameterError(InvalidRuleError):
    code = "INVALID_RULE_PARAMETER"


class InvalidDateError(RecurrenceError):
    code = "INVALID_DATE"


class InvalidRecurrenceError(RecurrenceError):
    code = "INVALID_RECURRENCE"

    def __init__(self, cause: RecurrenceError):
        self.cause = cause
        super().__init__(f"Invalid repeat rule: {cause.message}")
