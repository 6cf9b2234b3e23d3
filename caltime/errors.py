"""Caltime exception hierarchy.

All Caltime-specific exceptions inherit from CaltimeError.
"""

from __future__ import annotations


class CaltimeError(Exception):
    """Base exception for all Caltime errors."""

    pass


class ValidationError(CaltimeError):
    """Invalid input values.

    Raised when an argument has the wrong type. Out-of-range integers are
    not validation errors: they are normalized by the calendar.

    Examples:
        - A float passed as the month
        - A string passed as a delta to DateTime.plus()
    """

    pass


class InvalidCalendarFields(CaltimeError):
    """The calendar system cannot produce an instant from the given fields.

    This is distinct from ordinary overflow (month 13, day 32), which is
    always resolvable.

    Examples:
        - An unregistered calendar identifier
        - Fields that normalize to a year outside the supported range
    """

    pass


class AmbiguousOrMissingLocalTime(CaltimeError):
    """A civil time falls in a DST gap or overlap.

    Only raised when the calendar's disambiguation policy is "raise".
    Under every other policy the calendar picks an instant itself.
    """

    pass


class TimezoneError(CaltimeError):
    """Invalid or unknown timezone.

    Examples:
        - Unknown IANA zone name
        - Invalid UTC offset format
        - Offset outside valid range (-14h to +14h)
    """

    pass


__all__ = [
    "CaltimeError",
    "ValidationError",
    "InvalidCalendarFields",
    "AmbiguousOrMissingLocalTime",
    "TimezoneError",
]
