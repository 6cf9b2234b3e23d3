"""Caltime: calendar-aware date-time values with nanosecond precision.

A DateTime holds calendar fields (year through nanosecond) together with
the absolute instant they denote under a calendar system and timezone.
Field overflow is normalized rather than rejected, DST gaps and overlaps
are resolved by the calendar, and equality is by instant.

Core Types:
    DateTime: Immutable calendar date-time
    MutableDateTime: DateTime with in-place field arithmetic
    Duration: Elapsed time span with nanosecond precision
    Instant: Absolute moment, nanoseconds since the Unix epoch
    CalendarComponents: Calendar fields with calendar and timezone

Calendars and Units:
    Calendar: Calendar system interface
    GregorianCalendar: Proleptic Gregorian calendar ("gregorian")
    Timezone: Fixed UTC offset or IANA zone rules
    TimeUnit: Standard time units (YEAR, MONTH, DAY, etc.)

Configuration:
    configure: Install the default calendar and timezone
    get_defaults: Return the installed defaults
    reset: Forget the installed defaults

Exceptions:
    CaltimeError: Base exception
    ValidationError: Argument of the wrong type
    InvalidCalendarFields: Fields the calendar cannot resolve
    AmbiguousOrMissingLocalTime: Wall time in a DST gap or overlap
    TimezoneError: Invalid timezone

Example:
    >>> from caltime import DateTime, Duration
    >>> dt = DateTime(2024, 1, 31, timezone="UTC")
    >>> dt.plus(months=1)
    DateTime(2024, 3, 2, 0, 0, 0, nanosecond=0, timezone=UTC)
    >>> (dt + Duration.from_hours(36)).day
    1
"""

from __future__ import annotations

__version__ = "0.1.0"

# Exceptions
from caltime.errors import (
    AmbiguousOrMissingLocalTime,
    CaltimeError,
    InvalidCalendarFields,
    TimezoneError,
    ValidationError,
)

# Core types
from caltime.core.instant import Instant
from caltime.core.components import CalendarComponents
from caltime.core.duration import Duration
from caltime.core.datetime import DateTime, MutableDateTime

# Calendars and units
from caltime.calendars import (
    Calendar,
    GregorianCalendar,
    calendar_for,
    register_calendar,
)
from caltime.units.timezone import Timezone
from caltime.units.timeunit import TimeUnit
from caltime._internal.calendar import is_leap_year

# Configuration
from caltime.config import CaltimeSettings, configure, get_defaults, reset

__all__: list[str] = [
    "__version__",
    # Core types
    "CalendarComponents",
    "DateTime",
    "Duration",
    "Instant",
    "MutableDateTime",
    # Calendars and units
    "Calendar",
    "GregorianCalendar",
    "TimeUnit",
    "Timezone",
    "calendar_for",
    "is_leap_year",
    "register_calendar",
    # Configuration
    "CaltimeSettings",
    "configure",
    "get_defaults",
    "reset",
    # Exceptions
    "CaltimeError",
    "ValidationError",
    "InvalidCalendarFields",
    "AmbiguousOrMissingLocalTime",
    "TimezoneError",
]
