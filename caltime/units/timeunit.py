"""TimeUnit enumeration for calendar units.

This module provides the TimeUnit enum naming the calendar units that a
Calendar can be queried for, from nanoseconds up to years.
"""

from __future__ import annotations

from enum import Enum


class TimeUnit(Enum):
    """Calendar units for component and ordinality queries.

    WEEKDAY is a component only: the day of the week counted from
    Sunday (1=Sunday, 7=Saturday). WEEK is only meaningful as the
    enclosing unit of an ordinality query.

    Examples:
        >>> calendar.component(TimeUnit.WEEKDAY, instant, tz)
        1

        >>> calendar.ordinality(TimeUnit.DAY, TimeUnit.YEAR, instant, tz)
        60
    """

    NANOSECOND = "nanosecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEKDAY = "weekday"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


__all__ = ["TimeUnit"]
