"""Proleptic Gregorian day arithmetic for Caltime.

This module provides the integer calendar math behind GregorianCalendar:
leap year logic, ordinal day numbers (0001-01-01 is ordinal 1), and the
overflow carrying used to normalize out-of-range fields.

This module is not part of the public API.
"""

from __future__ import annotations

from caltime._internal.constants import (
    DAYS_IN_MONTH,
    MONTHS_PER_YEAR,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)


def is_leap_year(year: int) -> bool:
    """Check if a year is a leap year in the proleptic Gregorian calendar.

    A year is a leap year if:
    - Divisible by 4, AND
    - NOT divisible by 100, unless also divisible by 400

    Args:
        year: The year to check (can be negative for BCE).

    Returns:
        True if the year is a leap year.

    Examples:
        >>> is_leap_year(2000)  # Divisible by 400
        True
        >>> is_leap_year(1900)  # Divisible by 100 but not 400
        False
        >>> is_leap_year(2024)  # Divisible by 4 but not 100
        True
        >>> is_leap_year(2023)  # Not divisible by 4
        False
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a given month.

    Args:
        year: The year (needed for February in leap years).
        month: The month (1-12).

    Returns:
        Number of days in the month.

    Raises:
        ValueError: If month is not in 1-12.
    """
    if month < 1 or month > 12:
        raise ValueError(f"month must be 1-12, got {month}")

    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month]


# Days before each month (cumulative), for non-leap years
# Index 0 is unused, months are 1-indexed
_DAYS_BEFORE_MONTH = (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def days_before_month(year: int, month: int) -> int:
    """Return the number of days in the year before the first of the month."""
    result = _DAYS_BEFORE_MONTH[month]
    if month > 2 and is_leap_year(year):
        result += 1
    return result


def _days_before_year(year: int) -> int:
    # Python's // floors toward negative infinity, so this holds for
    # year 0 and negative years as well.
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def ymd_to_ordinal(year: int, month: int, day: int) -> int:
    """Convert year, month, day to ordinal (days since year 1).

    The ordinal for 0001-01-01 is 1.
    The ordinal for 0000-12-31 (last day of year 0 / 1 BCE) is 0.

    The day is not range checked: day 0 is the last day of the previous
    month and day 32 of a 31-day month is the 1st of the next one.

    Args:
        year: The year (astronomical, can be 0 or negative).
        month: The month (1-12).
        day: The day, any integer.

    Returns:
        The ordinal day number.
    """
    return _days_before_year(year) + days_before_month(year, month) + day


def ordinal_to_ymd(ordinal: int) -> tuple[int, int, int]:
    """Convert ordinal (days since year 1) to year, month, day.

    Works for ordinals on either side of 0001-01-01 by shifting the input
    into the positive range by whole 400-year cycles.

    Args:
        ordinal: The ordinal day number (ordinal 1 = 0001-01-01).

    Returns:
        Tuple of (year, month, day).
    """
    # 400-year cycles: each has 146097 days
    cycles, n = divmod(ordinal - 1, 146097)

    # 100-year cycles within the 400: each has 36524 days (except last which has 36525)
    n100, n = divmod(n, 36524)

    # 4-year cycles within the 100: each has 1461 days
    n4, n = divmod(n, 1461)

    # Years within the 4-year cycle: each has 365 days (except leap year)
    n1, n = divmod(n, 365)

    year = cycles * 400 + n100 * 100 + n4 * 4 + n1 + 1

    # Handle the boundary case at the end of a cycle
    if n1 == 4 or n100 == 4:
        # December 31 of the previous leap year
        return (year - 1, 12, 31)

    month, day = _doy_to_md(year, n + 1)
    return (year, month, day)


def _doy_to_md(year: int, doy: int) -> tuple[int, int]:
    """Convert day-of-year (1-366) to month and day."""
    for month in range(1, 13):
        dim = days_in_month(year, month)
        if doy <= dim:
            return (month, doy)
        doy -= dim

    # Should never reach here for valid doy
    raise ValueError(f"Invalid day of year: {doy} for year {year}")


def ordinal_to_weekday(ordinal: int) -> int:
    """Return the day of the week (1=Sunday, 7=Saturday) of an ordinal day.

    Ordinal 1 (0001-01-01) was a Monday.
    """
    return ordinal % 7 + 1


def carry_fields(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    nanosecond: int,
) -> tuple[int, int, int, int]:
    """Carry overflowed fields into a (year, month, day_ordinal, nanos) form.

    Sub-day fields are folded into whole days plus a time-of-day in
    nanoseconds; the month is folded into the year; the day (plus the
    days carried from the time of day) is counted from the first of the
    normalized month.

    Returns:
        Tuple of (year, month, ordinal, nanos_of_day) where ordinal is the
        ordinal day number of the normalized date and
        0 <= nanos_of_day < 86400 * 10**9.
    """
    carry_seconds, nanos = divmod(nanosecond, NANOS_PER_SECOND)
    total_seconds = (
        hour * SECONDS_PER_HOUR
        + minute * SECONDS_PER_MINUTE
        + second
        + carry_seconds
    )
    carry_days, seconds_of_day = divmod(total_seconds, SECONDS_PER_DAY)

    carry_years, month_index = divmod(month - 1, MONTHS_PER_YEAR)
    year += carry_years
    month = month_index + 1

    ordinal = ymd_to_ordinal(year, month, 1) + (day - 1) + carry_days
    return (year, month, ordinal, seconds_of_day * NANOS_PER_SECOND + nanos)


__all__ = [
    "is_leap_year",
    "days_in_month",
    "days_before_month",
    "ymd_to_ordinal",
    "ordinal_to_ymd",
    "ordinal_to_weekday",
    "carry_fields",
]
