"""Calendar field record.

CalendarComponents is the source-of-truth representation held by a
DateTime: the calendar fields plus the calendar system and timezone they
are interpreted under. The record itself does no normalization; fields may
be out of range until a calendar resolves them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from caltime.calendars.base import Calendar
    from caltime.units.timezone import Timezone


@dataclass(frozen=True)
class CalendarComponents:
    """Year through nanosecond, with the calendar and timezone.

    Attributes:
        year: The year (astronomical numbering, can be 0 or negative).
        month: The month, 1-12 once normalized.
        day: The day of the month, 1-31 once normalized.
        hour: The hour, 0-23 once normalized.
        minute: The minute, 0-59 once normalized.
        second: The second, 0-59 once normalized.
        nanosecond: Nanoseconds within the second, [0, 10**9) once normalized.
        calendar: The calendar system the fields belong to.
        timezone: The timezone the fields are local to.
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    nanosecond: int
    calendar: Calendar
    timezone: Timezone

    def shifted(
        self,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        nanoseconds: int = 0,
    ) -> CalendarComponents:
        """Return a copy with each delta added to the raw field.

        The result is not normalized: shifting January 31 by one month
        yields month 2, day 31.
        """
        return replace(
            self,
            year=self.year + years,
            month=self.month + months,
            day=self.day + days,
            hour=self.hour + hours,
            minute=self.minute + minutes,
            second=self.second + seconds,
            nanosecond=self.nanosecond + nanoseconds,
        )

    def with_time_of_day_zeroed(self) -> CalendarComponents:
        return replace(self, hour=0, minute=0, second=0, nanosecond=0)

    @property
    def fields(self) -> tuple[int, int, int, int, int, int, int]:
        """The seven calendar fields as a tuple, year first."""
        return (
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.nanosecond,
        )


__all__ = ["CalendarComponents"]
