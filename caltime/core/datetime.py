"""DateTime: calendar fields and an absolute instant kept in step.

This module provides the DateTime class, which represents an instant in
time both as normalized calendar components (year through nanosecond,
plus the calendar and timezone they are read in) and as an absolute
Instant, and the MutableDateTime variant that supports in-place field
arithmetic.

Every change to the components goes through the calendar twice: forward
(fields to instant) and back (instant to fields). The forward pass
resolves overflow and DST rules; the reverse pass produces canonical
fields matching the instant exactly.
"""

from __future__ import annotations

import datetime as _datetime
from typing import TYPE_CHECKING, Union

from caltime._internal.calendar import is_leap_year
from caltime._internal.constants import (
    NANOS_PER_MICROSECOND,
    NANOS_PER_MILLISECOND,
)
from caltime._internal.validation import integer_fields
from caltime.config import resolve_calendar, resolve_timezone
from caltime.core.components import CalendarComponents
from caltime.core.duration import Duration
from caltime.core.instant import Instant
from caltime.errors import ValidationError
from caltime.units.timeunit import TimeUnit
from caltime.units.timezone import Timezone

if TYPE_CHECKING:
    from caltime.calendars.base import Calendar

CalendarLike = Union["Calendar", str, None]
TimezoneLike = Union[Timezone, _datetime.tzinfo, str, None]

_EPOCH = _datetime.datetime(1970, 1, 1, tzinfo=_datetime.timezone.utc)
_ONE_MICROSECOND = _datetime.timedelta(microseconds=1)


def _project(instant: Instant, calendar: Calendar, timezone: Timezone) -> CalendarComponents:
    """Reverse pass: canonical components of an instant."""
    fields = calendar.instant_to_fields(instant, timezone)
    return CalendarComponents(*fields, calendar=calendar, timezone=timezone)


def _normalized(
    components: CalendarComponents, prefer_offset: int | None = None
) -> tuple[CalendarComponents, Instant]:
    """Forward then reverse pass over possibly overflowed components.

    prefer_offset picks between the two instants of a repeated wall time
    before the calendar's disambiguation policy is consulted.
    """
    calendar = components.calendar
    instant = calendar.fields_to_instant(components, prefer_offset=prefer_offset)
    return _project(instant, calendar, components.timezone), instant


class DateTime:
    """An instant with its calendar fields.

    The components are the source of truth; the instant is always the one
    the calendar resolves them to. Field overflow is never an error:
    ``DateTime(2023, 2, 29)`` is March 1, 2023 and ``DateTime(2024, 13, 1)``
    is January 1, 2025.

    Two DateTimes are equal when their instants are equal, whatever their
    calendars, timezones or fields.

    DateTime is immutable. Use mutable() for a MutableDateTime when
    in-place arithmetic is needed.

    Attributes:
        year: The year (can be 0 or negative).
        month: The month (1-12).
        day: The day of the month (1-31).
        hour: The hour (0-23).
        minute: The minute (0-59).
        second: The second (0-59).
        nanosecond: Nanoseconds within the second (0-999999999).
        calendar: The calendar system.
        timezone: The timezone the fields are local to.
        instant: The absolute instant.

    Examples:
        >>> dt = DateTime(2024, 1, 15, 14, 30, 45, timezone="UTC")
        >>> dt.plus(months=1, days=20).month
        3

        >>> DateTime(2023, 2, 29).day
        1

        >>> dt.in_timezone("Asia/Kolkata").hour
        20
    """

    __slots__ = ("_components", "_instant")

    _components: CalendarComponents
    _instant: Instant

    @integer_fields(
        "year", "month", "day", "hour", "minute", "second",
        "millisecond", "microsecond", "nanosecond",
    )
    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        millisecond: int = 0,
        microsecond: int = 0,
        nanosecond: int = 0,
        calendar: CalendarLike = None,
        timezone: TimezoneLike = None,
    ) -> None:
        """Create a DateTime from calendar fields.

        Fields may be out of range or negative; they are normalized by the
        calendar. The sub-second arguments are summed.

        Args:
            year: The year.
            month: The month.
            day: The day of the month.
            hour: The hour.
            minute: The minute.
            second: The second.
            millisecond: Milliseconds, added to nanosecond.
            microsecond: Microseconds, added to nanosecond.
            nanosecond: Nanoseconds.
            calendar: Calendar or identifier; the configured default if None.
            timezone: Timezone or designator; the configured default if None.

        Raises:
            ValidationError: If a field is not an integer.
            InvalidCalendarFields: If the calendar cannot resolve the fields.
            TimezoneError: If the timezone cannot be resolved.

        Examples:
            >>> DateTime(2024, 1, 32, timezone="UTC")
            DateTime(2024, 2, 1, 0, 0, 0, nanosecond=0, timezone=UTC)
        """
        components = CalendarComponents(
            year,
            month,
            day,
            hour,
            minute,
            second,
            millisecond * NANOS_PER_MILLISECOND
            + microsecond * NANOS_PER_MICROSECOND
            + nanosecond,
            calendar=resolve_calendar(calendar),
            timezone=resolve_timezone(timezone),
        )
        self._components, self._instant = _normalized(components)

    @classmethod
    def _from_state(cls, components: CalendarComponents, instant: Instant) -> DateTime:
        """Create a DateTime from already consistent components and instant.

        This is an internal factory method that bypasses normalization.
        """
        instance = object.__new__(cls)
        instance._components = components
        instance._instant = instant
        return instance

    @classmethod
    def _from_components(
        cls, components: CalendarComponents, prefer_offset: int | None = None
    ) -> DateTime:
        return cls._from_state(*_normalized(components, prefer_offset))

    def _rebased(self, components: CalendarComponents) -> DateTime:
        """Normalize shifted fields, keeping this value's offset where it repeats."""
        return DateTime._from_components(components, self.utc_offset)

    @classmethod
    def from_instant(
        cls,
        instant: Instant,
        *,
        calendar: CalendarLike = None,
        timezone: TimezoneLike = None,
    ) -> DateTime:
        """Create a DateTime for an instant, deriving its fields.

        Args:
            instant: The absolute instant.
            calendar: Calendar or identifier; the configured default if None.
            timezone: Timezone or designator; the configured default if None.

        Examples:
            >>> DateTime.from_instant(Instant(0), timezone="UTC")
            DateTime(1970, 1, 1, 0, 0, 0, nanosecond=0, timezone=UTC)
        """
        if not isinstance(instant, Instant):
            raise ValidationError(
                f"instant must be an Instant, got {type(instant).__name__}"
            )
        resolved = resolve_calendar(calendar)
        components = _project(instant, resolved, resolve_timezone(timezone))
        return cls._from_state(components, instant)

    @classmethod
    def from_timestamp(
        cls,
        timestamp: int | float,
        *,
        calendar: CalendarLike = None,
        timezone: TimezoneLike = None,
    ) -> DateTime:
        """Create a DateTime from Unix seconds.

        Examples:
            >>> DateTime.from_timestamp(1705329000, timezone="UTC")
            DateTime(2024, 1, 15, 14, 30, 0, nanosecond=0, timezone=UTC)
        """
        return cls.from_instant(
            Instant.from_timestamp(timestamp), calendar=calendar, timezone=timezone
        )

    @classmethod
    def from_unix_millis(
        cls,
        millis: int,
        *,
        calendar: CalendarLike = None,
        timezone: TimezoneLike = None,
    ) -> DateTime:
        return cls.from_instant(
            Instant(millis * NANOS_PER_MILLISECOND), calendar=calendar, timezone=timezone
        )

    @classmethod
    def from_unix_nanos(
        cls,
        nanos: int,
        *,
        calendar: CalendarLike = None,
        timezone: TimezoneLike = None,
    ) -> DateTime:
        return cls.from_instant(Instant(nanos), calendar=calendar, timezone=timezone)

    @classmethod
    def from_reference_interval(
        cls,
        seconds: int | float,
        *,
        calendar: CalendarLike = None,
        timezone: TimezoneLike = None,
    ) -> DateTime:
        """Create a DateTime from seconds since 2001-01-01T00:00:00Z."""
        return cls.from_instant(
            Instant.from_reference_interval(seconds), calendar=calendar, timezone=timezone
        )

    @classmethod
    def from_datetime(
        cls,
        value: _datetime.datetime,
        *,
        calendar: CalendarLike = None,
    ) -> DateTime:
        """Create a DateTime from a standard library datetime.

        Aware datetimes keep their instant and timezone. Naive datetimes
        are read as wall time in the configured default timezone.

        Examples:
            >>> import datetime
            >>> DateTime.from_datetime(datetime.datetime(2024, 1, 15, tzinfo=datetime.timezone.utc))
            DateTime(2024, 1, 15, 0, 0, 0, nanosecond=0, timezone=UTC)
        """
        if not isinstance(value, _datetime.datetime):
            raise ValidationError(
                f"expected datetime.datetime, got {type(value).__name__}"
            )
        if value.tzinfo is None or value.utcoffset() is None:
            return cls(
                value.year,
                value.month,
                value.day,
                value.hour,
                value.minute,
                value.second,
                microsecond=value.microsecond,
                calendar=calendar,
            )
        micros = (value - _EPOCH) // _ONE_MICROSECOND
        return cls.from_instant(
            Instant(micros * NANOS_PER_MICROSECOND),
            calendar=calendar,
            timezone=Timezone.from_tzinfo(value.tzinfo),
        )

    @classmethod
    def now(cls, timezone: TimezoneLike = None) -> DateTime:
        """Return the current time in the given (or default) timezone."""
        return cls.from_instant(Instant.now(), timezone=timezone)

    @classmethod
    def utc_now(cls) -> DateTime:
        """Return the current time in UTC."""
        return cls.from_instant(Instant.now(), timezone=Timezone.utc())

    @classmethod
    def today(cls, timezone: TimezoneLike = None) -> DateTime:
        """Return midnight of the current day in the given (or default) timezone."""
        return cls.now(timezone).date_only()

    @classmethod
    def utc_today(cls) -> DateTime:
        """Return midnight UTC of the current UTC day."""
        return cls.utc_now().date_only()

    @classmethod
    def of_date(
        cls,
        year: int,
        month: int,
        day: int,
        *,
        calendar: CalendarLike = None,
        timezone: TimezoneLike = None,
    ) -> DateTime:
        """Create a DateTime at midnight of the given date."""
        return cls(year, month, day, calendar=calendar, timezone=timezone)

    # Components

    @property
    def components(self) -> CalendarComponents:
        return self._components

    @property
    def year(self) -> int:
        return self._components.year

    @property
    def month(self) -> int:
        return self._components.month

    @property
    def day(self) -> int:
        return self._components.day

    @property
    def hour(self) -> int:
        return self._components.hour

    @property
    def minute(self) -> int:
        return self._components.minute

    @property
    def second(self) -> int:
        return self._components.second

    @property
    def millisecond(self) -> int:
        """Milliseconds within the second (0-999).

        Truncated rather than rounded, so 999_999_999 nanoseconds reads as
        999 and never as 1000.
        """
        return self._components.nanosecond // NANOS_PER_MILLISECOND

    @property
    def microsecond(self) -> int:
        """Microseconds within the second (0-999999), truncated."""
        return self._components.nanosecond // NANOS_PER_MICROSECOND

    @property
    def nanosecond(self) -> int:
        return self._components.nanosecond

    @property
    def calendar(self) -> Calendar:
        return self._components.calendar

    @property
    def timezone(self) -> Timezone:
        return self._components.timezone

    # Instant

    @property
    def instant(self) -> Instant:
        return self._instant

    @property
    def timestamp(self) -> float:
        """Seconds since the Unix epoch."""
        return self._instant.timestamp

    @property
    def unix_nanos(self) -> int:
        return self._instant.unix_nanos

    @property
    def reference_interval(self) -> float:
        """Seconds since 2001-01-01T00:00:00Z."""
        return self._instant.reference_interval

    @property
    def utc_offset(self) -> int:
        """UTC offset in seconds in effect at this instant."""
        return self.timezone.offset_at(self._instant)

    def to_datetime(self) -> _datetime.datetime:
        """Return an aware standard library datetime (microsecond precision).

        Raises:
            OverflowError: If the instant is outside datetime's year range.
        """
        micros = self._instant.unix_nanos // NANOS_PER_MICROSECOND
        utc = _EPOCH + _datetime.timedelta(microseconds=micros)
        return utc.astimezone(self.timezone.to_tzinfo())

    # Derived values

    def date_only(self) -> DateTime:
        """Return the start of this day: hour, minute, second and nanosecond zeroed.

        The result is normalized again rather than computed by subtracting
        the time of day, so a midnight that a DST transition skips resolves
        as the calendar dictates.

        Examples:
            >>> DateTime(2024, 1, 15, 14, 30, timezone="UTC").date_only()
            DateTime(2024, 1, 15, 0, 0, 0, nanosecond=0, timezone=UTC)
        """
        return DateTime._from_components(self._components.with_time_of_day_zeroed())

    def time_of_day(self) -> Duration:
        """Return the Duration elapsed since date_only()."""
        return Duration.between(self.date_only(), self)

    @property
    def day_of_week(self) -> int:
        """Day of the week: 1 for Sunday through 7 for Saturday.

        Examples:
            >>> DateTime(2024, 1, 15, timezone="UTC").day_of_week  # a Monday
            2
        """
        return self.calendar.component(TimeUnit.WEEKDAY, self._instant, self.timezone)

    @property
    def iso_weekday(self) -> int:
        """ISO day of the week: 1 for Monday through 7 for Sunday."""
        return (self.day_of_week + 5) % 7 + 1

    @property
    def day_of_year(self) -> int:
        """Day of the year, 1 for January 1."""
        return self.calendar.ordinality(
            TimeUnit.DAY, TimeUnit.YEAR, self._instant, self.timezone
        )

    @property
    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    @property
    def is_leap_month(self) -> bool:
        """True for February of a leap year."""
        return self.is_leap_year and self.month == 2

    # Field arithmetic

    def _shifted(
        self,
        years: int,
        months: int,
        days: int,
        hours: int,
        minutes: int,
        seconds: int,
        milliseconds: int,
        nanoseconds: int,
    ) -> CalendarComponents:
        return self._components.shifted(
            years=years,
            months=months,
            days=days,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            nanoseconds=milliseconds * NANOS_PER_MILLISECOND + nanoseconds,
        )

    @integer_fields(
        "years", "months", "days", "hours", "minutes", "seconds",
        "milliseconds", "nanoseconds",
    )
    def plus(
        self,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        nanoseconds: int = 0,
    ) -> DateTime:
        """Return a new DateTime with the deltas added to the fields.

        All deltas are added to the current fields first and the result is
        normalized once, so the order of the fields does not matter.
        Adding one month to January 31 gives February 31, which the
        Gregorian calendar resolves to March 2 or 3.

        Raises:
            ValidationError: If a delta is not an integer.
            InvalidCalendarFields: If the result leaves the calendar's range.

        Examples:
            >>> DateTime(2024, 1, 31, timezone="UTC").plus(months=1)
            DateTime(2024, 3, 2, 0, 0, 0, nanosecond=0, timezone=UTC)

            >>> DateTime(2024, 12, 31, 23, timezone="UTC").plus(hours=1).year
            2025
        """
        return self._rebased(
            self._shifted(
                years, months, days, hours, minutes, seconds, milliseconds, nanoseconds
            )
        )

    @integer_fields(
        "years", "months", "days", "hours", "minutes", "seconds",
        "milliseconds", "nanoseconds",
    )
    def minus(
        self,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        nanoseconds: int = 0,
    ) -> DateTime:
        """Return a new DateTime with the deltas subtracted from the fields."""
        return self._rebased(
            self._shifted(
                -years, -months, -days, -hours, -minutes, -seconds,
                -milliseconds, -nanoseconds,
            )
        )

    def plus_duration(self, duration: Duration) -> DateTime:
        """Return a new DateTime with the Duration's fields added.

        Examples:
            >>> DateTime(2024, 1, 15, 12, timezone="UTC").plus_duration(Duration(days=1, hours=2))
            DateTime(2024, 1, 16, 14, 0, 0, nanosecond=0, timezone=UTC)
        """
        return self._rebased(self._shifted(*_duration_deltas(duration)))

    def minus_duration(self, duration: Duration) -> DateTime:
        """Return a new DateTime with the Duration's fields subtracted."""
        return self._rebased(self._shifted(*_duration_deltas(-duration)))

    def __add__(self, other: object) -> DateTime:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.plus_duration(other)

    def __radd__(self, other: object) -> DateTime:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.plus_duration(other)

    def __sub__(self, other: object) -> DateTime | Duration:
        """Subtract a Duration (giving a DateTime) or a DateTime (giving a Duration).

        Examples:
            >>> a = DateTime(2024, 1, 15, 14, timezone="UTC")
            >>> b = DateTime(2024, 1, 15, 12, timezone="UTC")
            >>> (a - b).hours
            2
        """
        if isinstance(other, Duration):
            return self.minus_duration(other)
        if isinstance(other, DateTime):
            return Duration.between(other, self)
        return NotImplemented

    # Timezone projection

    def in_timezone(self, timezone: TimezoneLike) -> DateTime:
        """Return the same instant with fields read in another timezone.

        Args:
            timezone: Target Timezone or designator; None means the
                process-local zone, whatever default was configured.

        Examples:
            >>> dt = DateTime(2024, 1, 15, 12, timezone="UTC")
            >>> dt.in_timezone("+05:30").hour, dt.in_timezone("+05:30").minute
            (17, 30)
        """
        target = Timezone.of(timezone)
        return DateTime._from_state(
            _project(self._instant, self.calendar, target), self._instant
        )

    def to_utc(self) -> DateTime:
        return self.in_timezone(Timezone.utc())

    def to_local(self) -> DateTime:
        """Project into the process-local timezone (TZ, then /etc/localtime)."""
        return self.in_timezone(Timezone.local())

    # Mutability

    def mutable(self) -> MutableDateTime:
        """Return a MutableDateTime copy of this value."""
        return MutableDateTime._from_state(self._components, self._instant)

    # Comparison operators

    def __eq__(self, other: object) -> bool:
        """Two DateTimes are equal when their instants are equal."""
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._instant == other._instant

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._instant < other._instant

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._instant <= other._instant

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._instant > other._instant

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._instant >= other._instant

    def __hash__(self) -> int:
        return hash(self._instant)

    def __repr__(self) -> str:
        c = self._components
        extra = ""
        if c.calendar.identifier != "gregorian":
            extra = f", calendar={c.calendar.identifier!r}"
        return (
            f"{type(self).__name__}({c.year}, {c.month}, {c.day}, {c.hour}, "
            f"{c.minute}, {c.second}, nanosecond={c.nanosecond}{extra}, "
            f"timezone={c.timezone})"
        )

    def __str__(self) -> str:
        """Return an ISO 8601 style string with the offset, e.g.
        "2024-03-10T03:30:00-04:00[America/New_York]".
        """
        c = self._components
        if c.year >= 0:
            date_str = f"{c.year:04d}-{c.month:02d}-{c.day:02d}"
        else:
            date_str = f"{c.year:05d}-{c.month:02d}-{c.day:02d}"

        time_str = f"{c.hour:02d}:{c.minute:02d}:{c.second:02d}"
        if c.nanosecond:
            time_str += "." + f"{c.nanosecond:09d}".rstrip("0")

        offset = self.utc_offset
        sign = "+" if offset >= 0 else "-"
        hours, rest = divmod(abs(offset), 3600)
        minutes, seconds = divmod(rest, 60)
        offset_str = f"{sign}{hours:02d}:{minutes:02d}"
        if seconds:
            offset_str += f":{seconds:02d}"

        result = f"{date_str}T{time_str}{offset_str}"
        if not c.timezone.is_fixed:
            result += f"[{c.timezone}]"
        return result


class MutableDateTime(DateTime):
    """A DateTime whose fields can be shifted in place.

    The in-place methods add deltas to the components and normalize them
    straight away, replacing the instant in the same step; a failed
    normalization leaves the value unchanged. Every other method behaves
    as on DateTime and returns immutable DateTime values.

    MutableDateTime is unhashable, and a single instance must not be
    mutated from several threads without external locking.

    Examples:
        >>> m = DateTime(2024, 1, 31, timezone="UTC").mutable()
        >>> m.add(months=1)
        >>> m.month, m.day
        (3, 2)
    """

    __slots__ = ()

    __hash__ = None  # type: ignore[assignment]

    def _commit(self, components: CalendarComponents) -> None:
        self._components, self._instant = _normalized(components, self.utc_offset)

    @integer_fields(
        "years", "months", "days", "hours", "minutes", "seconds",
        "milliseconds", "nanoseconds",
    )
    def add(
        self,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        nanoseconds: int = 0,
    ) -> None:
        """Add the deltas to the fields in place and re-normalize."""
        self._commit(
            self._shifted(
                years, months, days, hours, minutes, seconds, milliseconds, nanoseconds
            )
        )

    @integer_fields(
        "years", "months", "days", "hours", "minutes", "seconds",
        "milliseconds", "nanoseconds",
    )
    def subtract(
        self,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        nanoseconds: int = 0,
    ) -> None:
        """Subtract the deltas from the fields in place and re-normalize."""
        self._commit(
            self._shifted(
                -years, -months, -days, -hours, -minutes, -seconds,
                -milliseconds, -nanoseconds,
            )
        )

    def add_duration(self, duration: Duration) -> None:
        self._commit(self._shifted(*_duration_deltas(duration)))

    def subtract_duration(self, duration: Duration) -> None:
        self._commit(self._shifted(*_duration_deltas(-duration)))

    def freeze(self) -> DateTime:
        """Return an immutable DateTime with the current value."""
        return DateTime._from_state(self._components, self._instant)


def _duration_deltas(duration: object) -> tuple[int, int, int, int, int, int, int, int]:
    """Map a Duration onto (years, ..., nanoseconds) field deltas."""
    if not isinstance(duration, Duration):
        raise ValidationError(
            f"expected Duration, got {type(duration).__name__}"
        )
    return (
        0,
        0,
        duration.days,
        duration.hours,
        duration.minutes,
        duration.seconds,
        duration.milliseconds,
        duration.nanoseconds,
    )


__all__ = ["DateTime", "MutableDateTime"]
