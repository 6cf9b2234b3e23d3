"""Duration class representing a span of elapsed time.

This module provides the Duration class for representing time spans
with nanosecond precision, split into days, hours, minutes, seconds and
milliseconds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from caltime._internal.constants import (
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MICROSECOND,
    NANOS_PER_MILLISECOND,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
)
from caltime._internal.validation import integer_fields
from caltime.core.instant import Instant
from caltime.errors import ValidationError

if TYPE_CHECKING:
    from caltime.core.datetime import DateTime


class Duration:
    """A span of elapsed time with nanosecond precision.

    Duration represents a length of time, which can be positive, negative,
    or zero. It is stored as a single count of nanoseconds and exposes the
    count split into components.

    Every component carries the sign of the whole duration (the split
    truncates toward zero), so the components always add back up to the
    total:

    - `days` is unbounded
    - `hours` is in (-24, 24)
    - `minutes` and `seconds` are in (-60, 60)
    - `milliseconds` is in (-1000, 1000)
    - `nanoseconds` is the sub-millisecond remainder, in (-10**6, 10**6)

    Examples:
        >>> d = Duration(hours=25, minutes=30)
        >>> d.days, d.hours, d.minutes
        (1, 1, 30)

        >>> d = Duration(seconds=-90)
        >>> d.minutes, d.seconds
        (-1, -30)

        >>> (Duration(seconds=30) + Duration(seconds=45)).total_seconds
        75.0
    """

    __slots__ = ("_nanos",)

    @integer_fields(
        "days", "hours", "minutes", "seconds",
        "milliseconds", "microseconds", "nanoseconds",
    )
    def __init__(
        self,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        microseconds: int = 0,
        nanoseconds: int = 0,
    ) -> None:
        """Create a Duration from component parts.

        All parameters can be positive, negative, or zero.

        Raises:
            ValidationError: If any component is not an integer.

        Examples:
            >>> Duration(days=1)
            Duration(days=1, hours=0, minutes=0, seconds=0, milliseconds=0, nanoseconds=0)

            >>> Duration(milliseconds=1500).seconds
            1
        """
        self._nanos: int = (
            days * NANOS_PER_DAY
            + hours * NANOS_PER_HOUR
            + minutes * NANOS_PER_MINUTE
            + seconds * NANOS_PER_SECOND
            + milliseconds * NANOS_PER_MILLISECOND
            + microseconds * NANOS_PER_MICROSECOND
            + nanoseconds
        )

    @classmethod
    def zero(cls) -> Duration:
        return cls()

    @classmethod
    def from_days(cls, days: int) -> Duration:
        return cls(days=days)

    @classmethod
    def from_hours(cls, hours: int) -> Duration:
        return cls(hours=hours)

    @classmethod
    def from_minutes(cls, minutes: int) -> Duration:
        return cls(minutes=minutes)

    @classmethod
    def from_seconds(cls, seconds: int) -> Duration:
        return cls(seconds=seconds)

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> Duration:
        return cls(milliseconds=milliseconds)

    @classmethod
    def from_nanoseconds(cls, nanoseconds: int) -> Duration:
        return cls(nanoseconds=nanoseconds)

    @classmethod
    def between(
        cls,
        start: DateTime | Instant,
        end: DateTime | Instant,
    ) -> Duration:
        """Create the Duration elapsed from start to end.

        The result is negative when end is before start. Calendar and
        timezone play no part: only the two instants matter.

        Args:
            start: A DateTime or Instant.
            end: A DateTime or Instant.

        Returns:
            The elapsed Duration.

        Raises:
            ValidationError: If either argument is not a DateTime or Instant.

        Examples:
            >>> Duration.between(DateTime.of_date(2024, 1, 1), DateTime.of_date(2024, 1, 2))
            Duration(days=1, hours=0, minutes=0, seconds=0, milliseconds=0, nanoseconds=0)
        """
        return cls(nanoseconds=_instant_of(end) - _instant_of(start))

    # Components

    def _split(self) -> tuple[int, int, int, int, int, int]:
        sign = -1 if self._nanos < 0 else 1
        rest = abs(self._nanos)
        days, rest = divmod(rest, NANOS_PER_DAY)
        hours, rest = divmod(rest, NANOS_PER_HOUR)
        minutes, rest = divmod(rest, NANOS_PER_MINUTE)
        seconds, rest = divmod(rest, NANOS_PER_SECOND)
        millis, nanos = divmod(rest, NANOS_PER_MILLISECOND)
        return (
            sign * days,
            sign * hours,
            sign * minutes,
            sign * seconds,
            sign * millis,
            sign * nanos,
        )

    @property
    def days(self) -> int:
        """Whole days, carrying the sign of the duration."""
        return self._split()[0]

    @property
    def hours(self) -> int:
        """Hours within the day, in (-24, 24)."""
        return self._split()[1]

    @property
    def minutes(self) -> int:
        """Minutes within the hour, in (-60, 60)."""
        return self._split()[2]

    @property
    def seconds(self) -> int:
        """Seconds within the minute, in (-60, 60)."""
        return self._split()[3]

    @property
    def milliseconds(self) -> int:
        """Milliseconds within the second, in (-1000, 1000)."""
        return self._split()[4]

    @property
    def nanoseconds(self) -> int:
        """Nanoseconds below the millisecond, in (-10**6, 10**6)."""
        return self._split()[5]

    @property
    def total_seconds(self) -> float:
        """Return the total duration as seconds (approximate).

        For exact calculations, use total_nanoseconds.

        Examples:
            >>> Duration(days=1, hours=1).total_seconds
            90000.0
        """
        return self._nanos / NANOS_PER_SECOND

    @property
    def total_nanoseconds(self) -> int:
        return self._nanos

    @property
    def is_negative(self) -> bool:
        return self._nanos < 0

    @property
    def is_zero(self) -> bool:
        return self._nanos == 0

    # Arithmetic

    def __add__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(nanoseconds=self._nanos + other._nanos)

    def __radd__(self, other: object) -> Duration:
        """Support sum() by handling 0 + Duration."""
        if other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(nanoseconds=self._nanos - other._nanos)

    def __mul__(self, other: object) -> Duration:
        """Multiply a duration by an integer.

        Examples:
            >>> (Duration(seconds=30) * 3).minutes
            1
        """
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return Duration(nanoseconds=self._nanos * other)

    def __rmul__(self, other: object) -> Duration:
        return self.__mul__(other)

    def __neg__(self) -> Duration:
        return Duration(nanoseconds=-self._nanos)

    def __pos__(self) -> Duration:
        return Duration(nanoseconds=self._nanos)

    def __abs__(self) -> Duration:
        return Duration(nanoseconds=abs(self._nanos))

    # Comparison

    def __eq__(self, other: object) -> bool:
        """Check equality with another duration.

        Examples:
            >>> Duration(seconds=60) == Duration(minutes=1)
            True
        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self._nanos == other._nanos

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._nanos < other._nanos

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._nanos <= other._nanos

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._nanos > other._nanos

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._nanos >= other._nanos

    def __hash__(self) -> int:
        return hash(self._nanos)

    def __repr__(self) -> str:
        days, hours, minutes, seconds, millis, nanos = self._split()
        return (
            f"Duration(days={days}, hours={hours}, minutes={minutes}, "
            f"seconds={seconds}, milliseconds={millis}, nanoseconds={nanos})"
        )

    def __str__(self) -> str:
        """Return a string like "1 day, 2:30:45" or "-0:00:01.5"."""
        if self.is_zero:
            return "0:00:00"

        days, hours, minutes, seconds, millis, nanos = (abs(v) for v in self._split())
        time_str = f"{hours}:{minutes:02d}:{seconds:02d}"
        frac = millis * NANOS_PER_MILLISECOND + nanos
        if frac:
            time_str += f".{frac:09d}".rstrip("0")

        sign = "-" if self.is_negative else ""
        if days == 0:
            return f"{sign}{time_str}"
        unit = "day" if days == 1 else "days"
        return f"{sign}{days} {unit}, {time_str}"

    def __bool__(self) -> bool:
        """Return True if this is a non-zero duration."""
        return not self.is_zero


def _instant_of(value: object) -> int:
    from caltime.core.datetime import DateTime

    if isinstance(value, Instant):
        return value.unix_nanos
    if isinstance(value, DateTime):
        return value.instant.unix_nanos
    raise ValidationError(
        f"expected DateTime or Instant, got {type(value).__name__}"
    )


__all__ = ["Duration"]
