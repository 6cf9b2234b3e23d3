"""Absolute point on the time axis.

An Instant carries no calendar and no timezone. It is stored as integer
nanoseconds since the Unix epoch (1970-01-01T00:00:00Z) so that equality
and ordering are exact.
"""

from __future__ import annotations

import time as _time

from caltime._internal.constants import (
    NANOS_PER_SECOND,
    REFERENCE_EPOCH_UNIX_SECONDS,
)
from caltime._internal.validation import require_int


class Instant:
    """An absolute timestamp with nanosecond precision.

    Attributes:
        unix_nanos: Nanoseconds since 1970-01-01T00:00:00Z.

    Examples:
        >>> Instant.from_timestamp(1.5).unix_nanos
        1500000000

        >>> Instant.from_reference_interval(0).unix_seconds
        978307200
    """

    __slots__ = ("_nanos",)

    def __init__(self, unix_nanos: int) -> None:
        self._nanos: int = require_int("unix_nanos", unix_nanos)

    @classmethod
    def now(cls) -> Instant:
        """Return the current instant from the system clock."""
        return cls(_time.time_ns())

    @classmethod
    def from_unix_nanos(cls, nanos: int) -> Instant:
        return cls(nanos)

    @classmethod
    def from_timestamp(cls, timestamp: int | float) -> Instant:
        """Create an Instant from Unix seconds.

        Float timestamps keep their fractional part at nanosecond resolution
        (subject to float precision).
        """
        if isinstance(timestamp, float):
            return cls(round(timestamp * NANOS_PER_SECOND))
        return cls(require_int("timestamp", timestamp) * NANOS_PER_SECOND)

    @classmethod
    def from_reference_interval(cls, seconds: int | float) -> Instant:
        """Create an Instant from seconds since 2001-01-01T00:00:00Z."""
        return cls.from_timestamp(seconds + REFERENCE_EPOCH_UNIX_SECONDS)

    @property
    def unix_nanos(self) -> int:
        return self._nanos

    @property
    def unix_seconds(self) -> int:
        """Whole seconds since the Unix epoch, floored."""
        return self._nanos // NANOS_PER_SECOND

    @property
    def timestamp(self) -> float:
        """Seconds since the Unix epoch as a float."""
        return self._nanos / NANOS_PER_SECOND

    @property
    def reference_interval(self) -> float:
        """Seconds since 2001-01-01T00:00:00Z as a float."""
        return (
            self._nanos - REFERENCE_EPOCH_UNIX_SECONDS * NANOS_PER_SECOND
        ) / NANOS_PER_SECOND

    def __add__(self, other: object) -> Instant:
        """Offset the instant by an integer number of nanoseconds."""
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return Instant(self._nanos + other)

    def __sub__(self, other: object) -> int:
        """Return the signed distance to another Instant in nanoseconds."""
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanos - other._nanos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanos == other._nanos

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanos < other._nanos

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanos <= other._nanos

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanos > other._nanos

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._nanos >= other._nanos

    def __hash__(self) -> int:
        return hash(self._nanos)

    def __repr__(self) -> str:
        return f"Instant(unix_nanos={self._nanos})"


__all__ = ["Instant"]
