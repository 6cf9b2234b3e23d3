"""The proleptic Gregorian calendar.

Fields are resolved leniently: every out-of-range field is carried into
the next larger unit, so month 13 is January of the next year, day 0 is
the last day of the previous month and February 30 is a day in March.

Wall times are mapped to instants through the timezone's offset rules.
Times skipped by a DST transition (gaps) and times repeated by one
(overlaps) are resolved according to the calendar's disambiguation
policy:

    compatible  overlap: earlier instant; gap: shifted forward by the gap
    earlier     overlap: earlier instant; gap: shifted backward
    later       overlap: later instant; gap: shifted forward
    raise       AmbiguousOrMissingLocalTime in both cases
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal, get_args

from caltime._internal.calendar import (
    carry_fields,
    ordinal_to_weekday,
    ordinal_to_ymd,
    ymd_to_ordinal,
)
from caltime._internal.constants import (
    MAX_YEAR,
    MIN_YEAR,
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    UNIX_EPOCH_ORDINAL,
)
from caltime.calendars.base import Calendar, Fields
from caltime.core.instant import Instant
from caltime.errors import AmbiguousOrMissingLocalTime, InvalidCalendarFields
from caltime.units.timeunit import TimeUnit

if TYPE_CHECKING:
    from caltime.core.components import CalendarComponents
    from caltime.units.timezone import Timezone

logger = logging.getLogger(__name__)

Disambiguate = Literal["compatible", "earlier", "later", "raise"]
DISAMBIGUATIONS: tuple[str, ...] = get_args(Disambiguate)


class GregorianCalendar(Calendar):
    """Proleptic Gregorian calendar with years -9999 through 9999.

    Args:
        disambiguate: How to resolve wall times in DST gaps and overlaps.

    Examples:
        >>> cal = GregorianCalendar()
        >>> c = CalendarComponents(2023, 2, 29, 0, 0, 0, 0, cal, Timezone.utc())
        >>> cal.instant_to_fields(cal.fields_to_instant(c), Timezone.utc())
        (2023, 3, 1, 0, 0, 0, 0)
    """

    identifier = "gregorian"

    def __init__(self, disambiguate: Disambiguate = "compatible") -> None:
        if disambiguate not in DISAMBIGUATIONS:
            raise ValueError(
                f"disambiguate must be one of {DISAMBIGUATIONS}, got {disambiguate!r}"
            )
        self._disambiguate: Disambiguate = disambiguate

    @property
    def disambiguate(self) -> Disambiguate:
        return self._disambiguate

    # Forward: fields -> instant

    def fields_to_instant(
        self,
        components: CalendarComponents,
        *,
        prefer_offset: int | None = None,
    ) -> Instant:
        _, _, ordinal, nanos_of_day = carry_fields(*components.fields)
        self._check_year(ordinal_to_ymd(ordinal)[0], components)

        local_seconds = (
            (ordinal - UNIX_EPOCH_ORDINAL) * SECONDS_PER_DAY
            + nanos_of_day // NANOS_PER_SECOND
        )
        utc_seconds = self._resolve_wall_time(
            local_seconds, components.timezone, prefer_offset
        )
        return Instant(utc_seconds * NANOS_PER_SECOND + nanos_of_day % NANOS_PER_SECOND)

    def _resolve_wall_time(
        self,
        local_seconds: int,
        timezone: Timezone,
        prefer_offset: int | None = None,
    ) -> int:
        """Map local wall-clock seconds to UTC seconds under the zone rules."""
        if timezone.is_fixed:
            return local_seconds - timezone.offset_seconds

        # Offsets in force a day either side bracket any single transition.
        before = _offset(timezone, local_seconds - SECONDS_PER_DAY)
        after = _offset(timezone, local_seconds + SECONDS_PER_DAY)
        candidates = sorted(
            local_seconds - offset
            for offset in {before, after}
            if _offset(timezone, local_seconds - offset) == offset
        )

        if len(candidates) == 1:
            return candidates[0]

        if len(candidates) == 2:
            if prefer_offset is not None:
                for candidate in candidates:
                    if local_seconds - candidate == prefer_offset:
                        return candidate
            if self._disambiguate == "raise":
                raise AmbiguousOrMissingLocalTime(
                    f"wall time {_describe(local_seconds)} is ambiguous in {timezone}"
                )
            logger.debug(
                "wall time %s repeats in %s, resolving with %r",
                _describe(local_seconds), timezone, self._disambiguate,
            )
            return candidates[1] if self._disambiguate == "later" else candidates[0]

        if self._disambiguate == "raise":
            raise AmbiguousOrMissingLocalTime(
                f"wall time {_describe(local_seconds)} does not exist in {timezone}"
            )
        logger.debug(
            "wall time %s is skipped in %s, resolving with %r",
            _describe(local_seconds), timezone, self._disambiguate,
        )
        if self._disambiguate == "earlier":
            return local_seconds - after
        return local_seconds - before

    # Reverse: instant -> fields

    def instant_to_fields(self, instant: Instant, timezone: Timezone) -> Fields:
        ordinal, nanos_of_day = self._local_day(instant, timezone)
        year, month, day = ordinal_to_ymd(ordinal)
        self._check_year(year, instant)

        hour, rem = divmod(nanos_of_day, NANOS_PER_HOUR)
        minute, rem = divmod(rem, NANOS_PER_MINUTE)
        second, nanosecond = divmod(rem, NANOS_PER_SECOND)
        return (year, month, day, hour, minute, second, nanosecond)

    def _local_day(self, instant: Instant, timezone: Timezone) -> tuple[int, int]:
        """Return (ordinal, nanos_of_day) of the instant's local wall time."""
        offset = timezone.offset_at(instant)
        local_nanos = instant.unix_nanos + offset * NANOS_PER_SECOND
        days, nanos_of_day = divmod(local_nanos, NANOS_PER_DAY)
        return (days + UNIX_EPOCH_ORDINAL, nanos_of_day)

    @staticmethod
    def _check_year(year: int, source: object) -> None:
        if year < MIN_YEAR or year > MAX_YEAR:
            raise InvalidCalendarFields(
                f"year {year} is outside the supported range "
                f"[{MIN_YEAR}, {MAX_YEAR}] ({source!r})"
            )

    # Unit queries

    def ordinality(
        self,
        unit: TimeUnit,
        within: TimeUnit,
        instant: Instant,
        timezone: Timezone,
    ) -> int:
        year, month, day, hour, minute, second, _ = self.instant_to_fields(instant, timezone)
        pair = (unit, within)

        if pair == (TimeUnit.DAY, TimeUnit.YEAR):
            return ymd_to_ordinal(year, month, day) - ymd_to_ordinal(year, 1, 1) + 1
        if pair == (TimeUnit.DAY, TimeUnit.WEEK):
            return ordinal_to_weekday(ymd_to_ordinal(year, month, day))
        if pair == (TimeUnit.DAY, TimeUnit.MONTH):
            return day
        if pair == (TimeUnit.MONTH, TimeUnit.YEAR):
            return month
        if pair == (TimeUnit.HOUR, TimeUnit.DAY):
            return hour + 1
        if pair == (TimeUnit.MINUTE, TimeUnit.HOUR):
            return minute + 1
        if pair == (TimeUnit.SECOND, TimeUnit.MINUTE):
            return second + 1

        raise ValueError(f"unsupported ordinality: {unit.value} in {within.value}")

    def component(self, unit: TimeUnit, instant: Instant, timezone: Timezone) -> int:
        fields = self.instant_to_fields(instant, timezone)

        if unit is TimeUnit.WEEKDAY:
            return ordinal_to_weekday(ymd_to_ordinal(*fields[:3]))

        index = _FIELD_INDEX.get(unit)
        if index is None:
            raise ValueError(f"unsupported component: {unit.value}")
        return fields[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GregorianCalendar):
            return NotImplemented
        return self._disambiguate == other._disambiguate

    def __hash__(self) -> int:
        return hash((self.identifier, self._disambiguate))

    def __repr__(self) -> str:
        if self._disambiguate == "compatible":
            return "GregorianCalendar()"
        return f"GregorianCalendar(disambiguate={self._disambiguate!r})"


_FIELD_INDEX: dict[TimeUnit, int] = {
    TimeUnit.YEAR: 0,
    TimeUnit.MONTH: 1,
    TimeUnit.DAY: 2,
    TimeUnit.HOUR: 3,
    TimeUnit.MINUTE: 4,
    TimeUnit.SECOND: 5,
    TimeUnit.NANOSECOND: 6,
}


def _offset(timezone: Timezone, unix_seconds: int) -> int:
    return timezone.offset_at(Instant(unix_seconds * NANOS_PER_SECOND))


def _describe(local_seconds: int) -> str:
    days, secs = divmod(local_seconds, SECONDS_PER_DAY)
    year, month, day = ordinal_to_ymd(days + UNIX_EPOCH_ORDINAL)
    hour, secs = divmod(secs, 3600)
    minute, second = divmod(secs, 60)
    return f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}"


__all__ = [
    "DISAMBIGUATIONS",
    "Disambiguate",
    "GregorianCalendar",
]
