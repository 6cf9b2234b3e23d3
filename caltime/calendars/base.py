"""Calendar system interface and registry.

A Calendar maps calendar fields to instants and back under a timezone.
DateTime delegates every calendar rule to one: overflow handling, month
lengths, leap years, and DST disambiguation all live here.

Calendars are looked up by identifier so that new systems can be
registered without touching DateTime. Only the proleptic Gregorian
calendar ships with the library.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from caltime.errors import InvalidCalendarFields

if TYPE_CHECKING:
    from caltime.core.components import CalendarComponents
    from caltime.core.instant import Instant
    from caltime.units.timeunit import TimeUnit
    from caltime.units.timezone import Timezone

logger = logging.getLogger(__name__)

Fields = tuple[int, int, int, int, int, int, int]


class Calendar(ABC):
    """A calendar system.

    Subclasses implement the two conversion primitives plus the unit
    queries. Both conversions must be exact inverses on canonical fields:
    ``instant_to_fields(fields_to_instant(c), c.timezone)`` returns the
    canonical form of ``c``.
    """

    identifier: str

    @abstractmethod
    def fields_to_instant(
        self,
        components: CalendarComponents,
        *,
        prefer_offset: int | None = None,
    ) -> Instant:
        """Resolve possibly overflowed fields to an instant.

        Args:
            components: The fields, calendar and timezone to resolve.
            prefer_offset: UTC offset in seconds to keep when the wall time
                is repeated and one of its instants has this offset. Field
                arithmetic passes the offset of the value it started from,
                so a value in the second pass through a repeated hour stays
                there.

        Raises:
            InvalidCalendarFields: If no instant corresponds to the fields.
            AmbiguousOrMissingLocalTime: If the wall time is skipped or
                repeated and the calendar is configured to refuse those.
        """

    @abstractmethod
    def instant_to_fields(self, instant: Instant, timezone: Timezone) -> Fields:
        """Decompose an instant into canonical (year, ..., nanosecond) fields."""

    @abstractmethod
    def ordinality(
        self,
        unit: TimeUnit,
        within: TimeUnit,
        instant: Instant,
        timezone: Timezone,
    ) -> int:
        """Return the 1-based position of ``unit`` inside ``within``.

        For example ``ordinality(DAY, YEAR, ...)`` is the day of the year.
        """

    @abstractmethod
    def component(self, unit: TimeUnit, instant: Instant, timezone: Timezone) -> int:
        """Return a single calendar component of the instant."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


CalendarFactory = Callable[..., Calendar]

_registry: dict[str, CalendarFactory] = {}
_registry_lock = threading.Lock()


def register_calendar(identifier: str, factory: CalendarFactory) -> None:
    """Register a calendar factory under an identifier.

    Identifiers are case-insensitive. Registering an identifier twice
    replaces the earlier factory. Factories are called with keyword
    options only; identifiers resolved through the process defaults pass
    ``disambiguate``.

    Examples:
        >>> register_calendar("gregorian", GregorianCalendar)
    """
    key = identifier.strip().lower()
    with _registry_lock:
        _registry[key] = factory
    logger.debug("registered calendar %r", key)


def registered_calendars() -> list[str]:
    """Return the registered identifiers, sorted."""
    with _registry_lock:
        return sorted(_registry)


def calendar_for(calendar: Calendar | str, **options: Any) -> Calendar:
    """Resolve a calendar identifier or instance.

    Args:
        calendar: A Calendar (returned as is) or a registered identifier.
        **options: Keyword arguments for the registered factory, such as
            ``disambiguate``. Ignored when a Calendar instance is given.

    Returns:
        The Calendar instance.

    Raises:
        InvalidCalendarFields: If the identifier is not registered.
    """
    if isinstance(calendar, Calendar):
        return calendar
    if not isinstance(calendar, str):
        raise InvalidCalendarFields(
            f"calendar must be a Calendar or identifier, got {type(calendar).__name__}"
        )

    key = calendar.strip().lower()
    with _registry_lock:
        factory = _registry.get(key)
    if factory is None:
        raise InvalidCalendarFields(f"unsupported calendar: {calendar!r}")
    return factory(**options)


__all__ = [
    "Calendar",
    "CalendarFactory",
    "Fields",
    "calendar_for",
    "register_calendar",
    "registered_calendars",
]
