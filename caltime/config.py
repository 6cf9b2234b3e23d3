"""Process-wide defaults for calendar and timezone.

DateTime constructors that are not given a calendar or timezone use the
defaults held here. Applications call configure() once at startup; if
they never do, the defaults are read from the environment on first use:

    CALTIME_CALENDAR      calendar identifier (default "gregorian")
    CALTIME_TIMEZONE      zone designator (default "local")
    CALTIME_DISAMBIGUATE  DST gap/overlap policy (default "compatible")
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from pydantic_settings import BaseSettings

from caltime.calendars import Calendar, calendar_for
from caltime.calendars.gregorian import Disambiguate
from caltime.units.timezone import Timezone

logger = logging.getLogger(__name__)


class CaltimeSettings(BaseSettings):
    """Settings for the process defaults, overridable by environment."""

    calendar: str = "gregorian"
    timezone: str = "local"
    disambiguate: Disambiguate = "compatible"

    model_config = {"env_prefix": "CALTIME_"}


@dataclass(frozen=True)
class Defaults:
    """Resolved defaults injected into constructors."""

    calendar: Calendar
    timezone: Timezone
    disambiguate: Disambiguate = "compatible"


_defaults: Defaults | None = None
_lock = threading.Lock()


def configure(
    settings: CaltimeSettings | None = None,
    *,
    calendar: Calendar | str | None = None,
    timezone: Timezone | str | None = None,
    disambiguate: Disambiguate | None = None,
) -> Defaults:
    """Resolve and install the process defaults.

    Keyword arguments override the corresponding settings. A Calendar or
    Timezone instance is installed as is; strings are resolved.

    Args:
        settings: Base settings; read from the environment when omitted.
        calendar: Calendar instance or identifier.
        timezone: Timezone instance or designator ("local", "UTC", "+02:00",
            "Europe/Paris", ...).
        disambiguate: DST gap/overlap policy for the default calendar.

    Returns:
        The installed Defaults.

    Raises:
        InvalidCalendarFields: If the calendar identifier is unknown.
        TimezoneError: If the timezone cannot be resolved.
        pydantic.ValidationError: If a setting is malformed.

    Examples:
        >>> configure(timezone="Europe/Berlin").timezone.name
        'Europe/Berlin'
    """
    global _defaults

    if settings is None:
        settings = CaltimeSettings()

    updates: dict[str, str] = {}
    if isinstance(calendar, str):
        updates["calendar"] = calendar
    if isinstance(timezone, str):
        updates["timezone"] = timezone
    if disambiguate is not None:
        updates["disambiguate"] = disambiguate
    if updates:
        settings = type(settings)(**{**settings.model_dump(), **updates})

    resolved_calendar = (
        calendar
        if isinstance(calendar, Calendar)
        else calendar_for(settings.calendar, disambiguate=settings.disambiguate)
    )
    resolved_timezone = (
        timezone if isinstance(timezone, Timezone) else Timezone.of(settings.timezone)
    )

    defaults = Defaults(
        calendar=resolved_calendar,
        timezone=resolved_timezone,
        disambiguate=settings.disambiguate,
    )
    with _lock:
        _defaults = defaults
    logger.debug(
        "caltime defaults: calendar=%r timezone=%s", resolved_calendar, resolved_timezone
    )
    return defaults


def get_defaults() -> Defaults:
    """Return the installed defaults, configuring from the environment if needed."""
    with _lock:
        defaults = _defaults
    if defaults is None:
        logger.debug("caltime not configured, reading defaults from the environment")
        defaults = configure()
    return defaults


def reset() -> None:
    """Forget the installed defaults and the cached local zone."""
    global _defaults

    with _lock:
        _defaults = None
    Timezone.clear_local_cache()


def resolve_calendar(calendar: Calendar | str | None) -> Calendar:
    """Resolve a calendar; identifiers get the configured DST policy."""
    if isinstance(calendar, Calendar):
        return calendar
    defaults = get_defaults()
    if calendar is None:
        return defaults.calendar
    return calendar_for(calendar, disambiguate=defaults.disambiguate)


def resolve_timezone(timezone: Timezone | str | None) -> Timezone:
    """Resolve a zone designator; None means the configured default zone."""
    if timezone is None:
        return get_defaults().timezone
    return Timezone.of(timezone)


__all__ = [
    "CaltimeSettings",
    "Defaults",
    "configure",
    "get_defaults",
    "reset",
    "resolve_calendar",
    "resolve_timezone",
]
