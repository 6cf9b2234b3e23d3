"""Calendar systems.

This module provides:
    - Calendar: Abstract calendar system interface
    - GregorianCalendar: Proleptic Gregorian calendar ("gregorian")
    - calendar_for / register_calendar: Identifier registry
"""

from __future__ import annotations

from caltime.calendars.base import (
    Calendar,
    calendar_for,
    register_calendar,
    registered_calendars,
)
from caltime.calendars.gregorian import DISAMBIGUATIONS, GregorianCalendar

register_calendar(GregorianCalendar.identifier, GregorianCalendar)

__all__: list[str] = [
    "Calendar",
    "DISAMBIGUATIONS",
    "GregorianCalendar",
    "calendar_for",
    "register_calendar",
    "registered_calendars",
]
