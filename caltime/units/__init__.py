"""Temporal units and time zones.

This module provides:
    - TimeUnit: Calendar units (YEAR, MONTH, DAY, WEEKDAY, etc.)
    - Timezone: Fixed-offset or IANA rule-based timezone
"""

from __future__ import annotations

from caltime.units.timeunit import TimeUnit
from caltime.units.timezone import Timezone

__all__: list[str] = [
    "TimeUnit",
    "Timezone",
]
