"""Core temporal types.

This module provides the fundamental temporal types:
    - Instant: Absolute moment in time, nanoseconds since the Unix epoch
    - CalendarComponents: Calendar fields with their calendar and timezone
    - DateTime: Calendar fields and instant kept in step
    - MutableDateTime: DateTime with in-place field arithmetic
    - Duration: Elapsed time span with nanosecond precision
"""

from __future__ import annotations

from caltime.core.instant import Instant
from caltime.core.components import CalendarComponents
from caltime.core.duration import Duration
from caltime.core.datetime import DateTime, MutableDateTime

__all__: list[str] = [
    "CalendarComponents",
    "DateTime",
    "Duration",
    "Instant",
    "MutableDateTime",
]
