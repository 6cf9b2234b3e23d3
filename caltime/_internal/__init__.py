"""Internal utilities for Caltime.

This module contains private implementation details:
    - Constants and magic numbers
    - Gregorian day arithmetic
    - Argument type validation

Note: This module is not part of the public API.
"""

from __future__ import annotations

from caltime._internal.calendar import carry_fields, is_leap_year
from caltime._internal.validation import integer_fields, require_int

__all__: list[str] = [
    "carry_fields",
    "integer_fields",
    "is_leap_year",
    "require_int",
]
