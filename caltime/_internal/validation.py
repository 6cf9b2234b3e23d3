"""Validation utilities for Caltime.

Calendar fields are never range checked here: overflow is normalized by
the calendar. These helpers only reject values of the wrong type.

This module is not part of the public API.
"""

from __future__ import annotations

import functools
import inspect
from typing import Callable, TypeVar, ParamSpec

from caltime.errors import ValidationError

P = ParamSpec("P")
T = TypeVar("T")


def require_int(name: str, value: object) -> int:
    """Return value if it is a plain integer.

    Args:
        name: Parameter name, used in the error message.
        value: The value to check.

    Returns:
        The value, unchanged.

    Raises:
        ValidationError: If value is not an int (bool is rejected too).
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    return value


def integer_fields(*names: str) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator checking that the named parameters are integers.

    Args:
        *names: Parameter names to check. Parameters that are not bound
            in a given call keep their defaults and are not checked.

    Returns:
        A decorator function.

    Examples:
        >>> @integer_fields("days", "hours")
        ... def shift(days: int = 0, hours: int = 0) -> None:
        ...     pass

        >>> shift(days=1.5)  # Raises ValidationError
        Traceback (most recent call last):
        ...
        ValidationError: days must be an integer, got float
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        sig = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            bound = sig.bind(*args, **kwargs)
            for name in names:
                if name in bound.arguments:
                    require_int(name, bound.arguments[name])
            return func(*args, **kwargs)

        return wrapper

    return decorator


__all__ = [
    "require_int",
    "integer_fields",
]
