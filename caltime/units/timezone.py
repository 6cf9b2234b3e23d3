"""Timezone representation: fixed UTC offsets and IANA rule sets.

This module provides the Timezone class, the library's time zone
provider. A Timezone is either a fixed UTC offset or a wrapper around a
``datetime.tzinfo`` rule set (normally ``zoneinfo.ZoneInfo``) whose offset
varies with the instant, including daylight saving time.
"""

from __future__ import annotations

import datetime as _datetime
import logging
import os
import re
import time as _time
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from caltime._internal.constants import MAX_UTC_OFFSET_SECONDS
from caltime.errors import TimezoneError

if TYPE_CHECKING:
    from caltime.core.instant import Instant

logger = logging.getLogger(__name__)

_UTC = _datetime.timezone.utc
_EPOCH = _datetime.datetime(1970, 1, 1, tzinfo=_UTC)
_ONE_SECOND = _datetime.timedelta(seconds=1)

# Instants outside the range of datetime are clamped before asking a
# tzinfo for its offset.
_MIN_RULE_SECONDS = (_datetime.datetime(1, 1, 2, tzinfo=_UTC) - _EPOCH) // _ONE_SECOND
_MAX_RULE_SECONDS = (_datetime.datetime(9999, 12, 30, tzinfo=_UTC) - _EPOCH) // _ONE_SECOND

_LOCALTIME_PATH = Path("/etc/localtime")


class Timezone:
    """A timezone: a fixed UTC offset or a set of offset rules.

    Offsets are in seconds, positive east of UTC (ahead in time) and
    negative west of UTC (behind in time).

    Attributes:
        name: The IANA key for rule-based zones, or an optional label for
            fixed offsets.
        is_fixed: True for fixed-offset zones.

    Examples:
        >>> Timezone.utc().is_utc
        True

        >>> Timezone.from_hours(5, 30).offset_seconds
        19800

        >>> Timezone.of("Europe/Berlin").name
        'Europe/Berlin'
    """

    __slots__ = ("_offset_seconds", "_zone", "_name")

    # UTC singleton instance (lazily initialized)
    _utc_instance: ClassVar[Timezone | None] = None

    # Process-local zone (lazily resolved, see local())
    _local_instance: ClassVar[Timezone | None] = None

    _MAX_OFFSET_SECONDS: ClassVar[int] = MAX_UTC_OFFSET_SECONDS

    def __init__(self, offset_seconds: int, name: str | None = None) -> None:
        """Create a fixed-offset Timezone.

        Args:
            offset_seconds: UTC offset in seconds. Positive values are
                east of UTC, negative values are west.
            name: Optional name for the timezone (e.g., "EST", "UTC+5").

        Raises:
            TimezoneError: If offset_seconds is outside valid range.
        """
        if isinstance(offset_seconds, bool) or not isinstance(offset_seconds, int):
            raise TimezoneError(
                f"offset_seconds must be an integer, got {type(offset_seconds).__name__}"
            )

        if abs(offset_seconds) > self._MAX_OFFSET_SECONDS:
            raise TimezoneError(
                f"offset_seconds {offset_seconds} is outside valid range "
                f"[-{self._MAX_OFFSET_SECONDS}, {self._MAX_OFFSET_SECONDS}]"
            )

        self._offset_seconds: int | None = offset_seconds
        self._zone: _datetime.tzinfo | None = None
        self._name: str | None = name

    @classmethod
    def _from_rules(cls, zone: _datetime.tzinfo, name: str | None) -> Timezone:
        instance = object.__new__(cls)
        instance._offset_seconds = None
        instance._zone = zone
        instance._name = name
        return instance

    @classmethod
    def utc(cls) -> Timezone:
        """Return the UTC timezone.

        All calls return the same instance.
        """
        if cls._utc_instance is None:
            cls._utc_instance = cls(0, "UTC")
        return cls._utc_instance

    @classmethod
    def from_hours(cls, hours: int, minutes: int = 0) -> Timezone:
        """Create a fixed Timezone from hours and minutes offset.

        Args:
            hours: Hour component of offset (-14 to +14). Sign determines
                direction (positive = east of UTC).
            minutes: Minute component of offset (0 to 59). Must be non-negative;
                the sign is determined by the hours parameter.

        Returns:
            A new Timezone instance.

        Raises:
            TimezoneError: If hours or minutes are out of valid range.

        Examples:
            >>> Timezone.from_hours(5, 30).offset_seconds
            19800

            >>> Timezone.from_hours(-5).offset_seconds
            -18000
        """
        if not isinstance(hours, int):
            raise TimezoneError(
                f"hours must be an integer, got {type(hours).__name__}"
            )
        if not isinstance(minutes, int):
            raise TimezoneError(
                f"minutes must be an integer, got {type(minutes).__name__}"
            )

        if minutes < 0 or minutes > 59:
            raise TimezoneError(f"minutes must be 0-59, got {minutes}")

        # Minutes take the sign from hours
        if hours >= 0:
            offset_seconds = hours * 3600 + minutes * 60
        else:
            offset_seconds = hours * 3600 - minutes * 60

        return cls(offset_seconds)

    @classmethod
    def from_string(cls, s: str) -> Timezone:
        """Parse an offset string into a fixed Timezone.

        Supported formats:
            - "Z" or "z": UTC
            - "UTC": UTC
            - "+HH:MM" or "-HH:MM": Hours and minutes with colon
            - "+HHMM" or "-HHMM": Hours and minutes without colon
            - "+HH" or "-HH": Hours only

        Raises:
            TimezoneError: If the string cannot be parsed.

        Examples:
            >>> Timezone.from_string("+05:30").offset_seconds
            19800

            >>> Timezone.from_string("-0500").offset_seconds
            -18000
        """
        if not isinstance(s, str):
            raise TimezoneError(f"Expected string, got {type(s).__name__}")

        s = s.strip()

        if s.upper() in ("Z", "UTC"):
            return cls.utc()

        match = re.match(r"^([+-])(\d{1,2})(?::?(\d{2}))?$", s)
        if not match:
            raise TimezoneError(f"Cannot parse timezone string: {s!r}")

        sign_str, hours_str, minutes_str = match.groups()

        sign = 1 if sign_str == "+" else -1
        hours = int(hours_str)
        minutes = int(minutes_str) if minutes_str else 0

        if hours > 14 or (hours == 14 and minutes > 0):
            raise TimezoneError(f"Offset hours out of range: {s!r}")

        if minutes > 59:
            raise TimezoneError(f"Offset minutes out of range: {s!r}")

        return cls(sign * (hours * 3600 + minutes * 60))

    @classmethod
    def named(cls, key: str) -> Timezone:
        """Return the IANA timezone with the given key.

        Args:
            key: An IANA zone name such as "America/New_York".

        Raises:
            TimezoneError: If no such zone exists.

        Examples:
            >>> Timezone.named("Asia/Tokyo").offset_at(Instant(0))
            32400
        """
        try:
            zone = ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise TimezoneError(f"Unknown timezone: {key!r}") from exc
        return cls._from_rules(zone, key)

    @classmethod
    def from_tzinfo(cls, tz: _datetime.tzinfo) -> Timezone:
        """Wrap a ``datetime.tzinfo``.

        ``datetime.timezone`` objects become fixed offsets; anything else is
        used as a rule set.
        """
        if isinstance(tz, _datetime.timezone):
            offset = tz.utcoffset(None)
            seconds = offset // _ONE_SECOND
            return cls.utc() if seconds == 0 else cls(seconds)
        if isinstance(tz, ZoneInfo):
            return cls._from_rules(tz, tz.key)
        return cls._from_rules(tz, None)

    @classmethod
    def local(cls) -> Timezone:
        """Return the process-local timezone.

        Resolution order: the ``TZ`` environment variable, the
        ``/etc/localtime`` zone file, and finally the fixed offset the
        operating system currently reports.
        """
        if cls._local_instance is None:
            cls._local_instance = cls._resolve_local()
        return cls._local_instance

    @classmethod
    def _resolve_local(cls) -> Timezone:
        tz_env = os.environ.get("TZ", "").lstrip(":")
        if tz_env:
            if tz_env.startswith("/"):
                zone = _zone_from_file(Path(tz_env))
                if zone is not None:
                    logger.debug("local timezone loaded from TZ file %s", tz_env)
                    return zone
            else:
                try:
                    zone = cls.of(tz_env)
                except TimezoneError:
                    logger.debug("TZ=%r is not a known zone, ignoring", tz_env)
                else:
                    logger.debug("local timezone taken from TZ=%r", tz_env)
                    return zone

        if _LOCALTIME_PATH.exists():
            target = str(_LOCALTIME_PATH.resolve())
            if "zoneinfo/" in target:
                key = target.split("zoneinfo/", 1)[1]
                try:
                    zone = cls.named(key)
                except TimezoneError:
                    pass
                else:
                    logger.debug("local timezone resolved from %s as %s", _LOCALTIME_PATH, key)
                    return zone
            zone = _zone_from_file(_LOCALTIME_PATH)
            if zone is not None:
                logger.debug("local timezone loaded from %s", _LOCALTIME_PATH)
                return zone

        offset = _time.localtime().tm_gmtoff
        logger.warning(
            "could not determine local timezone rules, using fixed offset %+d seconds",
            offset,
        )
        return cls.utc() if offset == 0 else cls(offset, "local")

    @classmethod
    def clear_local_cache(cls) -> None:
        """Forget the resolved local zone so the next local() re-resolves it."""
        cls._local_instance = None

    @classmethod
    def of(cls, value: Timezone | _datetime.tzinfo | str | None) -> Timezone:
        """Resolve a zone designator to a Timezone.

        Accepts a Timezone (returned as is), a ``datetime.tzinfo``, None or
        "local" for the process-local zone, "UTC"/"Z", an offset string, or
        an IANA key.

        Raises:
            TimezoneError: If the designator cannot be resolved.

        Examples:
            >>> Timezone.of("UTC") is Timezone.utc()
            True

            >>> Timezone.of("+01:00").offset_seconds
            3600
        """
        if isinstance(value, Timezone):
            return value
        if value is None:
            return cls.local()
        if isinstance(value, _datetime.tzinfo):
            return cls.from_tzinfo(value)
        if not isinstance(value, str):
            raise TimezoneError(
                f"Cannot resolve timezone from {type(value).__name__}"
            )

        s = value.strip()
        if s.lower() == "local":
            return cls.local()
        if s.upper() in ("Z", "UTC"):
            return cls.utc()
        if s[:1] in ("+", "-"):
            return cls.from_string(s)
        return cls.named(s)

    # Properties

    @property
    def is_fixed(self) -> bool:
        return self._zone is None

    @property
    def offset_seconds(self) -> int:
        """Return the fixed UTC offset in seconds.

        Raises:
            TimezoneError: For rule-based zones, whose offset depends on the
                instant; use offset_at() instead.
        """
        if self._offset_seconds is None:
            raise TimezoneError(
                f"{self} has no fixed offset; use offset_at(instant)"
            )
        return self._offset_seconds

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def is_utc(self) -> bool:
        """Return True if this is a fixed zero offset."""
        return self._offset_seconds == 0

    def offset_at(self, instant: Instant) -> int:
        """Return the UTC offset in seconds in effect at the given instant.

        Args:
            instant: The instant to evaluate the rules at.

        Returns:
            Offset from UTC in seconds, positive east of UTC.
        """
        if self._offset_seconds is not None:
            return self._offset_seconds
        return self._rule_offset(instant.unix_seconds)

    def _rule_offset(self, unix_seconds: int) -> int:
        assert self._zone is not None
        seconds = min(max(unix_seconds, _MIN_RULE_SECONDS), _MAX_RULE_SECONDS)
        utc_dt = _EPOCH + _datetime.timedelta(seconds=seconds)
        offset = utc_dt.astimezone(self._zone).utcoffset()
        if offset is None:
            raise TimezoneError(f"{self} returned no UTC offset")
        return offset // _ONE_SECOND

    def to_tzinfo(self) -> _datetime.tzinfo:
        """Return an equivalent ``datetime.tzinfo``."""
        if self._zone is not None:
            return self._zone
        if self._offset_seconds == 0:
            return _UTC
        return _datetime.timezone(_datetime.timedelta(seconds=self._offset_seconds))

    def __eq__(self, other: object) -> bool:
        """Fixed zones compare by offset, rule-based zones by key."""
        if not isinstance(other, Timezone):
            return NotImplemented
        if self._zone is None or other._zone is None:
            return self._zone is None and other._zone is None and (
                self._offset_seconds == other._offset_seconds
            )
        if self._name is not None and other._name is not None:
            return self._name == other._name
        return self._zone is other._zone

    def __hash__(self) -> int:
        if self._zone is None:
            return hash(self._offset_seconds)
        if self._name is not None:
            return hash(self._name)
        return hash(id(self._zone))

    def __repr__(self) -> str:
        if self._zone is not None:
            return f"Timezone.named({self._name!r})"
        if self._name:
            return f"Timezone(offset_seconds={self._offset_seconds}, name={self._name!r})"
        return f"Timezone(offset_seconds={self._offset_seconds})"

    def __str__(self) -> str:
        """Return "UTC", "+05:30", "-05:00", or the zone key."""
        if self._zone is not None:
            return self._name if self._name else repr(self._zone)

        assert self._offset_seconds is not None
        if self._offset_seconds == 0:
            return self._name if self._name else "UTC"

        total_minutes = abs(self._offset_seconds) // 60
        hours = total_minutes // 60
        minutes = total_minutes % 60
        sign = "+" if self._offset_seconds >= 0 else "-"

        return f"{sign}{hours:02d}:{minutes:02d}"


def _zone_from_file(path: Path) -> Timezone | None:
    try:
        with path.open("rb") as fobj:
            zone = ZoneInfo.from_file(fobj, key="localtime")
    except (OSError, ValueError) as exc:
        logger.debug("cannot load zone file %s: %s", path, exc)
        return None
    return Timezone._from_rules(zone, "localtime")


__all__ = ["Timezone"]
