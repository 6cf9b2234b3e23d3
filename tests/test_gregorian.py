"""Tests for GregorianCalendar and the calendar registry."""

from __future__ import annotations

import datetime

import pytest

from caltime import (
    AmbiguousOrMissingLocalTime,
    CalendarComponents,
    GregorianCalendar,
    Instant,
    InvalidCalendarFields,
    Timezone,
    TimeUnit,
)
from caltime.calendars import calendar_for, register_calendar, registered_calendars


def _utc_instant(*args: int) -> Instant:
    """Instant of a UTC wall time, computed with the standard library."""
    dt = datetime.datetime(*args, tzinfo=datetime.timezone.utc)
    return Instant.from_timestamp(int(dt.timestamp()))


def _components(cal, tz, *fields: int) -> CalendarComponents:
    padded = tuple(fields) + (0,) * (7 - len(fields))
    return CalendarComponents(*padded, calendar=cal, timezone=tz)


class TestForwardAndReverse:
    """Tests for fields_to_instant and instant_to_fields."""

    def test_unix_epoch(self) -> None:
        """1970-01-01T00:00Z is instant zero."""
        cal = GregorianCalendar()
        utc = Timezone.utc()
        assert cal.fields_to_instant(_components(cal, utc, 1970, 1, 1)) == Instant(0)
        assert cal.instant_to_fields(Instant(0), utc) == (1970, 1, 1, 0, 0, 0, 0)

    def test_fixed_offset(self) -> None:
        """Fixed offsets shift the wall time."""
        cal = GregorianCalendar()
        tz = Timezone.from_hours(5, 30)
        instant = cal.fields_to_instant(_components(cal, tz, 2024, 1, 15, 17, 30))
        assert instant == _utc_instant(2024, 1, 15, 12, 0)

    def test_overflow_normalizes(self) -> None:
        """Overflowed fields come back canonical."""
        cal = GregorianCalendar()
        utc = Timezone.utc()
        instant = cal.fields_to_instant(_components(cal, utc, 2023, 2, 29, 24, 0, 0))
        assert cal.instant_to_fields(instant, utc) == (2023, 3, 2, 0, 0, 0, 0)

    def test_nanosecond_precision(self) -> None:
        """Sub-second nanoseconds survive both directions."""
        cal = GregorianCalendar()
        utc = Timezone.utc()
        instant = cal.fields_to_instant(_components(cal, utc, 2024, 1, 1, 0, 0, 0, 123_456_789))
        assert instant.unix_nanos % 1_000_000_000 == 123_456_789
        assert cal.instant_to_fields(instant, utc)[6] == 123_456_789

    def test_pre_epoch(self) -> None:
        """Instants before 1970 decompose correctly."""
        cal = GregorianCalendar()
        assert cal.instant_to_fields(Instant(-1), Timezone.utc()) == (
            1969, 12, 31, 23, 59, 59, 999_999_999,
        )


class TestYearRange:
    """Tests for the supported year range."""

    def test_year_10000_rejected(self) -> None:
        """Fields normalizing past 9999 cannot be resolved."""
        cal = GregorianCalendar()
        with pytest.raises(InvalidCalendarFields):
            cal.fields_to_instant(_components(cal, Timezone.utc(), 9999, 12, 32))

    def test_minimum_year_accepted(self) -> None:
        """Year -9999 is in range."""
        cal = GregorianCalendar()
        utc = Timezone.utc()
        instant = cal.fields_to_instant(_components(cal, utc, -9999, 1, 1))
        assert cal.instant_to_fields(instant, utc)[:3] == (-9999, 1, 1)

    def test_reverse_out_of_range(self) -> None:
        """Instants beyond year 9999 cannot be decomposed."""
        cal = GregorianCalendar()
        far = Instant(400 * 366 * 86400 * 10**9 * 25)
        with pytest.raises(InvalidCalendarFields):
            cal.instant_to_fields(far, Timezone.utc())


class TestDaylightSaving:
    """Tests for wall times in DST gaps and overlaps (America/New_York, 2024)."""

    def test_unambiguous_wall_time(self, new_york) -> None:
        """Ordinary winter and summer times use the offset in force."""
        cal = GregorianCalendar()
        winter = cal.fields_to_instant(_components(cal, new_york, 2024, 1, 15, 12))
        summer = cal.fields_to_instant(_components(cal, new_york, 2024, 7, 15, 12))
        assert winter == _utc_instant(2024, 1, 15, 17)
        assert summer == _utc_instant(2024, 7, 15, 16)

    def test_gap_compatible_shifts_forward(self, new_york) -> None:
        """02:30 on the spring-forward day becomes 03:30 EDT."""
        cal = GregorianCalendar()
        instant = cal.fields_to_instant(_components(cal, new_york, 2024, 3, 10, 2, 30))
        assert instant == _utc_instant(2024, 3, 10, 7, 30)
        assert cal.instant_to_fields(instant, new_york)[:5] == (2024, 3, 10, 3, 30)

    def test_gap_earlier_shifts_backward(self, new_york) -> None:
        """Under "earlier", 02:30 becomes 01:30 EST."""
        cal = GregorianCalendar(disambiguate="earlier")
        instant = cal.fields_to_instant(_components(cal, new_york, 2024, 3, 10, 2, 30))
        assert instant == _utc_instant(2024, 3, 10, 6, 30)
        assert cal.instant_to_fields(instant, new_york)[:5] == (2024, 3, 10, 1, 30)

    def test_gap_later_shifts_forward(self, new_york) -> None:
        """Under "later", 02:30 becomes 03:30 EDT."""
        cal = GregorianCalendar(disambiguate="later")
        instant = cal.fields_to_instant(_components(cal, new_york, 2024, 3, 10, 2, 30))
        assert instant == _utc_instant(2024, 3, 10, 7, 30)

    def test_overlap_compatible_takes_earlier(self, new_york) -> None:
        """01:30 on the fall-back day resolves to 01:30 EDT."""
        cal = GregorianCalendar()
        instant = cal.fields_to_instant(_components(cal, new_york, 2024, 11, 3, 1, 30))
        assert instant == _utc_instant(2024, 11, 3, 5, 30)

    def test_overlap_later(self, new_york) -> None:
        """Under "later", 01:30 resolves to 01:30 EST."""
        cal = GregorianCalendar(disambiguate="later")
        instant = cal.fields_to_instant(_components(cal, new_york, 2024, 11, 3, 1, 30))
        assert instant == _utc_instant(2024, 11, 3, 6, 30)
        assert cal.instant_to_fields(instant, new_york)[:5] == (2024, 11, 3, 1, 30)

    def test_raise_on_gap(self, new_york) -> None:
        """Under "raise", a skipped wall time is an error."""
        cal = GregorianCalendar(disambiguate="raise")
        with pytest.raises(AmbiguousOrMissingLocalTime):
            cal.fields_to_instant(_components(cal, new_york, 2024, 3, 10, 2, 30))

    def test_raise_on_overlap(self, new_york) -> None:
        """Under "raise", a repeated wall time is an error."""
        cal = GregorianCalendar(disambiguate="raise")
        with pytest.raises(AmbiguousOrMissingLocalTime):
            cal.fields_to_instant(_components(cal, new_york, 2024, 11, 3, 1, 30))

    def test_preferred_offset_picks_repeated_instant(self, new_york) -> None:
        """An offset matching one of the repeated instants selects it."""
        cal = GregorianCalendar()
        components = _components(cal, new_york, 2024, 11, 3, 1, 30)
        est = cal.fields_to_instant(components, prefer_offset=-5 * 3600)
        edt = cal.fields_to_instant(components, prefer_offset=-4 * 3600)
        assert est == _utc_instant(2024, 11, 3, 6, 30)
        assert edt == _utc_instant(2024, 11, 3, 5, 30)

    def test_unmatched_preferred_offset_uses_policy(self, new_york) -> None:
        """An offset neither instant has leaves the choice to the policy."""
        cal = GregorianCalendar(disambiguate="later")
        components = _components(cal, new_york, 2024, 11, 3, 1, 30)
        instant = cal.fields_to_instant(components, prefer_offset=3600)
        assert instant == _utc_instant(2024, 11, 3, 6, 30)

    def test_preferred_offset_ignored_outside_overlap(self, new_york) -> None:
        """Unambiguous and skipped wall times do not consult the offset."""
        cal = GregorianCalendar()
        ordinary = _components(cal, new_york, 2024, 1, 15, 12)
        skipped = _components(cal, new_york, 2024, 3, 10, 2, 30)
        assert cal.fields_to_instant(ordinary, prefer_offset=-4 * 3600) == _utc_instant(
            2024, 1, 15, 17
        )
        assert cal.fields_to_instant(skipped, prefer_offset=-5 * 3600) == _utc_instant(
            2024, 3, 10, 7, 30
        )

    def test_preferred_offset_satisfies_raise(self, new_york) -> None:
        """Under "raise", a matching offset resolves the repeated hour."""
        cal = GregorianCalendar(disambiguate="raise")
        components = _components(cal, new_york, 2024, 11, 3, 1, 30)
        instant = cal.fields_to_instant(components, prefer_offset=-5 * 3600)
        assert instant == _utc_instant(2024, 11, 3, 6, 30)
        with pytest.raises(AmbiguousOrMissingLocalTime):
            cal.fields_to_instant(components, prefer_offset=0)

    def test_raise_allows_ordinary_times(self, new_york) -> None:
        """Under "raise", unambiguous wall times still resolve."""
        cal = GregorianCalendar(disambiguate="raise")
        instant = cal.fields_to_instant(_components(cal, new_york, 2024, 3, 10, 3, 30))
        assert instant == _utc_instant(2024, 3, 10, 7, 30)

    def test_bad_policy(self) -> None:
        """Unknown disambiguation policies are rejected."""
        with pytest.raises(ValueError):
            GregorianCalendar(disambiguate="sometimes")  # type: ignore[arg-type]


class TestUnitQueries:
    """Tests for ordinality and component."""

    def test_day_of_year(self) -> None:
        """Feb 29, 2024 is day 60."""
        cal = GregorianCalendar()
        utc = Timezone.utc()
        instant = cal.fields_to_instant(_components(cal, utc, 2024, 2, 29))
        assert cal.ordinality(TimeUnit.DAY, TimeUnit.YEAR, instant, utc) == 60

    def test_weekday(self) -> None:
        """Jan 15, 2024 is a Monday, day 2 of a week starting on Sunday."""
        cal = GregorianCalendar()
        utc = Timezone.utc()
        instant = cal.fields_to_instant(_components(cal, utc, 2024, 1, 15))
        assert cal.component(TimeUnit.WEEKDAY, instant, utc) == 2
        assert cal.ordinality(TimeUnit.DAY, TimeUnit.WEEK, instant, utc) == 2

    def test_field_components(self) -> None:
        """Components read back single fields."""
        cal = GregorianCalendar()
        utc = Timezone.utc()
        instant = cal.fields_to_instant(_components(cal, utc, 2024, 6, 7, 8, 9, 10))
        assert cal.component(TimeUnit.YEAR, instant, utc) == 2024
        assert cal.component(TimeUnit.MINUTE, instant, utc) == 9
        assert cal.ordinality(TimeUnit.HOUR, TimeUnit.DAY, instant, utc) == 9

    def test_unsupported_ordinality(self) -> None:
        """Nonsensical unit pairs raise ValueError."""
        cal = GregorianCalendar()
        with pytest.raises(ValueError):
            cal.ordinality(TimeUnit.YEAR, TimeUnit.DAY, Instant(0), Timezone.utc())


class TestRegistry:
    """Tests for calendar lookup by identifier."""

    def test_lookup_is_case_insensitive(self) -> None:
        """"Gregorian" and "gregorian" are the same calendar."""
        assert calendar_for("Gregorian") == GregorianCalendar()

    def test_options_are_passed(self) -> None:
        """Factory options reach the calendar."""
        cal = calendar_for("gregorian", disambiguate="later")
        assert cal == GregorianCalendar(disambiguate="later")

    def test_instance_returned_as_is(self) -> None:
        """A Calendar instance needs no lookup."""
        cal = GregorianCalendar(disambiguate="raise")
        assert calendar_for(cal) is cal

    def test_unknown_identifier(self) -> None:
        """Unregistered identifiers cannot be resolved."""
        with pytest.raises(InvalidCalendarFields):
            calendar_for("hebrew")

    def test_register_custom_factory(self) -> None:
        """New identifiers can be registered."""
        register_calendar("Proleptic", GregorianCalendar)
        assert "proleptic" in registered_calendars()
        assert isinstance(calendar_for("proleptic"), GregorianCalendar)


class TestLogging:
    """Tests for disambiguation log records."""

    def test_gap_resolution_is_logged(self, new_york, caplog) -> None:
        """Resolving a skipped wall time leaves a debug record."""
        import logging

        cal = GregorianCalendar()
        with caplog.at_level(logging.DEBUG, logger="caltime.calendars.gregorian"):
            cal.fields_to_instant(_components(cal, new_york, 2024, 3, 10, 2, 30))
        assert any("skipped" in record.getMessage() for record in caplog.records)
