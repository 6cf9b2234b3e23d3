"""Tests for timezone projection and instant-based comparison."""

from __future__ import annotations

import pytest


class TestInTimezone:
    """Tests for DateTime.in_timezone() and friends."""

    def test_fields_change_instant_does_not(self) -> None:
        from caltime import DateTime

        dt = DateTime(2024, 1, 15, 12)
        shifted = dt.in_timezone("+05:30")
        assert (shifted.hour, shifted.minute) == (17, 30)
        assert shifted.instant == dt.instant
        assert shifted == dt

    def test_crosses_date_line(self) -> None:
        from caltime import DateTime

        dt = DateTime(2024, 12, 31, 20).in_timezone("Pacific/Kiritimati")
        assert (dt.year, dt.month, dt.day, dt.hour) == (2025, 1, 1, 10)

    def test_into_rule_based_zone(self, new_york) -> None:
        from caltime import DateTime

        summer = DateTime(2024, 7, 4, 16).in_timezone(new_york)
        winter = DateTime(2024, 1, 4, 16).in_timezone(new_york)
        assert summer.hour == 12
        assert winter.hour == 11

    def test_projection_into_overlap(self, new_york) -> None:
        """Both instants of a repeated hour keep their own offsets."""
        from caltime import DateTime

        first = DateTime(2024, 11, 3, 5, 30).in_timezone(new_york)
        second = DateTime(2024, 11, 3, 6, 30).in_timezone(new_york)
        assert (first.hour, first.minute) == (second.hour, second.minute) == (1, 30)
        assert first.utc_offset == -4 * 3600
        assert second.utc_offset == -5 * 3600
        assert first < second

    def test_to_utc(self, new_york) -> None:
        from caltime import DateTime

        dt = DateTime(2024, 7, 4, 12, timezone=new_york).to_utc()
        assert dt.timezone.is_utc
        assert dt.hour == 16

    def test_to_local_uses_process_zone(self, monkeypatch) -> None:
        """to_local() reads the host zone, not the configured default."""
        from caltime import DateTime, Timezone, configure

        monkeypatch.setenv("TZ", "Asia/Tokyo")
        Timezone.clear_local_cache()
        configure(timezone="Europe/Paris")

        dt = DateTime(2024, 1, 1, timezone="UTC")
        assert dt.to_local().timezone.name == "Asia/Tokyo"
        assert dt.to_local().hour == 9
        assert dt.in_timezone(None).hour == 9
        assert dt.in_timezone(None).timezone == Timezone.local()
        assert DateTime(2024, 1, 1, 12).timezone.name == "Europe/Paris"

    def test_calendar_is_kept(self) -> None:
        from caltime import DateTime, GregorianCalendar

        cal = GregorianCalendar(disambiguate="later")
        dt = DateTime(2024, 1, 1, calendar=cal).in_timezone("+01:00")
        assert dt.calendar is cal


class TestEqualityByInstant:
    """Tests for comparison and hashing."""

    def test_same_instant_different_fields(self) -> None:
        from caltime import DateTime

        utc = DateTime(2024, 6, 1, 12)
        paris = utc.in_timezone("Europe/Paris")
        assert utc == paris
        assert str(utc) != str(paris)
        assert hash(utc) == hash(paris)
        assert len({utc, paris}) == 1

    def test_independently_constructed(self) -> None:
        from caltime import DateTime

        assert DateTime(2024, 6, 1, 14, timezone="Europe/Paris") == DateTime(2024, 6, 1, 12)

    def test_ordering_across_zones(self) -> None:
        from caltime import DateTime

        tokyo = DateTime(2024, 1, 1, 8, timezone="Asia/Tokyo")  # 2023-12-31T23:00Z
        london = DateTime(2024, 1, 1, 0, timezone="Europe/London")
        assert tokyo < london
        assert london > tokyo
        assert sorted([london, tokyo]) == [tokyo, london]

    def test_comparison_with_other_types(self) -> None:
        from caltime import DateTime

        dt = DateTime(2024, 1, 1)
        assert dt != "2024-01-01"
        with pytest.raises(TypeError):
            dt < 5  # type: ignore[operator]
