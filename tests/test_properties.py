"""Property-based tests for normalization, projection and arithmetic."""

from __future__ import annotations

from hypothesis import HealthCheck, given, settings, strategies as st

from caltime import DateTime, Duration, Instant, Timezone

# The autouse defaults fixture only pins process configuration, which no
# example changes.
PROPERTY_SETTINGS = settings(
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

FIXED_ZONES = ["UTC", "+05:30", "-08:00", "+14:00", "-03:45"]
RULE_ZONES = [
    "America/New_York",
    "Europe/Berlin",
    "Australia/Lord_Howe",
    "America/Sao_Paulo",
    "Asia/Kolkata",
]

raw_fields = st.tuples(
    st.integers(min_value=100, max_value=9000),
    st.integers(min_value=-24, max_value=36),
    st.integers(min_value=-60, max_value=90),
    st.integers(min_value=-48, max_value=72),
    st.integers(min_value=-200, max_value=200),
    st.integers(min_value=-200, max_value=200),
    st.integers(min_value=-2 * 10**9, max_value=2 * 10**9),
)
fixed_zones = st.sampled_from(FIXED_ZONES).map(Timezone.of)
any_zones = st.sampled_from(FIXED_ZONES + RULE_ZONES).map(Timezone.of)
# Unix nanoseconds between roughly the years 100 and 9000.
instants = st.integers(min_value=-58 * 10**18, max_value=220 * 10**18).map(Instant)
durations = st.builds(
    Duration,
    days=st.integers(min_value=-5000, max_value=5000),
    hours=st.integers(min_value=-100, max_value=100),
    minutes=st.integers(min_value=-1000, max_value=1000),
    seconds=st.integers(min_value=-1000, max_value=1000),
    milliseconds=st.integers(min_value=-5000, max_value=5000),
    nanoseconds=st.integers(min_value=-10**7, max_value=10**7),
)


def _build(fields: tuple[int, ...], tz: Timezone) -> DateTime:
    year, month, day, hour, minute, second, nanosecond = fields
    return DateTime(year, month, day, hour, minute, second, nanosecond=nanosecond, timezone=tz)


class TestNormalization:
    """Canonical fields are a fixpoint of normalization."""

    @given(fields=raw_fields, tz=any_zones)
    @PROPERTY_SETTINGS
    def test_second_pass_is_stable(self, fields: tuple[int, ...], tz: Timezone) -> None:
        first = _build(fields, tz)
        second = _build(first.components.fields, tz)
        assert second.components == first.components
        assert second.instant == first.instant

    @given(fields=raw_fields, tz=any_zones)
    @PROPERTY_SETTINGS
    def test_fields_are_canonical(self, fields: tuple[int, ...], tz: Timezone) -> None:
        dt = _build(fields, tz)
        assert 1 <= dt.month <= 12
        assert 1 <= dt.day <= 31
        assert 0 <= dt.hour <= 23
        assert 0 <= dt.minute <= 59
        assert 0 <= dt.second <= 59
        assert 0 <= dt.nanosecond < 10**9

    @given(
        year=st.integers(min_value=1, max_value=9998),
        month=st.sampled_from([1, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12]),
    )
    @PROPERTY_SETTINGS
    def test_day_32_rolls_into_next_month(self, year: int, month: int) -> None:
        dt = DateTime(year, month, 32)
        expected_month = month % 12 + 1
        assert dt.month == expected_month
        assert dt.year == (year + 1 if month == 12 else year)
        assert dt.day == (2 if month in (4, 6, 9, 11) else 1)


class TestProjection:
    """Changing timezone never moves the instant."""

    @given(fields=raw_fields, tz=any_zones, target=any_zones)
    @PROPERTY_SETTINGS
    def test_instant_fixpoint(self, fields: tuple[int, ...], tz: Timezone, target: Timezone) -> None:
        dt = _build(fields, tz)
        projected = dt.in_timezone(target)
        assert projected.instant == dt.instant
        assert projected == dt
        assert projected.in_timezone(tz).components == dt.components


class TestArithmetic:
    """Additive identity and inverse."""

    @given(fields=raw_fields, tz=any_zones)
    @PROPERTY_SETTINGS
    def test_additive_identity(self, fields: tuple[int, ...], tz: Timezone) -> None:
        dt = _build(fields, tz)
        assert dt.plus() == dt
        assert dt.plus_duration(Duration.zero()) == dt

    @given(instant=instants, tz=any_zones)
    @PROPERTY_SETTINGS
    def test_additive_identity_from_instant(self, instant: Instant, tz: Timezone) -> None:
        """Values read from any instant, repeated hours included, stay put."""
        for dt in (
            DateTime.from_instant(instant, timezone=tz),
            DateTime.from_instant(instant).in_timezone(tz),
        ):
            assert dt.plus().instant == dt.instant
            assert dt.plus_duration(Duration.zero()).instant == dt.instant
            m = dt.mutable()
            m.add()
            assert m.instant == dt.instant
            assert m.components == dt.components

    @given(fields=raw_fields, tz=fixed_zones, duration=durations)
    @PROPERTY_SETTINGS
    def test_additive_inverse(self, fields: tuple[int, ...], tz: Timezone, duration: Duration) -> None:
        dt = _build(fields, tz)
        assert dt.plus_duration(duration).minus_duration(duration) == dt
        assert (dt + duration) - duration == dt

    @given(fields=raw_fields, tz=fixed_zones, duration=durations)
    @PROPERTY_SETTINGS
    def test_fixed_zone_duration_is_elapsed_time(
        self, fields: tuple[int, ...], tz: Timezone, duration: Duration
    ) -> None:
        dt = _build(fields, tz)
        assert (dt + duration) - dt == duration

    @given(fields=raw_fields, tz=any_zones)
    @PROPERTY_SETTINGS
    def test_mutable_add_matches_plus(self, fields: tuple[int, ...], tz: Timezone) -> None:
        dt = _build(fields, tz)
        m = dt.mutable()
        m.add(months=7, days=-3, hours=5)
        assert m.components == dt.plus(months=7, days=-3, hours=5).components


class TestDateOnly:
    """date_only() zeroes the time of day."""

    @given(fields=raw_fields, tz=fixed_zones)
    @PROPERTY_SETTINGS
    def test_zeroed(self, fields: tuple[int, ...], tz: Timezone) -> None:
        day = _build(fields, tz).date_only()
        assert (day.hour, day.minute, day.second, day.nanosecond) == (0, 0, 0, 0)
        assert day.time_of_day().is_zero
