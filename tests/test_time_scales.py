# tests/test_time_scales.py

import math
import random
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from lunaris.core.errors import InvalidDate
from lunaris.reference import time_scales as ts


def test_meeus_example_7a_7b_julian_day():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Examples 7.a and 7.b.
    """
    assert ts.julian_day(1957, 10, 4.81) == pytest.approx(2436116.31, abs=1e-9)
    assert ts.julian_day(333, 1, 27.5) == pytest.approx(1842713.0, abs=1e-9)


def test_known_epochs():
    assert ts.julian_day(2000, 1, 1.5) == 2451545.0
    assert ts.julian_day(-4712, 1, 1.5) == 0.0
    # Gregorian reform: Thursday 4 October 1582 (Julian) is followed by Friday 15 October
    assert ts.julian_day(1582, 10, 4.0) == 2299159.5
    assert ts.julian_day(1582, 10, 15.0) == 2299160.5

    unix_dt = datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert ts.datetime_utc_to_jd(unix_dt) == 2440587.5


def test_civil_instant_to_julian_day():
    # 2022-01-16 14:26:18 UTC
    jd = ts.julian_day_from_hms(2022, 1, 16, 14, 26, 18)
    assert jd == pytest.approx(2459596.101598, abs=1e-6)


def test_meeus_example_7c_calendar_date():
    cd = ts.calendar_date(2436116.31)
    assert (cd.year, cd.month) == (1957, 10)
    assert cd.day == pytest.approx(4.81, abs=1e-6)

    cd = ts.calendar_date(1842713.0)
    assert cd.as_tuple() == (333, 1, pytest.approx(27.5, abs=1e-9))


def test_jd_calendar_roundtrip():
    random.seed(42)
    for _ in range(5000):
        jd_in = random.uniform(0.0, 3000000.0)
        cd = ts.calendar_date(jd_in)
        jd_out = ts.julian_day(cd.year, cd.month, cd.day)
        assert jd_in == pytest.approx(jd_out, abs=1e-7)


def test_julian_day_increases_with_calendar_time():
    random.seed(7)
    instants = []
    while len(instants) < 3000:
        year = random.randint(-4712, 3000)
        month = random.randint(1, 12)
        day = 1.0 + random.random() * ts.days_in_month(year, month)
        if (year, month) == (1582, 10) and 5.0 <= day < 15.0:
            continue
        instants.append((year, month, day))
    instants.sort()

    jds = [ts.julian_day(*c) for c in instants]
    for (c0, j0), (c1, j1) in zip(zip(instants, jds), zip(instants[1:], jds[1:])):
        if c0 != c1:
            assert j1 > j0, (c0, c1)


def test_julian_day_increases_across_boundaries():
    walk = [
        (1582, 10, 3.5),
        (1582, 10, 4.0),
        (1582, 10, 4.999),
        (1582, 10, 15.0),
        (1582, 10, 31.9),
        (1582, 11, 1.0),
        (1899, 12, 31.75),
        (1900, 1, 1.0),
        (1900, 2, 28.9),
        (1900, 3, 1.0),
        (1999, 12, 31.99),
        (2000, 1, 1.0),
        (2000, 2, 29.5),
        (2000, 3, 1.0),
        (2024, 12, 31.999),
        (2025, 1, 1.0),
    ]
    jds = [ts.julian_day(*c) for c in walk]
    assert all(b > a for a, b in zip(jds, jds[1:]))
    # the ten dropped days take no time
    assert jds[3] - jds[2] == pytest.approx(0.001, abs=1e-9)


def test_jd_datetime_roundtrip():
    """
    Sub-day UTC round-tripping between continuous Julian Dates
    and timezone-aware datetime objects.
    """
    random.seed(42)
    for _ in range(1000):
        jd_in = random.uniform(2400000.5, 2500000.5)
        dt = ts.jd_to_datetime_utc(jd_in)
        jd_out = ts.datetime_utc_to_jd(dt)
        # 1e-8 days is roughly a millisecond
        assert jd_in == pytest.approx(jd_out, abs=1e-8)


def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        ts.datetime_utc_to_jd(datetime(2000, 1, 1))


@pytest.mark.parametrize(
    "args",
    [
        (1582, 10, 10.0),   # dropped by the reform
        (2021, 2, 29.0),    # not a leap year
        (1900, 2, 29.0),    # Gregorian century rule
        (2021, 13, 1.0),
        (2021, 4, 0.5),
        (-4713, 12, 31.0),  # before the epoch
        (2000, 1, math.nan),
    ],
)
def test_invalid_calendar_dates(args):
    with pytest.raises(InvalidDate):
        ts.julian_day(*args)


def test_julian_leap_year_before_reform():
    # 1500 is a leap year in the Julian calendar
    assert ts.days_in_month(1500, 2) == 29
    assert ts.days_in_month(1900, 2) == 28
    assert ts.days_in_month(2000, 2) == 29


def test_invalid_time_of_day_and_jd():
    with pytest.raises(InvalidDate):
        ts.julian_day_from_hms(2022, 1, 16, 24, 0, 0.0)
    with pytest.raises(InvalidDate):
        ts.calendar_date(-1.0)
    with pytest.raises(InvalidDate):
        ts.calendar_date(math.inf)


def test_invalid_date_is_value_error():
    with pytest.raises(ValueError):
        ts.julian_day(2021, 2, 30.0)


def test_decimal_year():
    # 2003-08-28 0h: 239 days into a 365-day year
    assert ts.decimal_year(ts.julian_day(2003, 8, 28.0)) == pytest.approx(2003 + 239 / 365, abs=1e-12)
    assert ts.decimal_year(ts.julian_day(2000, 1, 1.0)) == pytest.approx(2000.0, abs=1e-12)


def test_utc_to_tt_uses_leap_seconds():
    jd_utc = 2459596.101598
    # 2022: TAI-UTC = 37 s, TT-TAI = 32.184 s
    assert ts.utc_to_tt(jd_utc) == pytest.approx(jd_utc + 69.184 / 86400.0, abs=1e-10)


@pytest.fixture
def mock_delta_t():
    """
    Force the time_scales module to return exactly 69.3 seconds for Delta T,
    bypassing the packaged table for this test.
    """
    with patch("lunaris.reference.time_scales.delta_t_seconds") as mock:
        mock.return_value = 69.3
        yield mock


def test_utc_to_ut1(mock_delta_t):
    jd_utc = 2459596.101598
    # UT1 - UTC = -(ΔT - leap - 32.184) = -0.116 s
    assert ts.ut1_minus_utc(jd_utc) == pytest.approx(-0.116, abs=1e-9)
    assert ts.utc_to_ut1(jd_utc) == pytest.approx(jd_utc - 0.116 / 86400.0, abs=1e-10)


def test_tt_utc_conversion_stability():
    """
    The fixed-point iteration for TT -> UTC inverts UTC -> TT,
    including right after a leap second.
    """
    for jd_utc in (2451545.0, 2457754.5 + 1e-6, 2441317.5 + 0.25):
        jd_tt = ts.utc_to_tt(jd_utc)
        assert ts.tt_to_utc(jd_tt) == pytest.approx(jd_utc, abs=1e-9)


def test_local_time_and_day_start():
    jd = 2459596.101598
    assert ts.local_to_utc(ts.utc_to_local(jd, 5.5), 5.5) == pytest.approx(jd, abs=1e-12)
    assert ts.utc_to_local(jd, -8.0) == pytest.approx(jd - 8.0 / 24.0, abs=1e-12)
    assert ts.utc_day_start(jd) == 2459595.5
    assert ts.utc_day_start(2459595.5) == 2459595.5
