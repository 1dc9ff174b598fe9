from __future__ import annotations

from datetime import datetime, timedelta, timezone
from math import floor

from ..core.time import (  # noqa: F401  (re-exported calendar helpers)
    CalendarDate,
    calendar_date,
    days_in_month,
    decimal_year,
    is_leap_year,
    julian_day,
    julian_day_from_hms,
    split_day,
)
from .deltat import delta_t_seconds
from .leap_seconds import leap_seconds

# TT - TAI, seconds
TT_MINUS_TAI = 32.184
SECONDS_PER_DAY = 86400.0


# ============================================================
# datetime(UTC) <-> JD(UTC)
# ============================================================

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC


def datetime_utc_to_jd(dt: datetime) -> float:
    """
    datetime -> JD (UTC). Requires timezone-aware datetime.
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    t = dt.astimezone(timezone.utc).timestamp()
    return _JD_UNIX_EPOCH + t / SECONDS_PER_DAY


def jd_to_datetime_utc(jd: float) -> datetime:
    """
    JD (UTC) -> timezone-aware datetime in UTC.
    """
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(days=jd - _JD_UNIX_EPOCH)


# ============================================================
# UTC -> TT / UT1
#
#   TT  = TAI + 32.184 s = UTC + leap(UTC) + 32.184 s
#   TT  = UT1 + ΔT
#   UT1 = UTC - (ΔT - leap(UTC) - 32.184 s)
# ============================================================

def utc_to_tt(jd_utc: float) -> float:
    return jd_utc + (leap_seconds(jd_utc) + TT_MINUS_TAI) / SECONDS_PER_DAY


def utc_to_ut1(jd_utc: float) -> float:
    dT = delta_t_seconds(jd_utc)
    return jd_utc - (dT - leap_seconds(jd_utc) - TT_MINUS_TAI) / SECONDS_PER_DAY


def tt_to_utc(jd_tt: float) -> float:
    """
    Inverse of utc_to_tt.

    Two fixed-point iterations; the second only matters within a minute of a
    leap-second boundary.
    """
    jd_utc = jd_tt
    for _ in range(2):
        jd_utc = jd_tt - (leap_seconds(jd_utc) + TT_MINUS_TAI) / SECONDS_PER_DAY
    return jd_utc


def ut1_minus_utc(jd_utc: float) -> float:
    """UT1-UTC in seconds implied by the ΔT and leap-second tables."""
    return -(delta_t_seconds(jd_utc) - leap_seconds(jd_utc) - TT_MINUS_TAI)


# ============================================================
# Local civil time (fixed UTC offset in hours)
# ============================================================

def utc_to_local(jd_utc: float, utc_offset_hours: float) -> float:
    return jd_utc + utc_offset_hours / 24.0


def local_to_utc(jd_local: float, utc_offset_hours: float) -> float:
    return jd_local - utc_offset_hours / 24.0


def utc_day_start(jd_utc: float) -> float:
    """JD of 0h UTC of the calendar day containing jd_utc."""
    return floor(jd_utc - 0.5) + 0.5
