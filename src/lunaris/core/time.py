from __future__ import annotations
from dataclasses import dataclass
from math import floor, isfinite
from typing import Tuple

from .errors import InvalidDate

# First day of the Gregorian calendar; earlier dates are Julian calendar dates.
GREGORIAN_START = (1582, 10, 15)
MIN_YEAR = -4712


def is_leap_year(year: int) -> bool:
    """Julian rule up to 1582, Gregorian rule afterwards (astronomical year numbering)."""
    if year <= 1582:
        return year % 4 == 0
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if not (1 <= month <= 12):
        raise InvalidDate(f"month must be in 1..12, got {month}")
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31


def julian_day(year: int, month: int, day: float) -> float:
    """
    Julian Day of a calendar date (Meeus, Astronomical Algorithms, ch. 7).

    day may carry the time of day as a fraction (1.5 is noon of the 1st).
    Dates from 1582-10-15 on are Gregorian, earlier ones Julian.
    """
    if not isfinite(day):
        raise InvalidDate(f"day must be finite, got {day!r}")
    if year < MIN_YEAR:
        raise InvalidDate(f"year must be >= {MIN_YEAR}, got {year}")
    dim = days_in_month(year, month)
    if not (1.0 <= day < dim + 1.0):
        raise InvalidDate(f"day must be in [1, {dim + 1}) for {year}-{month:02d}, got {day}")

    gregorian = (year, month, int(day)) >= GREGORIAN_START
    if not gregorian and (year, month) == (1582, 10) and day >= 5.0:
        raise InvalidDate(f"1582-10-{int(day):02d} does not exist (Gregorian reform)")

    y, m = year, month
    if m <= 2:
        y -= 1
        m += 12

    b = 0
    if gregorian:
        a = floor(y / 100)
        b = 2 - a + floor(a / 4)

    return floor(365.25 * (y + 4716)) + floor(30.6001 * (m + 1)) + day + b - 1524.5


def julian_day_from_hms(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    if not (0 <= hour < 24 and 0 <= minute < 60 and 0.0 <= second < 60.0):
        raise InvalidDate(f"time of day out of range: {hour}:{minute}:{second}")
    return julian_day(year, month, day + (hour + (minute + second / 60.0) / 60.0) / 24.0)


@dataclass(frozen=True)
class CalendarDate:
    year: int
    month: int
    day: float  # fractional day of month

    def as_tuple(self) -> Tuple[int, int, float]:
        return (self.year, self.month, self.day)


def calendar_date(jd: float) -> CalendarDate:
    """Inverse of julian_day (Meeus ch. 7); valid for jd >= 0."""
    if not isfinite(jd) or jd < 0.0:
        raise InvalidDate(f"Julian Day must be finite and >= 0, got {jd!r}")

    z = floor(jd + 0.5)
    f = jd + 0.5 - z

    if z < 2299161:
        a = z
    else:
        alpha = floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - floor(alpha / 4)

    b = a + 1524
    c = floor((b - 122.1) / 365.25)
    d = floor(365.25 * c)
    e = floor((b - d) / 30.6001)

    day = b - d - floor(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return CalendarDate(int(year), int(month), float(day))


def split_day(fractional_day: float) -> Tuple[int, int, int, float]:
    """Fractional day of month -> (day, hour, minute, second)."""
    day = int(floor(fractional_day))
    hours = (fractional_day - day) * 24.0
    hour = int(hours)
    minutes = (hours - hour) * 60.0
    minute = int(minutes)
    second = (minutes - minute) * 60.0
    return day, hour, minute, second


def decimal_year(jd: float) -> float:
    """Calendar year plus the elapsed fraction of that year (2003-08-28 0h -> 2003.6548)."""
    y = calendar_date(jd).year
    j0 = julian_day(y, 1, 1.0)
    j1 = julian_day(y + 1, 1, 1.0)
    return y + (jd - j0) / (j1 - j0)
