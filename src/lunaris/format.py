from __future__ import annotations

from math import isfinite
from typing import Tuple


def _split_sexagesimal(value: float, precision: int) -> Tuple[str, int, int, float]:
    """
    abs(value) -> (sign, whole, minutes, seconds) with seconds rounded to
    `precision` digits and any 60 carried upwards.
    """
    if not isfinite(value):
        raise ValueError(f"cannot format non-finite angle {value!r}")
    if precision < 0:
        raise ValueError("precision must be >= 0")

    sign = "-" if value < 0 else ""
    a = abs(value)
    whole = int(a)
    minutes_f = (a - whole) * 60.0
    minutes = int(minutes_f)
    seconds = round((minutes_f - minutes) * 60.0, precision)

    if seconds >= 60.0:
        seconds -= 60.0
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        whole += 1

    # -0.0000001 rounds to zero; don't print "-0° 0' 0""
    if whole == 0 and minutes == 0 and seconds == 0.0:
        sign = ""
    return sign, whole, minutes, abs(seconds)


def _fmt(minutes: int, seconds: float, precision: int, width: int) -> Tuple[str, str]:
    if width <= 0:
        return str(minutes), f"{seconds:.{precision}f}"
    sec_width = width + (precision + 1 if precision > 0 else 0)
    return f"{minutes:0{width}d}", f"{seconds:0{sec_width}.{precision}f}"


def to_dms(degrees: float, precision: int = 2, width: int = 0) -> str:
    """
    Decimal degrees -> 'D° M\\' S.sss"'.

    >>> to_dms(13.769657226951539, 3)
    '13° 46\\' 10.766"'
    """
    sign, d, m, s = _split_sexagesimal(degrees, precision)
    ms, ss = _fmt(m, s, precision, width)
    return f"{sign}{d}° {ms}' {ss}\""


def hours_to_hms(hours: float, precision: int = 2, width: int = 0) -> str:
    """Decimal hours -> 'Hh Mm Ss'."""
    sign, h, m, s = _split_sexagesimal(hours, precision)
    ms, ss = _fmt(m, s, precision, width)
    return f"{sign}{h}h {ms}m {ss}s"


def to_hms(degrees: float, precision: int = 2, width: int = 0) -> str:
    """
    Angle in degrees -> time units (15 degrees per hour).

    >>> to_hms(241.6958092513155, 3)
    '16h 6m 46.994s'
    """
    return hours_to_hms(degrees / 15.0, precision, width)
