# reference/sidereal.py

from __future__ import annotations

import math

from . import astro_args as aa
from .nutation import nutation, true_obliquity_deg


def mean_sidereal_time(jd_ut: float) -> float:
    """
    Greenwich mean sidereal time (degrees, [0,360)) at any instant of UT (Meeus 12.4).
    """
    T = aa.T_centuries(jd_ut)
    theta0 = (
        280.46061837
        + 360.98564736629 * (jd_ut - aa.J2000_TT)
        + 0.000387933 * T * T
        - T * T * T / 38710000.0
    )
    return aa.wrap_deg(theta0)


def equation_of_equinoxes_deg(jd: float) -> float:
    """Nutation in right ascension, dpsi * cos(eps_true), in degrees."""
    return nutation(jd).dpsi_deg * math.cos(math.radians(true_obliquity_deg(jd)))


def apparent_sidereal_time(jd_ut: float) -> float:
    """Greenwich apparent sidereal time (degrees, [0,360))."""
    return aa.wrap_deg(mean_sidereal_time(jd_ut) + equation_of_equinoxes_deg(jd_ut))


def local_sidereal_time(jd_ut: float, longitude_west: float) -> float:
    """
    Local apparent sidereal time (degrees, [0,360)).

    longitude_west is positive west of Greenwich, so LST = GAST - L.
    """
    return aa.wrap_deg(apparent_sidereal_time(jd_ut) - longitude_west)


def hour_angle(lst_deg: float, ra_deg: float) -> float:
    """Local hour angle H = LST - alpha, degrees [0,360)."""
    return aa.wrap_deg(lst_deg - ra_deg)
