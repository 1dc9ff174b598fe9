from __future__ import annotations

import logging
from math import isfinite
from typing import Optional, Tuple

from .core.errors import InvalidDate
from .core.types import DateTimeResult, MoonInput, MoonOutput, Observer
from .reference import sidereal
from .reference import time_scales as ts
from .reference.coordinates import (
    ecliptic_to_equatorial,
    equatorial_to_horizontal,
    equatorial_to_topocentric,
    refraction,
)
from .reference.lunar import lunar_position
from .reference.nutation import true_obliquity_deg
from .reference.phase import (
    elongation_360,
    illuminated_fraction,
    illumination_angle,
    phase_age,
    phase_angle,
    phase_name,
)
from .reference.rise_set import RiseTransitSet, event_to_datetime, rise_transit_set
from .reference.solar import solar_position

logger = logging.getLogger(__name__)


def west_longitude(longitude_east: float) -> float:
    """East-positive longitude -> the west-positive convention used throughout."""
    return -longitude_east


def julian_day(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    """Julian Day of a calendar instant (Gregorian from 1582-10-15, Julian before)."""
    return ts.julian_day_from_hms(year, month, day, hour, minute, second)


def local_sidereal_time(jd: float, longitude: float) -> float:
    """Local apparent sidereal time in degrees; longitude west-positive."""
    _check_jd(jd)
    return sidereal.local_sidereal_time(jd, longitude)


def _check_jd(jd: float) -> None:
    if not isfinite(jd):
        raise InvalidDate(f"Julian Day must be finite, got {jd!r}")


def _time_arguments(jd: float, civil_time: bool) -> Tuple[float, float, float]:
    """(jd_tt, jd_ut1, jd_utc) for the input instant."""
    if civil_time:
        return ts.utc_to_tt(jd), ts.utc_to_ut1(jd), jd
    return jd, jd, jd


def rise_transit_set_local(jd_utc: float, observer: Observer) -> Tuple[DateTimeResult, DateTimeResult, DateTimeResult]:
    """Rise, transit and set for the UTC day of jd_utc, in the observer's civil time."""
    events: RiseTransitSet = rise_transit_set(jd_utc, observer)
    return (
        event_to_datetime(events.rise, observer.utc_offset),
        event_to_datetime(events.transit, observer.utc_offset),
        event_to_datetime(events.set, observer.utc_offset),
    )


def compute(inp: MoonInput, *, civil_time: bool = False, with_events: bool = False) -> MoonOutput:
    """
    Moon position, phase and horizontal coordinates for one instant and observer.

    By default inp.jd is taken as a TT-equivalent Julian Day and used for the
    Earth's rotation as well. With civil_time=True it is read as UTC: the
    series are evaluated at TT and sidereal time at UT1.

    with_events=True adds rise, transit and set for the UTC day containing the
    instant, shifted to civil time by inp.utc_offset.
    """
    _check_jd(inp.jd)
    observer = inp.observer
    jd_tt, jd_ut, jd_utc = _time_arguments(inp.jd, civil_time)

    moon = lunar_position(jd_tt)
    sun = solar_position(jd_tt)
    eps = true_obliquity_deg(jd_tt)

    moon_eq = ecliptic_to_equatorial(moon.L_app_deg, moon.B_deg, eps)
    sun_eq = ecliptic_to_equatorial(sun.L_app_deg, sun.B_deg, eps)

    elong = elongation_360(moon.L_app_deg, sun.L_app_deg)
    i = illumination_angle(
        moon_eq.ra_deg, moon_eq.dec_deg, moon.distance_km,
        sun_eq.ra_deg, sun_eq.dec_deg, sun.R_au,
    )

    lst = sidereal.local_sidereal_time(jd_ut, observer.longitude)
    topo = equatorial_to_topocentric(
        moon_eq.ra_deg,
        moon_eq.dec_deg,
        moon.distance_km,
        sidereal.hour_angle(lst, moon_eq.ra_deg),
        observer.latitude,
        observer.height,
    )
    H = sidereal.hour_angle(lst, topo.ra_deg)
    hor = equatorial_to_horizontal(H, topo.dec_deg, observer.latitude)
    altitude = hor.altitude_deg + refraction(hor.altitude_deg, observer.pressure, observer.temperature)

    rise: Optional[DateTimeResult] = None
    transit: Optional[DateTimeResult] = None
    set_: Optional[DateTimeResult] = None
    if with_events:
        rise, transit, set_ = rise_transit_set_local(jd_utc, observer)

    logger.debug("compute jd=%.6f tt=%.6f ut=%.6f elong=%.4f", inp.jd, jd_tt, jd_ut, elong)

    return MoonOutput(
        phase_angle=phase_angle(moon.L_app_deg, sun.L_app_deg),
        illumination_angle=i,
        phase_age=phase_age(elong),
        illuminated_fraction=illuminated_fraction(i),
        phase_name=phase_name(elong),
        longitude=moon.L_app_deg,
        latitude=moon.B_deg,
        distance=moon.distance_km,
        hour_angle=H,
        right_ascension=topo.ra_deg,
        declination=topo.dec_deg,
        azimuth=hor.azimuth_deg,
        altitude=altitude,
        rise=rise,
        transit=transit,
        set=set_,
    )
