# reference/phase.py

from __future__ import annotations

import math

from . import astro_args as aa


AU_KM = 149597870.7

PHASE_NAMES = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)


def elongation_360(moon_lon_deg: float, sun_lon_deg: float) -> float:
    """Moon minus Sun apparent longitude, [0,360). 0 = new, 180 = full."""
    return aa.wrap_deg(moon_lon_deg - sun_lon_deg)


def phase_angle(moon_lon_deg: float, sun_lon_deg: float) -> float:
    """Longitude elongation folded to [0,180]."""
    e = elongation_360(moon_lon_deg, sun_lon_deg)
    return 360.0 - e if e > 180.0 else e


def illumination_angle(
    moon_ra_deg: float,
    moon_dec_deg: float,
    moon_distance_km: float,
    sun_ra_deg: float,
    sun_dec_deg: float,
    sun_distance_au: float,
) -> float:
    """
    Selenocentric Sun-Earth angle i (degrees, [0,180]), Meeus (48.2) and (48.3).
    """
    a0 = math.radians(sun_ra_deg)
    d0 = math.radians(sun_dec_deg)
    a = math.radians(moon_ra_deg)
    d = math.radians(moon_dec_deg)

    cos_psi = math.sin(d0) * math.sin(d) + math.cos(d0) * math.cos(d) * math.cos(a0 - a)
    psi = math.acos(max(-1.0, min(1.0, cos_psi)))

    R = sun_distance_au * AU_KM
    i = math.atan2(R * math.sin(psi), moon_distance_km - R * math.cos(psi))
    return math.degrees(i)


def illuminated_fraction(i_deg: float) -> float:
    """k = (1 + cos i) / 2."""
    return (1.0 + math.cos(math.radians(i_deg))) / 2.0


def phase_age(elong360_deg: float) -> float:
    """Days since new Moon at the mean synodic rate."""
    return elong360_deg / aa.MOON_DAY_DEG


def phase_name(elong360_deg: float) -> str:
    """Eight equal sectors centred on the principal phases."""
    idx = int(math.floor((elong360_deg / 360.0 + 1.0 / 16.0) * 8.0)) % 8
    return PHASE_NAMES[idx]
