# reference/coordinates.py

from __future__ import annotations

import math
from dataclasses import dataclass

from . import astro_args as aa
from .phase import AU_KM


EARTH_FLATTENING_BA = 0.99664719  # b/a
EARTH_EQUATORIAL_RADIUS_M = 6378140.0
SOLAR_PARALLAX_ARCSEC = 8.794

# Minimum of h + 10.3/(h + 5.11); below it the Meeus formula is no longer monotonic.
REFRACTION_CUTOFF_DEG = -1.9006387


@dataclass(frozen=True)
class Equatorial:
    ra_deg: float
    dec_deg: float


@dataclass(frozen=True)
class Horizontal:
    azimuth_deg: float   # from north, eastward
    altitude_deg: float


def ecliptic_to_equatorial(lon_deg: float, lat_deg: float, eps_deg: float) -> Equatorial:
    """Meeus (13.3) and (13.4)."""
    lam = math.radians(lon_deg)
    beta = math.radians(lat_deg)
    eps = math.radians(eps_deg)

    ra = math.atan2(
        math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps),
        math.cos(lam),
    )
    dec = math.asin(
        math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
    )
    return Equatorial(ra_deg=aa.wrap_deg(math.degrees(ra)), dec_deg=math.degrees(dec))


def equatorial_to_horizontal(hour_angle_deg: float, dec_deg: float, lat_deg: float) -> Horizontal:
    """
    Altitude and azimuth from hour angle, declination and latitude.

    Azimuth is measured from the north through east, so a body west of the
    meridian (sin H > 0) has an azimuth above 180.
    """
    H = math.radians(hour_angle_deg)
    dec = math.radians(dec_deg)
    phi = math.radians(lat_deg)

    sin_h = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(H)
    sin_h = max(-1.0, min(1.0, sin_h))
    h = math.asin(sin_h)

    denom = math.cos(phi) * math.cos(h)
    if abs(denom) < 1e-12:
        # observer at a pole or body at the zenith
        A = 0.0 if dec_deg >= 0.0 and lat_deg >= 0.0 else 180.0
    else:
        cos_A = (math.sin(dec) - math.sin(phi) * sin_h) / denom
        A = math.degrees(math.acos(max(-1.0, min(1.0, cos_A))))
        if math.sin(H) > 0.0:
            A = 360.0 - A

    return Horizontal(azimuth_deg=aa.wrap_deg(A), altitude_deg=math.degrees(h))


def rho_phi(lat_deg: float, height_m: float) -> tuple[float, float]:
    """
    Geocentric position of the observer (Meeus ch. 11): (rho sin phi', rho cos phi')
    in units of the Earth's equatorial radius.
    """
    phi = math.radians(lat_deg)
    u = math.atan(EARTH_FLATTENING_BA * math.tan(phi))
    hr = height_m / EARTH_EQUATORIAL_RADIUS_M
    rho_sin = EARTH_FLATTENING_BA * math.sin(u) + hr * math.sin(phi)
    rho_cos = math.cos(u) + hr * math.cos(phi)
    return rho_sin, rho_cos


def equatorial_to_topocentric(
    ra_deg: float,
    dec_deg: float,
    distance_km: float,
    hour_angle_deg: float,
    lat_deg: float,
    height_m: float,
) -> Equatorial:
    """Parallax in right ascension and declination, Meeus (40.2) and (40.3)."""
    rho_sin, rho_cos = rho_phi(lat_deg, height_m)

    sin_pi = math.sin(math.radians(aa.arcsec_to_deg(SOLAR_PARALLAX_ARCSEC))) / (distance_km / AU_KM)
    H = math.radians(hour_angle_deg)
    dec = math.radians(dec_deg)

    denom = math.cos(dec) - rho_cos * sin_pi * math.cos(H)
    d_ra = math.atan2(-rho_cos * sin_pi * math.sin(H), denom)
    dec_topo = math.atan2((math.sin(dec) - rho_sin * sin_pi) * math.cos(d_ra), denom)

    return Equatorial(
        ra_deg=aa.wrap_deg(ra_deg + math.degrees(d_ra)),
        dec_deg=math.degrees(dec_topo),
    )


def refraction(altitude_deg: float, pressure_mbar: float = 1010.0, temperature_c: float = 10.0) -> float:
    """
    Atmospheric refraction (degrees) for a true altitude, Meeus (16.4) with the
    pressure and temperature factor of ch. 16. Zero below REFRACTION_CUTOFF_DEG.
    """
    if altitude_deg < REFRACTION_CUTOFF_DEG:
        return 0.0
    h = altitude_deg
    R_arcmin = 1.02 / math.tan(math.radians(h + 10.3 / (h + 5.11))) + 0.0019279
    R_arcmin *= (pressure_mbar / 1010.0) * (283.0 / (273.0 + temperature_c))
    return R_arcmin / 60.0
