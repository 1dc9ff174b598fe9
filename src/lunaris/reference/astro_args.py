# reference/astro_args.py

from __future__ import annotations

from dataclasses import dataclass
from math import fmod
from typing import Literal


# ------------------------------------------------------------
# Angles
# ------------------------------------------------------------

def wrap_deg(angle: float) -> float:
    """Reduce an angle to [0, 360) degrees."""
    r = fmod(angle, 360.0)
    if r < 0.0:
        r += 360.0
    # -1e-18 + 360 rounds to 360.0
    return 0.0 if r >= 360.0 else r

def wrap180(angle: float) -> float:
    """Reduce an angle to [-180, 180) degrees."""
    return (angle + 180.0) % 360.0 - 180.0

def arcsec_to_deg(arcsec: float) -> float:
    return arcsec / 3600.0

def dms_to_deg(d: float, m: float = 0.0, s: float = 0.0) -> float:
    """Sexagesimal -> decimal degrees; the sign of the first non-zero field wins."""
    sign = -1.0 if (d < 0 or (d == 0 and (m < 0 or (m == 0 and s < 0)))) else 1.0
    return sign * (abs(d) + abs(m) / 60.0 + abs(s) / 3600.0)

def hms_to_deg(h: float, m: float = 0.0, s: float = 0.0) -> float:
    return 15.0 * dms_to_deg(h, m, s)


# ------------------------------------------------------------
# Epoch and mean lunation
# ------------------------------------------------------------

J2000_TT = 2451545.0

# Mean synodic month (days) and the Moon's mean daily gain on the Sun (degrees).
SYNODIC_MONTH = 29.530588853
MOON_DAY_DEG = 360.0 / SYNODIC_MONTH


def T_centuries(jd_tt: float) -> float:
    """Julian centuries of TT since J2000.0."""
    return (jd_tt - J2000_TT) / 36525.0


# ------------------------------------------------------------
# Fundamental arguments (Meeus ch. 47; degrees)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    """Mean elements in degrees, wrapped to [0,360)."""
    Lp_deg: float     # Moon's mean longitude L'
    D_deg: float      # mean elongation of the Moon
    M_deg: float      # Sun's mean anomaly
    Mp_deg: float     # Moon's mean anomaly M'
    F_deg: float      # Moon's argument of latitude
    Omega_deg: float  # longitude of the Moon's ascending node


def fundamental_args(T: float) -> FundamentalArgs:
    """Mean elements of Meeus (47.1)-(47.5) and the node of ch. 22, at T centuries of TT."""
    T2 = T * T
    T3 = T2 * T
    T4 = T3 * T

    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    Omega = 125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0

    return FundamentalArgs(
        Lp_deg=wrap_deg(Lp),
        D_deg=wrap_deg(D),
        M_deg=wrap_deg(M),
        Mp_deg=wrap_deg(Mp),
        F_deg=wrap_deg(F),
        Omega_deg=wrap_deg(Omega),
    )


def eccentricity_factor(T: float) -> float:
    """E of Meeus (47.6); terms with the Sun's mean anomaly M are scaled by E^|M|."""
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


# ------------------------------------------------------------
# Obliquity of the ecliptic
# ------------------------------------------------------------

def mean_obliquity_deg(T: float, model: Literal["laskar", "iau1980"] = "laskar") -> float:
    """
    Mean obliquity of the ecliptic (degrees).

    - 'laskar' (Meeus 22.3, valid over +-10000 years around J2000):
        eps = 23°26'21.448" - 4680.93"U - 1.55"U^2 + 1999.25"U^3 - 51.38"U^4
              - 249.67"U^5 - 39.05"U^6 + 7.12"U^7 + 27.87"U^8 + 5.79"U^9 + 2.45"U^10,
        U = T/100
    - 'iau1980' (Meeus 22.2):
        eps = 23°26'21.448" - 46.8150"T - 0.00059"T^2 + 0.001813"T^3
    """
    if model == "laskar":
        u = T / 100.0
        acc = 0.0
        for c in (2.45, 5.79, 27.87, 7.12, -39.05, -249.67, -51.38, 1999.25, -1.55, -4680.93):
            acc = (acc + c) * u
        return arcsec_to_deg(84381.448 + acc)

    if model == "iau1980":
        return arcsec_to_deg(84381.448 - 46.8150 * T - 0.00059 * (T * T) + 0.001813 * (T * T * T))

    raise ValueError("model must be one of: laskar, iau1980")
