# reference/lunar.py

from __future__ import annotations

import math
from dataclasses import dataclass

from . import astro_args as aa
from .nutation import nutation


EARTH_EQUATORIAL_RADIUS_KM = 6378.14
MEAN_DISTANCE_KM = 385000.56
SEMIDIAMETER_K = 0.272481  # Moon radius / Earth equatorial radius


@dataclass(frozen=True)
class LunarPosition:
    """Geocentric lunar coordinates of date (degrees, km)."""
    L_true_deg: float   # referred to the mean equinox of date
    L_app_deg: float    # true longitude + nutation in longitude
    B_deg: float
    distance_km: float


# Meeus table 47.A: (D, M, M', F, Σl coefficient [1e-6 deg], Σr coefficient [1e-3 km])
LUNAR_LON_DIST_TERMS = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
    (0, 1, 2, 0, -2120, 5751),
    (0, 2, 0, 0, -2069, 0),
    (2, -2, -1, 0, 2048, -4950),
    (2, 0, 1, -2, -1773, 4130),
    (2, 0, 0, 2, -1595, 0),
    (4, -1, -1, 0, 1215, -3958),
    (0, 0, 2, 2, -1110, 0),
    (3, 0, -1, 0, -892, 3258),
    (2, 1, 1, 0, -810, 2616),
    (4, -1, -2, 0, 759, -1897),
    (0, 2, -1, 0, -713, -2117),
    (2, 2, -1, 0, -700, 2354),
    (2, 1, -2, 0, 691, 0),
    (2, -1, 0, -2, 596, 0),
    (4, 0, 1, 0, 549, -1423),
    (0, 0, 4, 0, 537, -1117),
    (4, -1, 0, 0, 520, -1571),
    (1, 0, -2, 0, -487, -1739),
    (2, 1, 0, -2, -399, 0),
    (0, 0, 2, -2, -381, -4421),
    (1, 1, 1, 0, 351, 0),
    (3, 0, -2, 0, -340, 0),
    (4, 0, -3, 0, 330, 0),
    (2, -1, 2, 0, 327, 0),
    (0, 2, 1, 0, -323, 1165),
    (1, 1, -1, 0, 299, 0),
    (2, 0, 3, 0, 294, 0),
    (2, 0, -1, -2, 0, 8752),
)

# Meeus table 47.B: (D, M, M', F, Σb coefficient [1e-6 deg])
LUNAR_LAT_TERMS = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565),
    (1, 0, 0, 1, -1491),
    (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410),
    (0, 1, 0, -1, -1344),
    (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107),
    (4, 0, 0, -1, 1021),
    (4, 0, -1, 1, 833),
    (0, 0, 1, -3, 777),
    (4, 0, -2, 1, 671),
    (2, 0, 0, -3, 607),
    (2, 0, 2, -1, 596),
    (2, -1, 1, -1, 491),
    (2, 0, -2, 1, -451),
    (0, 0, 3, -1, 439),
    (2, 0, 2, 1, 422),
    (2, 0, -3, -1, 421),
    (2, 1, -1, 1, -366),
    (2, 1, 0, 1, -351),
    (4, 0, 0, 1, 331),
    (2, -1, 1, 1, 315),
    (2, -2, 0, -1, 302),
    (0, 0, 1, 3, -283),
    (2, 1, 1, -1, -229),
    (1, 1, 0, -1, 223),
    (1, 1, 0, 1, 223),
    (0, 1, -2, -1, -220),
    (2, 1, -1, -1, -220),
    (1, 0, 1, 1, -185),
    (2, -1, -2, -1, 181),
    (0, 1, 2, 1, -177),
    (4, 0, -2, -1, 176),
    (4, -1, -1, -1, 166),
    (1, 0, 1, -1, -164),
    (4, 0, 1, -1, 132),
    (1, 0, -1, -1, -119),
    (4, -1, 0, -1, 115),
    (2, -2, 0, 1, 107),
)


def _e_scale(m: int, E: float) -> float:
    if abs(m) == 1:
        return E
    if abs(m) == 2:
        return E * E
    return 1.0


def lunar_position(jd_tt: float) -> LunarPosition:
    """
    Geocentric lunar longitude, latitude and distance for JD(TT), Meeus ch. 47.

    Accuracy is about 10" in longitude and 4" in latitude. The apparent
    longitude includes nutation in longitude; no aberration term is applied
    (the Moon's light time is about 1.3 s).
    """
    T = aa.T_centuries(jd_tt)
    fa = aa.fundamental_args(T)
    E = aa.eccentricity_factor(T)

    Lp = math.radians(fa.Lp_deg)
    D = math.radians(fa.D_deg)
    M = math.radians(fa.M_deg)
    Mp = math.radians(fa.Mp_deg)
    F = math.radians(fa.F_deg)

    # Additive terms: Venus (A1), Jupiter (A2) and the Earth's flattening (A3)
    A1 = math.radians(aa.wrap_deg(119.75 + 131.849 * T))
    A2 = math.radians(aa.wrap_deg(53.09 + 479264.290 * T))
    A3 = math.radians(aa.wrap_deg(313.45 + 481266.484 * T))

    sum_l = 0.0
    sum_r = 0.0
    for d, m, mp, f, cl, cr in LUNAR_LON_DIST_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        k = _e_scale(m, E)
        sum_l += cl * k * math.sin(arg)
        sum_r += cr * k * math.cos(arg)

    sum_b = 0.0
    for d, m, mp, f, cb in LUNAR_LAT_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        sum_b += cb * _e_scale(m, E) * math.sin(arg)

    sum_l += 3958.0 * math.sin(A1) + 1962.0 * math.sin(Lp - F) + 318.0 * math.sin(A2)
    sum_b += (
        -2235.0 * math.sin(Lp)
        + 382.0 * math.sin(A3)
        + 175.0 * math.sin(A1 - F)
        + 175.0 * math.sin(A1 + F)
        + 127.0 * math.sin(Lp - Mp)
        - 115.0 * math.sin(Lp + Mp)
    )

    L_true = aa.wrap_deg(fa.Lp_deg + sum_l * 1e-6)
    L_app = aa.wrap_deg(L_true + nutation(jd_tt).dpsi_deg)

    return LunarPosition(
        L_true_deg=L_true,
        L_app_deg=L_app,
        B_deg=sum_b * 1e-6,
        distance_km=MEAN_DISTANCE_KM + sum_r * 1e-3,
    )


# ------------------------------------------------------------
# Parallax and semidiameter
# ------------------------------------------------------------

def equatorial_horizontal_parallax_deg(distance_km: float) -> float:
    """sin(pi) = a / Delta (Meeus ch. 47)."""
    return math.degrees(math.asin(EARTH_EQUATORIAL_RADIUS_KM / distance_km))


def horizontal_parallax_deg(distance_km: float, altitude_deg: float = 0.0) -> float:
    """Parallax in altitude for a body at altitude_deg: sin p = sin(pi) cos(h)."""
    sin_pi = EARTH_EQUATORIAL_RADIUS_KM / distance_km
    return math.degrees(math.asin(sin_pi * math.cos(math.radians(altitude_deg))))


def semidiameter_deg(distance_km: float) -> float:
    """Geocentric semidiameter: sin s = k sin(pi)."""
    return math.degrees(math.asin(SEMIDIAMETER_K * EARTH_EQUATORIAL_RADIUS_KM / distance_km))


def topocentric_semidiameter_deg(
    distance_km: float,
    hour_angle_deg: float,
    dec_deg: float,
    rho_sin_phi: float,
    rho_cos_phi: float,
) -> float:
    """
    Semidiameter seen from the observer, s' = asin(sin s / q) with q from Meeus (40.7).
    """
    sin_pi = EARTH_EQUATORIAL_RADIUS_KM / distance_km
    H = math.radians(hour_angle_deg)
    dec = math.radians(dec_deg)

    a = math.cos(dec) * math.sin(H)
    b = math.cos(dec) * math.cos(H) - rho_cos_phi * sin_pi
    c = math.sin(dec) - rho_sin_phi * sin_pi
    q = math.sqrt(a * a + b * b + c * c)

    sin_s = math.sin(math.radians(semidiameter_deg(distance_km)))
    return math.degrees(math.asin(sin_s / q))
