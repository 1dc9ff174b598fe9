# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass

from . import astro_args as aa
from .nutation import nutation


@dataclass(frozen=True)
class SolarPosition:
    """Geocentric solar coordinates (degrees, AU)."""
    L_true_deg: float
    L_app_deg: float
    B_deg: float
    R_au: float


def solar_position(jd_tt: float) -> SolarPosition:
    """
    Low-accuracy solar coordinates for JD(TT), Meeus ch. 25 (about 0.01 deg).

    Apparent longitude = true longitude + nutation in longitude + aberration
    (-20.4898" / R). The latitude of the Sun never exceeds 1.2" and is taken as 0.
    """
    T = aa.T_centuries(jd_tt)
    T2 = T * T

    L0 = 280.46646 + 36000.76983 * T + 0.0003032 * T2
    M = math.radians(aa.wrap_deg(357.52911 + 35999.05029 * T - 0.0001537 * T2))
    e = 0.016708634 - 0.000042037 * T - 0.0000001267 * T2

    # Equation of centre
    C = (
        (1.914602 - 0.004817 * T - 0.000014 * T2) * math.sin(M)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M)
        + 0.000289 * math.sin(3.0 * M)
    )

    L_true = aa.wrap_deg(L0 + C)
    v = M + math.radians(C)
    R = 1.000001018 * (1.0 - e * e) / (1.0 + e * math.cos(v))

    aberration = aa.arcsec_to_deg(-20.4898 / R)
    L_app = aa.wrap_deg(L_true + nutation(jd_tt).dpsi_deg + aberration)

    return SolarPosition(L_true_deg=L_true, L_app_deg=L_app, B_deg=0.0, R_au=R)
