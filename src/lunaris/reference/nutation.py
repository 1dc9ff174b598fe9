# reference/nutation.py

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

from . import astro_args as aa


# IAU 1980 nutation, Meeus table 22.A.
# (D, M, M', F, Omega, psi, psi_T, eps, eps_T); coefficients in 0.0001"
NUTATION_TERMS = (
    (0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9),
    (-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1),
    (0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5),
    (0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5),
    (0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1),
    (0, 0, 1, 0, 0, 712, 0.1, -7, 0.0),
    (-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6),
    (0, 0, 0, 2, 1, -386, -0.4, 200, 0.0),
    (0, 0, 1, 2, 2, -301, 0.0, 129, -0.1),
    (-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3),
    (-2, 0, 1, 0, 0, -158, 0.0, 0, 0.0),
    (-2, 0, 0, 2, 1, 129, 0.1, -70, 0.0),
    (0, 0, -1, 2, 2, 123, 0.0, -53, 0.0),
    (2, 0, 0, 0, 0, 63, 0.0, 0, 0.0),
    (0, 0, 1, 0, 1, 63, 0.1, -33, 0.0),
    (2, 0, -1, 2, 2, -59, 0.0, 26, 0.0),
    (0, 0, -1, 0, 1, -58, -0.1, 32, 0.0),
    (0, 0, 1, 2, 1, -51, 0.0, 27, 0.0),
    (-2, 0, 2, 0, 0, 48, 0.0, 0, 0.0),
    (0, 0, -2, 2, 1, 46, 0.0, -24, 0.0),
    (2, 0, 0, 2, 2, -38, 0.0, 16, 0.0),
    (0, 0, 2, 2, 2, -31, 0.0, 13, 0.0),
    (0, 0, 2, 0, 0, 29, 0.0, 0, 0.0),
    (-2, 0, 1, 2, 2, 29, 0.0, -12, 0.0),
    (0, 0, 0, 2, 0, 26, 0.0, 0, 0.0),
    (-2, 0, 0, 2, 0, -22, 0.0, 0, 0.0),
    (0, 0, -1, 2, 1, 21, 0.0, -10, 0.0),
    (0, 2, 0, 0, 0, 17, -0.1, 0, 0.0),
    (2, 0, -1, 0, 1, 16, 0.0, -8, 0.0),
    (-2, 2, 0, 2, 2, -16, 0.1, 7, 0.0),
    (0, 1, 0, 0, 1, -15, 0.0, 9, 0.0),
    (-2, 0, 1, 0, 1, -13, 0.0, 7, 0.0),
    (0, -1, 0, 0, 1, -12, 0.0, 6, 0.0),
    (0, 0, 2, -2, 0, 11, 0.0, 0, 0.0),
    (2, 0, -1, 2, 1, -10, 0.0, 5, 0.0),
    (2, 0, 1, 2, 2, -8, 0.0, 3, 0.0),
    (0, 1, 0, 2, 2, 7, 0.0, -3, 0.0),
    (-2, 1, 1, 0, 0, -7, 0.0, 0, 0.0),
    (0, -1, 0, 2, 2, -7, 0.0, 3, 0.0),
    (2, 0, 0, 2, 1, -7, 0.0, 3, 0.0),
    (2, 0, 1, 0, 0, 6, 0.0, 0, 0.0),
    (-2, 0, 2, 2, 2, 6, 0.0, -3, 0.0),
    (-2, 0, 1, 2, 1, 6, 0.0, -3, 0.0),
    (2, 0, -2, 0, 1, -6, 0.0, 3, 0.0),
    (2, 0, 0, 0, 1, -6, 0.0, 3, 0.0),
    (0, -1, 1, 0, 0, 5, 0.0, 0, 0.0),
    (-2, -1, 0, 2, 1, -5, 0.0, 3, 0.0),
    (-2, 0, 0, 0, 1, -5, 0.0, 3, 0.0),
    (0, 0, 2, 2, 1, -5, 0.0, 3, 0.0),
    (2, 0, 2, 0, 1, 4, 0.0, 0, 0.0),
    (2, 1, 0, 2, 1, 4, 0.0, 0, 0.0),
    (0, 0, 1, -2, 0, 4, 0.0, 0, 0.0),
    (-1, 0, 1, 0, 0, -4, 0.0, 0, 0.0),
    (-2, 1, 0, 0, 0, -4, 0.0, 0, 0.0),
    (1, 0, 0, 0, 0, -4, 0.0, 0, 0.0),
    (0, 0, 1, 2, 0, 3, 0.0, 0, 0.0),
    (0, 0, -2, 2, 2, -3, 0.0, 0, 0.0),
    (-1, -1, 1, 0, 0, -3, 0.0, 0, 0.0),
    (0, 1, 1, 0, 0, -3, 0.0, 0, 0.0),
    (0, -1, 1, 2, 2, -3, 0.0, 0, 0.0),
    (2, -1, -1, 2, 2, -3, 0.0, 0, 0.0),
    (0, 0, 3, 2, 2, -3, 0.0, 0, 0.0),
    (2, -1, 0, 2, 2, -3, 0.0, 0, 0.0),
)


@dataclass(frozen=True)
class Nutation:
    """Nutation in longitude and in obliquity (arcseconds)."""
    dpsi_arcsec: float
    deps_arcsec: float

    @property
    def dpsi_deg(self) -> float:
        return aa.arcsec_to_deg(self.dpsi_arcsec)

    @property
    def deps_deg(self) -> float:
        return aa.arcsec_to_deg(self.deps_arcsec)


@lru_cache(maxsize=256)
def nutation(jd_tt: float) -> Nutation:
    """
    Nutation for JD(TT), Meeus ch. 22. The arguments use the chapter's own
    cubic polynomials, not the quartic ones of the lunar theory.
    """
    T = aa.T_centuries(jd_tt)
    T2 = T * T
    T3 = T2 * T

    D = math.radians(aa.wrap_deg(297.85036 + 445267.111480 * T - 0.0019142 * T2 + T3 / 189474.0))
    M = math.radians(aa.wrap_deg(357.52772 + 35999.050340 * T - 0.0001603 * T2 - T3 / 300000.0))
    Mp = math.radians(aa.wrap_deg(134.96298 + 477198.867398 * T + 0.0086972 * T2 + T3 / 56250.0))
    F = math.radians(aa.wrap_deg(93.27191 + 483202.017538 * T - 0.0036825 * T2 + T3 / 327270.0))
    Om = math.radians(aa.wrap_deg(125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0))

    dpsi = 0.0
    deps = 0.0
    for d, m, mp, f, om, s0, s1, c0, c1 in NUTATION_TERMS:
        arg = d * D + m * M + mp * Mp + f * F + om * Om
        dpsi += (s0 + s1 * T) * math.sin(arg)
        deps += (c0 + c1 * T) * math.cos(arg)

    return Nutation(dpsi_arcsec=dpsi * 1e-4, deps_arcsec=deps * 1e-4)


def true_obliquity_deg(jd_tt: float) -> float:
    """Mean obliquity (Laskar) plus nutation in obliquity."""
    eps0 = aa.mean_obliquity_deg(aa.T_centuries(jd_tt))
    return eps0 + nutation(jd_tt).deps_deg
