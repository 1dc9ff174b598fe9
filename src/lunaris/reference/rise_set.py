# reference/rise_set.py
"""
Moonrise, transit and moonset for one UTC day (Meeus ch. 15, adapted to the Moon).

The Moon moves about 13 degrees a day, so the three-point interpolation of
Meeus only seeds the iteration: every later correction re-evaluates the lunar
series at the current estimate. Positions are evaluated at TT and the Earth's
rotation at UT1, both derived from the UTC instant.

Rise and set are located on the interpolated altitude curve, sampled every
five minutes, so that high-latitude days with two crossings or none are told
apart. Each crossing is confirmed with the full series before it is refined,
and an iteration that wanders off its crossing falls back to bisection.

Because the lunar day is about 24h50m, once a month a given day has no
moonrise and once a month no moonset. Those events come back with
``valid=False``.
"""

from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass
from typing import List, Literal, Tuple

from ..core.errors import SolverNonConvergence
from ..core.types import DateTimeResult, Observer
from . import astro_args as aa
from . import time_scales as ts
from .coordinates import ecliptic_to_equatorial, refraction, rho_phi
from .lunar import horizontal_parallax_deg, lunar_position, topocentric_semidiameter_deg
from .nutation import true_obliquity_deg
from .sidereal import apparent_sidereal_time, local_sidereal_time

logger = logging.getLogger(__name__)

RiseSetState = Literal["done", "circumpolar_up", "circumpolar_down"]
EventKind = Literal["rise", "transit", "set"]

SIDEREAL_RATE_DEG = 360.985647  # sidereal degrees per solar day
DEFAULT_MAX_ITERATIONS = 5
DEFAULT_TOLERANCE_SECONDS = 0.5
SCAN_STEPS = 288  # five-minute grid over the day
RESIDUAL_TOLERANCE_DEG = 0.01


@dataclass(frozen=True)
class EventTime:
    jd_utc: float
    valid: bool = True
    converged: bool = True


@dataclass(frozen=True)
class RiseTransitSet:
    rise: EventTime
    transit: EventTime
    set: EventTime
    state: RiseSetState


def _invalid_event() -> EventTime:
    return EventTime(jd_utc=math.nan, valid=False, converged=True)


def moon_equatorial(jd_tt: float) -> Tuple[float, float, float]:
    """Apparent geocentric (ra_deg, dec_deg, distance_km) of date."""
    pos = lunar_position(jd_tt)
    eq = ecliptic_to_equatorial(pos.L_app_deg, pos.B_deg, true_obliquity_deg(jd_tt))
    return eq.ra_deg, eq.dec_deg, pos.distance_km


def target_altitude(jd_utc: float, observer: Observer) -> float:
    """
    Geocentric altitude of the Moon's centre when its upper limb touches the
    apparent horizon: parallax - refraction(0) - topocentric semidiameter.
    Typically +0.1 to +0.2 degrees.
    """
    ra, dec, dist = moon_equatorial(ts.utc_to_tt(jd_utc))
    lst = local_sidereal_time(ts.utc_to_ut1(jd_utc), observer.longitude)
    H = aa.wrap180(lst - ra)

    rho_sin, rho_cos = rho_phi(observer.latitude, observer.height)
    parallax = horizontal_parallax_deg(dist, 0.0)
    refr = refraction(0.0, observer.pressure, observer.temperature)
    semi = topocentric_semidiameter_deg(dist, H, dec, rho_sin, rho_cos)
    return parallax - refr - semi


def _unwrap(angles: List[float]) -> List[float]:
    out = [angles[0]]
    for a in angles[1:]:
        out.append(out[-1] + aa.wrap180(a - out[-1]))
    return out


def _interpolate(y: List[float], m: float) -> float:
    """Three samples at m = 0, 1/2, 1 (Meeus 3.3 with n = 2m - 1)."""
    n = 2.0 * m - 1.0
    a = y[1] - y[0]
    b = y[2] - y[1]
    c = b - a
    return y[1] + 0.5 * n * (a + b + n * c)


class _DaySolver:
    """Iteration state shared by the three events of one UTC day."""

    def __init__(self, jd0: float, observer: Observer, h0: float, max_iterations: int, tolerance_seconds: float):
        self.jd0 = jd0
        self.observer = observer
        self.h0 = h0
        self.max_iterations = max_iterations
        self.tol_days = tolerance_seconds / ts.SECONDS_PER_DAY

        samples = [moon_equatorial(ts.utc_to_tt(jd0 + 0.5 * k)) for k in range(3)]
        self.ras = _unwrap([s[0] for s in samples])
        self.decs = [s[1] for s in samples]
        self.theta0 = apparent_sidereal_time(ts.utc_to_ut1(jd0))

    def position(self, m: float, interpolated: bool) -> Tuple[float, float]:
        if interpolated:
            return _interpolate(self.ras, m), _interpolate(self.decs, m)
        ra, dec, _ = moon_equatorial(ts.utc_to_tt(self.jd0 + m))
        return ra, dec

    def hour_angle(self, m: float, ra: float) -> float:
        theta = self.theta0 + SIDEREAL_RATE_DEG * m
        return aa.wrap180(theta - self.observer.longitude - ra)

    def excess(self, m: float, interpolated: bool) -> Tuple[float, float, float]:
        """(h - h0, H, dec) at day fraction m, in degrees."""
        ra, dec = self.position(m, interpolated)
        H = self.hour_angle(m, ra)
        phi = math.radians(self.observer.latitude)
        d = math.radians(dec)
        sin_h = math.sin(phi) * math.sin(d) + math.cos(phi) * math.cos(d) * math.cos(math.radians(H))
        h = math.degrees(math.asin(max(-1.0, min(1.0, sin_h))))
        return h - self.h0, H, dec

    def correction(self, kind: EventKind, m: float, interpolated: bool) -> float:
        if kind == "transit":
            ra, _ = self.position(m, interpolated)
            return -self.hour_angle(m, ra) / 360.0

        dh, H, dec = self.excess(m, interpolated)
        denom = 360.0 * math.cos(math.radians(dec)) * math.cos(math.radians(self.observer.latitude)) * math.sin(math.radians(H))
        if abs(denom) < 1e-12:
            return math.nan
        return dh / denom

    def iterate(self, kind: EventKind, m: float, first_interpolated: bool) -> Tuple[float, bool]:
        interpolated = first_interpolated
        for _ in range(self.max_iterations):
            dm = self.correction(kind, m, interpolated)
            if math.isnan(dm):
                return m, False
            m += dm
            if abs(dm) < self.tol_days and not interpolated:
                return m, True
            interpolated = False
        return m, False

    def brackets(self) -> Tuple[List[Tuple[float, float]], List[Tuple[float, float]]]:
        """Upward and downward sign changes of the interpolated h - h0 over the day."""
        step = 1.0 / SCAN_STEPS
        ups: List[Tuple[float, float]] = []
        downs: List[Tuple[float, float]] = []
        prev = self.excess(0.0, True)[0]
        for k in range(1, SCAN_STEPS + 1):
            cur = self.excess(k * step, True)[0]
            if prev < 0.0 <= cur:
                ups.append(((k - 1) * step, k * step))
            elif cur < 0.0 <= prev:
                downs.append(((k - 1) * step, k * step))
            prev = cur
        return ups, downs

    def bisect(self, a: float, b: float, fa: float) -> Tuple[float, bool]:
        for _ in range(60):
            if b - a < self.tol_days:
                return 0.5 * (a + b), True
            mid = 0.5 * (a + b)
            fm = self.excess(mid, False)[0]
            if (fm < 0.0) == (fa < 0.0):
                a, fa = mid, fm
            else:
                b = mid
        return 0.5 * (a + b), False

    def warn_not_converged(self, kind: EventKind) -> None:
        logger.warning(
            "moon %s did not converge in %d iterations (day JD %.1f, observer %s)",
            kind, self.max_iterations, self.jd0, self.observer,
        )
        warnings.warn(
            f"moon {kind} did not converge for the day starting JD {self.jd0}",
            SolverNonConvergence,
            stacklevel=4,
        )

    def solve_transit(self, m_start: float) -> EventTime:
        m, converged = self.iterate("transit", m_start, True)

        if not (0.0 <= m < 1.0):
            shifted = m + 1.0 if m < 0.0 else m - 1.0
            m2, converged2 = self.iterate("transit", shifted, False)
            if 0.0 <= m2 < 1.0:
                m, converged = m2, converged2
            else:
                logger.debug("transit at m=%.5f falls outside the UTC day starting %.1f", m, self.jd0)

        if not converged:
            self.warn_not_converged("transit")
        return EventTime(jd_utc=self.jd0 + m, valid=True, converged=converged)

    def solve_crossing(self, kind: EventKind, candidates: List[Tuple[float, float]]) -> EventTime:
        """First horizon crossing of the given direction confirmed by the full series."""
        step = 1.0 / SCAN_STEPS
        for lo, hi in candidates:
            a, b = max(0.0, lo - step), min(1.0, hi + step)
            fa = self.excess(a, False)[0]
            fb = self.excess(b, False)[0]
            upward = fa < 0.0 <= fb
            downward = fb < 0.0 <= fa
            if not (upward if kind == "rise" else downward):
                logger.debug("moon %s near m=%.4f not confirmed by the series", kind, lo)
                continue

            m, converged = self.iterate(kind, a + (b - a) * fa / (fa - fb), True)
            strayed = not (a - self.tol_days <= m <= b + self.tol_days)
            if strayed or abs(self.excess(m, False)[0]) > RESIDUAL_TOLERANCE_DEG:
                logger.debug("moon %s iteration missed the crossing in [%.5f, %.5f]; bisecting", kind, a, b)
                m, converged = self.bisect(a, b, fa)

            if not (0.0 <= m < 1.0):
                continue
            if not converged:
                self.warn_not_converged(kind)
            return EventTime(jd_utc=self.jd0 + m, valid=True, converged=converged)
        return _invalid_event()


def rise_transit_set(
    jd_utc: float,
    observer: Observer,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS,
) -> RiseTransitSet:
    """
    Rise, transit and set of the Moon during the UTC day containing jd_utc.

    Rise and set are the first upward and downward crossings of the target
    altitude inside the day. If there is neither, the state is
    "circumpolar_up" ("circumpolar_down") when the Moon stays above (below)
    it. A transit is always reported; on the one day a month without a
    meridian passage it falls just outside the day.
    """
    jd0 = ts.utc_day_start(jd_utc)
    h0 = target_altitude(jd0 + 0.5, observer)
    solver = _DaySolver(jd0, observer, h0, max_iterations, tolerance_seconds)

    m0 = (solver.ras[0] + observer.longitude - solver.theta0) / 360.0
    m0 -= math.floor(m0)
    transit = solver.solve_transit(m0)

    ups, downs = solver.brackets()
    rise = solver.solve_crossing("rise", ups)
    set_ = solver.solve_crossing("set", downs)

    if not rise.valid and not set_.valid:
        state: RiseSetState = "circumpolar_up" if solver.excess(0.5, True)[0] >= 0.0 else "circumpolar_down"
        return RiseTransitSet(rise, transit, set_, state)
    return RiseTransitSet(rise, transit, set_, "done")


def event_to_datetime(event: EventTime, utc_offset_hours: float = 0.0) -> DateTimeResult:
    """EventTime -> calendar fields in civil time (UTC + utc_offset_hours)."""
    if not event.valid:
        return DateTimeResult.invalid()
    cd = ts.calendar_date(ts.utc_to_local(event.jd_utc, utc_offset_hours))
    day, hour, minute, second = ts.split_day(cd.day)
    return DateTimeResult(True, cd.year, cd.month, day, hour, minute, second)
