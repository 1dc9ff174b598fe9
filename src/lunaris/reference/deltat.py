from __future__ import annotations

"""
lunaris.reference.deltat

ΔT (= TT - UT1) in seconds.

Zones
-----
1) measured: historical and IERS-derived samples, linear interpolation;
2) predicted: samples appended after the measured range, same interpolation;
3) outside both: continuation of the first/last segment slope. The value is
   flagged as lower confidence through TableRangeWarning; it is never an error.

Both zones are merged into one sorted table when it is first loaded; any
predicted sample at or before the last measured one is dropped then, not at
query time.

Packaged snapshot (decimal_year, delta_t_seconds):
  lunaris/reference/data/deltat_measured.csv
  lunaris/reference/data/deltat_predicted.csv
The files are produced offline from IERS distributions; nothing here parses
IERS formats or touches the network.

The Espenak-Meeus piecewise polynomials are kept as an independent model for
comparison (method="em2006").
"""

from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Iterator, Optional, Tuple
import csv
import importlib.resources
import logging
import os
import warnings
from pathlib import Path

from ..core.errors import TableRangeWarning
from ..core.time import decimal_year

logger = logging.getLogger(__name__)

ENV_MEASURED = "LUNARIS_DELTAT_MEASURED"
ENV_PREDICTED = "LUNARIS_DELTAT_PREDICTED"


@dataclass(frozen=True)
class DeltaTTable:
    """ΔT samples (seconds) against decimal year, joined by straight lines."""
    x: Tuple[float, ...]   # strictly increasing
    y: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.x) != len(self.y):
            raise ValueError("ΔT table columns differ in length")
        if len(self.x) < 2:
            raise ValueError("ΔT table needs at least two samples")
        for i in range(1, len(self.x)):
            if not (self.x[i] > self.x[i - 1]):
                raise ValueError("ΔT table x is not strictly increasing")

    def __len__(self) -> int:
        return len(self.x)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(zip(self.x, self.y))

    @property
    def range(self) -> Tuple[float, float]:
        return (self.x[0], self.x[-1])

    def contains(self, xq: float) -> bool:
        return self.x[0] <= xq <= self.x[-1]

    def eval(self, xq: float) -> float:
        if not self.contains(xq):
            raise ValueError(f"{xq} is outside the table [{self.x[0]}, {self.x[-1]}]")
        i = min(bisect_right(self.x, xq), len(self.x) - 1)
        return self._lerp(i - 1, i, xq)

    def extrapolate(self, xq: float) -> float:
        """Extend the first or last segment linearly."""
        if xq < self.x[0]:
            return self._lerp(0, 1, xq)
        if xq > self.x[-1]:
            n = len(self.x)
            return self._lerp(n - 2, n - 1, xq)
        return self.eval(xq)

    def _lerp(self, i: int, j: int, xq: float) -> float:
        x0, x1 = self.x[i], self.x[j]
        y0, y1 = self.y[i], self.y[j]
        return y0 + (y1 - y0) * (xq - x0) / (x1 - x0)

    @classmethod
    def merge(cls, measured: "DeltaTTable", predicted: Optional["DeltaTTable"]) -> "DeltaTTable":
        """Append predicted samples that lie strictly after the measured range."""
        if predicted is None:
            return measured
        last = measured.x[-1]
        tail = [(x, y) for (x, y) in predicted if x > last]
        dropped = len(predicted) - len(tail)
        if dropped:
            logger.debug("ΔT merge: dropped %d predicted samples overlapping the measured range", dropped)
        return cls(measured.x + tuple(x for x, _ in tail), measured.y + tuple(y for _, y in tail))


def _read_csv_xy(rows: Iterable[dict], *, xcol: str, ycol: str) -> DeltaTTable:
    pairs = [(float(r[xcol]), float(r[ycol])) for r in rows]
    return DeltaTTable(tuple(x for x, _ in pairs), tuple(y for _, y in pairs))


def _load_csv(env_var: str, filename: str) -> DeltaTTable:
    p = os.environ.get(env_var, "").strip()
    if p:
        path = Path(p).expanduser()
        logger.debug("loading ΔT samples from %s", path)
        with path.open("r", encoding="utf-8", newline="") as f:
            return _read_csv_xy(csv.DictReader(f), xcol="decimal_year", ycol="delta_t_seconds")

    res = importlib.resources.files("lunaris").joinpath("reference/data/" + filename)
    with res.open("r", encoding="utf-8", newline="") as f:
        return _read_csv_xy(csv.DictReader(f), xcol="decimal_year", ycol="delta_t_seconds")


@lru_cache(maxsize=1)
def load_delta_t_table() -> DeltaTTable:
    """
    Measured + predicted ΔT as one table, built once per process.

    Search order for each zone:
      1) LUNARIS_DELTAT_MEASURED / LUNARIS_DELTAT_PREDICTED (path to CSV)
      2) packaged data
    """
    measured = _load_csv(ENV_MEASURED, "deltat_measured.csv")
    predicted = _load_csv(ENV_PREDICTED, "deltat_predicted.csv")
    tbl = DeltaTTable.merge(measured, predicted)
    logger.debug("ΔT table: %d samples over %.2f..%.2f", len(tbl), *tbl.range)
    return tbl


# ---------------------------------------------------------------------------
# Espenak–Meeus (NASA) piecewise polynomial
# ---------------------------------------------------------------------------

def _poly(u: float, coeffs: Tuple[float, ...]) -> float:
    """coeffs[0] + coeffs[1] u + coeffs[2] u^2 + ..."""
    out = 0.0
    for c in coeffs[::-1]:
        out = out * u + c
    return out


def delta_t_em2006(y: float) -> float:
    """
    Espenak–Meeus piecewise polynomial ΔT(y) in seconds (Five Millennium Canon).
    """
    if y < -500.0:
        u = (y - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u
    if y < 500.0:
        return _poly(y / 100.0, (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521))
    if y < 1600.0:
        u = (y - 1000.0) / 100.0
        return _poly(u, (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073))
    if y < 1700.0:
        t = y - 1600.0
        return 120.0 - 0.9808 * t - 0.01532 * t * t + (t ** 3) / 7129.0
    if y < 1800.0:
        t = y - 1700.0
        return 8.83 + 0.1603 * t - 0.0059285 * t * t + 0.00013336 * (t ** 3) - (t ** 4) / 1174000.0
    if y < 1860.0:
        t = y - 1800.0
        return _poly(t, (13.72, -0.332447, 0.0068612, 0.0041116, -0.00037436, 0.0000121272, -0.0000001699, 0.000000000875))
    if y < 1900.0:
        t = y - 1860.0
        return 7.62 + 0.5737 * t - 0.251754 * (t ** 2) + 0.01680668 * (t ** 3) - 0.0004473624 * (t ** 4) + (t ** 5) / 233174.0
    if y < 1920.0:
        t = y - 1900.0
        return -2.79 + 1.494119 * t - 0.0598939 * (t ** 2) + 0.0061966 * (t ** 3) - 0.000197 * (t ** 4)
    if y < 1941.0:
        t = y - 1920.0
        return 21.20 + 0.84493 * t - 0.076100 * (t ** 2) + 0.0020936 * (t ** 3)
    if y < 1961.0:
        t = y - 1950.0
        return 29.07 + 0.407 * t - (t ** 2) / 233.0 + (t ** 3) / 2547.0
    if y < 1986.0:
        t = y - 1975.0
        return 45.45 + 1.067 * t - (t ** 2) / 260.0 - (t ** 3) / 718.0
    if y < 2005.0:
        t = y - 2000.0
        return _poly(t, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599))
    if y < 2050.0:
        t = y - 2000.0
        return 62.92 + 0.32217 * t + 0.005589 * (t ** 2)
    u = (y - 1820.0) / 100.0
    if y < 2150.0:
        return -20.0 + 32.0 * u * u - 0.5628 * (2150.0 - y)
    return -20.0 + 32.0 * u * u


def delta_t_for_year(y: float, *, method: str = "table") -> float:
    """
    ΔT(y) in seconds, where y is a decimal year.

    method:
      - "table": merged measured/predicted table; outside it the edge slope is
                 continued and a TableRangeWarning is issued.
      - "em2006": polynomial only (Espenak–Meeus / NASA).
    """
    method = method.lower().strip()
    if method not in {"table", "em2006"}:
        raise ValueError("method must be one of: table, em2006")

    if method == "em2006":
        return delta_t_em2006(y)

    tbl = load_delta_t_table()
    if tbl.contains(y):
        return tbl.eval(y)

    a, b = tbl.range
    logger.debug("ΔT for %.3f extrapolated beyond [%.2f, %.2f]", y, a, b)
    warnings.warn(
        f"ΔT requested for {y:.2f}, outside the table range [{a:.2f}, {b:.2f}]; value is extrapolated",
        TableRangeWarning,
        stacklevel=3,
    )
    return tbl.extrapolate(y)


def delta_t_seconds(jd: float, *, method: str = "table") -> float:
    """ΔT in seconds at Julian Day jd."""
    return delta_t_for_year(decimal_year(jd), method=method)


def is_extrapolated(jd: float) -> bool:
    """True when ΔT at jd falls outside the tabulated samples."""
    return not load_delta_t_table().contains(decimal_year(jd))
