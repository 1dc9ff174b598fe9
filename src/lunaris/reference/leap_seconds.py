from __future__ import annotations

"""
lunaris.reference.leap_seconds

Cumulative TAI-UTC offsets of the integer leap-second era (1972 onwards).

The table records *when* each offset takes effect; lookups are a step
function and never interpolate. Before the first entry the offset is 0.

Packaged snapshot:
  lunaris/reference/data/tai_utc.csv   (columns: date, jd, tai_minus_utc)
Override with LUNARIS_LEAP_SECONDS_TABLE=/path/to/file.csv.
"""

from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Iterator, Tuple
import csv
import importlib.resources
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_VAR = "LUNARIS_LEAP_SECONDS_TABLE"
DATA_FILE = "tai_utc.csv"


@dataclass(frozen=True)
class LeapSecondTable:
    jd: Tuple[float, ...]              # UTC instants, strictly increasing
    tai_minus_utc: Tuple[float, ...]   # seconds, non-decreasing

    def __post_init__(self) -> None:
        if len(self.jd) != len(self.tai_minus_utc):
            raise ValueError("leap-second table columns differ in length")
        for i in range(1, len(self.jd)):
            if not (self.jd[i] > self.jd[i - 1]):
                raise ValueError("leap-second instants are not strictly increasing")
            if self.tai_minus_utc[i] < self.tai_minus_utc[i - 1]:
                raise ValueError("leap-second offsets decrease")

    def __len__(self) -> int:
        return len(self.jd)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(zip(self.jd, self.tai_minus_utc))

    def lookup(self, jd_utc: float) -> float:
        """TAI-UTC in seconds from the greatest entry at or before jd_utc."""
        i = bisect_right(self.jd, jd_utc)
        if i == 0:
            return 0.0
        return self.tai_minus_utc[i - 1]


def _read_csv(rows: Iterable[dict]) -> LeapSecondTable:
    jds: list[float] = []
    offs: list[float] = []
    for r in rows:
        jds.append(float(r["jd"]))
        offs.append(float(r["tai_minus_utc"]))
    return LeapSecondTable(tuple(jds), tuple(offs))


@lru_cache(maxsize=1)
def load_leap_second_table() -> LeapSecondTable:
    """
    Load the leap-second table once per process.

    Search order:
      1) LUNARIS_LEAP_SECONDS_TABLE environment variable (path to CSV)
      2) packaged data (lunaris/reference/data/tai_utc.csv)
    """
    p = os.environ.get(ENV_VAR, "").strip()
    if p:
        path = Path(p).expanduser()
        logger.debug("loading leap-second table from %s", path)
        with path.open("r", encoding="utf-8", newline="") as f:
            return _read_csv(csv.DictReader(f))

    res = importlib.resources.files("lunaris").joinpath("reference/data/" + DATA_FILE)
    with res.open("r", encoding="utf-8", newline="") as f:
        return _read_csv(csv.DictReader(f))


def leap_seconds(jd_utc: float) -> float:
    """Cumulative TAI-UTC (seconds) in effect at jd_utc."""
    return load_leap_second_table().lookup(jd_utc)
