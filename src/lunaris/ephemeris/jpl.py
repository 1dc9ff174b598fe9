#ephemeris/jpl.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

from . import require_ephemeris

PathLike = Union[str, Path]


@dataclass(frozen=True)
class MoonSample:
    """Apparent geocentric Moon, ecliptic and equator of date (degrees, km)."""
    jd_tt: float
    longitude_deg: float
    latitude_deg: float
    distance_km: float
    ra_deg: float
    dec_deg: float


def kernel_span(path: PathLike) -> Tuple[float, float]:
    """(first, last) JD covered by every segment of an SPK kernel."""
    require_ephemeris()
    from jplephem.spk import SPK

    kernel = SPK.open(str(path))
    try:
        first = max(seg.start_jd for seg in kernel.segments)
        last = min(seg.end_jd for seg in kernel.segments)
    finally:
        kernel.close()
    return first, last


@dataclass
class JplMoon:
    """
    Moon positions from a JPL development ephemeris.

    Requires optional deps:
      pip install "lunaris[ephemeris]"
    """
    timescale: object
    earth: object
    moon: object
    span: Tuple[float, float]

    @classmethod
    def load(cls, path: PathLike) -> "JplMoon":
        require_ephemeris()
        from skyfield.api import load, load_file

        eph = load_file(str(path))
        return cls(
            timescale=load.timescale(builtin=True),
            earth=eph["earth"],
            moon=eph["moon"],
            span=kernel_span(path),
        )

    def covers(self, jd_tt: float) -> bool:
        return self.span[0] <= jd_tt <= self.span[1]

    def position(self, jd_tt: float) -> MoonSample:
        from skyfield.framelib import ecliptic_frame

        t = self.timescale.tt_jd(jd_tt)
        app = self.earth.at(t).observe(self.moon).apparent()
        lat, lon, dist = app.frame_latlon(ecliptic_frame)
        ra, dec, _ = app.radec(epoch="date")
        return MoonSample(
            jd_tt=jd_tt,
            longitude_deg=lon.degrees % 360.0,
            latitude_deg=lat.degrees,
            distance_km=dist.km,
            ra_deg=(ra.hours * 15.0) % 360.0,
            dec_deg=dec.degrees,
        )
