#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from lunaris.core.time import julian_day
from lunaris.ephemeris.jpl import JplMoon
from lunaris.reference import astro_args as aa
from lunaris.reference.lunar import lunar_position
from lunaris.reference.rise_set import moon_equatorial


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "lunaris[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "lunaris[diagnostics]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the analytical Moon against a JPL kernel.")
    p.add_argument("kernel", help="path to an SPK file, e.g. de421.bsp")
    p.add_argument("--year-start", type=int, default=1950)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--step-days", type=float, default=5.0)
    p.add_argument("--out-png", default="moon_validation.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    print(f"kernel: {args.kernel}")
    jpl = JplMoon.load(args.kernel)
    lo, hi = jpl.span

    jd_start = max(julian_day(args.year_start, 1, 1.0), lo + 1.0)
    jd_end = min(julian_day(args.year_end, 1, 1.0), hi - 1.0)
    if jd_start > jd_end:
        raise ValueError(f"Requested range is outside the kernel range [{lo}, {hi}]")

    jds = np.arange(jd_start, jd_end, args.step_days)
    years = 2000 + (jds - aa.J2000_TT) / 365.25
    print(f"{len(jds)} instants, {years[0]:.0f}..{years[-1]:.0f}")

    err_lon = []
    err_lat = []
    err_dist = []
    err_ra = []
    err_dec = []

    for jd in jds:
        jd = float(jd)
        ref = jpl.position(jd)
        lun = lunar_position(jd)
        ra, dec, _ = moon_equatorial(jd)

        err_lon.append(aa.wrap180(lun.L_app_deg - ref.longitude_deg) * 3600.0)
        err_lat.append((lun.B_deg - ref.latitude_deg) * 3600.0)
        err_dist.append(lun.distance_km - ref.distance_km)
        err_ra.append(aa.wrap180(ra - ref.ra_deg) * 3600.0)
        err_dec.append((dec - ref.dec_deg) * 3600.0)

    for name, e in (("lon", err_lon), ("lat", err_lat), ("ra", err_ra), ("dec", err_dec)):
        a = np.abs(np.array(e))
        print(f"  {name:4s} rms = {np.sqrt(np.mean(a * a)):8.2f}\"  max = {a.max():8.2f}\"")
    d = np.abs(np.array(err_dist))
    print(f"  dist rms = {np.sqrt(np.mean(d * d)):8.3f} km max = {d.max():8.3f} km")

    fig, axs = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

    axs[0].scatter(years, err_lon, s=1, alpha=0.5, color="blue")
    axs[0].set_title("apparent longitude, series - JPL")
    axs[0].set_ylabel("arcsec")
    axs[0].grid(True, alpha=0.3)

    axs[1].scatter(years, err_lat, s=1, alpha=0.5, color="green")
    axs[1].set_title("latitude, series - JPL")
    axs[1].set_ylabel("arcsec")
    axs[1].grid(True, alpha=0.3)

    axs[2].scatter(years, err_dist, s=1, alpha=0.5, color="gray")
    axs[2].set_title("geocentric distance, series - JPL")
    axs[2].set_ylabel("km")
    axs[2].set_xlabel("Year")
    axs[2].grid(True, alpha=0.3)

    plt.suptitle(f"Moon validation against {args.kernel} ({years[0]:.0f} to {years[-1]:.0f})", fontsize=14)
    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"wrote {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
