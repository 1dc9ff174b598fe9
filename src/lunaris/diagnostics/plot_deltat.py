#!/usr/bin/env python3
"""
Plot ΔT from the packaged tables, marking where the values are extrapolated.

  lunaris diag plot-deltat --y0 1900 --y1 2060 --show-poly
"""
from __future__ import annotations

import argparse
import warnings

from lunaris.core.errors import TableRangeWarning


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


def _sample(np, years, method: str):
    from lunaris.reference import deltat as dt

    with warnings.catch_warnings():
        # the requested span may run past the table
        warnings.simplefilter("ignore", TableRangeWarning)
        return np.array([dt.delta_t_for_year(float(y), method=method) for y in years], dtype=float)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot ΔT = TT - UT1 from lunaris.reference.deltat.")
    p.add_argument("--y0", type=int, default=1620, help="first year")
    p.add_argument("--y1", type=int, default=2040, help="last year")
    p.add_argument("--step", type=float, default=0.25, help="years between samples")
    p.add_argument("--out", default="deltat.png", help="PNG file to write")
    p.add_argument("--show-poly", action="store_true", help="overlay the Espenak-Meeus polynomial, with a residual panel")
    p.add_argument("--show-table", action="store_true", help="mark the tabulated samples")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must not precede --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    from lunaris.reference import deltat as dt

    tbl = dt.load_delta_t_table()
    lo, hi = tbl.range

    years = np.arange(float(args.y0), float(args.y1) + 1e-12, float(args.step), dtype=float)
    table = _sample(np, years, "table")
    inside = (years >= lo) & (years <= hi)

    if args.show_poly:
        fig, (ax, ax_res) = plt.subplots(2, 1, figsize=(10, 7), sharex=True, height_ratios=[3, 1])
    else:
        fig, ax = plt.subplots(figsize=(10, 5))
        ax_res = None

    ax.plot(years[inside], table[inside], linewidth=2, label=f"table {lo:.0f}-{hi:.0f}")
    if (~inside).any():
        ax.plot(years[~inside], table[~inside], linewidth=1, linestyle=":", color="tab:red", label="extrapolated")

    if args.show_table:
        xs = np.array(tbl.x, dtype=float)
        ys = np.array(tbl.y, dtype=float)
        keep = (xs >= args.y0) & (xs <= args.y1)
        ax.scatter(xs[keep], ys[keep], s=8, alpha=0.6, color="black", label=f"{int(keep.sum())} samples")

    if ax_res is not None:
        poly = _sample(np, years, "em2006")
        ax.plot(years, poly, linewidth=1.2, linestyle="--", label="Espenak-Meeus polynomial")
        ax_res.plot(years, table - poly, linewidth=1.5)
        ax_res.axhline(0.0, color="gray", linewidth=0.8)
        ax_res.set_ylabel("table - poly (s)")
        ax_res.set_xlabel("Year")
        ax_res.grid(True, alpha=0.3)
    else:
        ax.set_xlabel("Year")

    ax.set_title("ΔT = TT - UT1")
    ax.set_ylabel("seconds")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")

    fig.tight_layout()
    fig.savefig(args.out, dpi=150)
    print(f"ΔT over {args.y0}..{args.y1}: {len(years)} points, {int((~inside).sum())} extrapolated -> {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
