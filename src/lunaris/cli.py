from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys
from typing import Tuple

from .core.errors import LunarisError


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2}(\.\d*)?)?$")


def _parse_ymd(s: str) -> Tuple[int, int, int]:
    if not _DATE_RE.match(s):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}")
    y, m, d = map(int, s.split("-"))
    return y, m, d


def _parse_hms(s: str) -> Tuple[int, int, float]:
    if not _TIME_RE.match(s):
        raise argparse.ArgumentTypeError(f"expected HH:MM[:SS], got {s!r}")
    parts = s.split(":")
    h, m = int(parts[0]), int(parts[1])
    sec = float(parts[2]) if len(parts) > 2 else 0.0
    return h, m, sec


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


# ------------------------------------------------------------
# Shared argument groups
# ------------------------------------------------------------

def _add_instant_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--jd", type=float, help="Julian Day")
    g.add_argument("--date", type=_parse_ymd, help="calendar date YYYY-MM-DD")
    p.add_argument("--time", type=_parse_hms, default=(0, 0, 0.0), help="time of day HH:MM[:SS] (with --date)")


def _instant_jd(args: argparse.Namespace) -> float:
    from .core.time import julian_day_from_hms

    if args.jd is not None:
        return float(args.jd)
    y, mo, d = args.date
    h, mi, s = args.time
    return julian_day_from_hms(y, mo, d, h, mi, s)


def _add_observer_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--lon", type=float, help="observer longitude in degrees (positive West)")
    g.add_argument("--lon-east", type=float, help="observer longitude in degrees (positive East)")
    p.add_argument("--lat", type=float, required=True, help="observer latitude in degrees (positive North)")
    p.add_argument("--height", type=float, default=0.0, help="height above sea level, metres")
    p.add_argument("--pressure", type=float, default=1013.0, help="air pressure, millibars")
    p.add_argument("--temp", type=float, default=10.0, help="air temperature, Celsius")
    p.add_argument("--utc-offset", type=float, default=0.0, help="civil time offset from UTC, hours")


def _observer(args: argparse.Namespace):
    from .core.types import Observer

    kw = dict(
        height=args.height,
        pressure=args.pressure,
        temperature=args.temp,
        utc_offset=args.utc_offset,
    )
    if args.lon_east is not None:
        return Observer.from_east_longitude(args.lon_east, args.lat, **kw)
    return Observer(longitude=args.lon, latitude=args.lat, **kw)


def _fmt_event(label: str, ev) -> str:
    if not ev.is_valid:
        return f"  {label:8s}: none on this day"
    return f"  {label:8s}: {ev.year:04d}-{ev.month:02d}-{ev.day:02d} {ev.hour:02d}:{ev.minute:02d}:{ev.second:05.2f}"


# ------------------------------------------------------------
# Commands
# ------------------------------------------------------------

def cmd_jd(argv: list[str]) -> int:
    from .reference import time_scales as ts

    p = argparse.ArgumentParser(prog="lunaris jd", description="Calendar date (UTC) -> Julian Day, TT and UT1.")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("time", nargs="?", type=_parse_hms, default=(0, 0, 0.0), help="HH:MM[:SS]")
    args = p.parse_args(argv)

    y, mo, d = args.date
    h, mi, s = args.time
    jd = ts.julian_day_from_hms(y, mo, d, h, mi, s)

    print(f"JD_UTC = {jd:.8f}")
    print(f"JD_TT  = {ts.utc_to_tt(jd):.8f}")
    print(f"JD_UT1 = {ts.utc_to_ut1(jd):.8f}")
    return 0


def cmd_calendar(argv: list[str]) -> int:
    from .reference import time_scales as ts

    p = argparse.ArgumentParser(prog="lunaris calendar", description="Julian Day -> calendar date.")
    p.add_argument("jd", type=float)
    args = p.parse_args(argv)

    cd = ts.calendar_date(args.jd)
    day, h, m, s = ts.split_day(cd.day)
    print(f"{cd.year:04d}-{cd.month:02d}-{day:02d} {h:02d}:{m:02d}:{s:06.3f}")
    return 0


def cmd_deltat(argv: list[str]) -> int:
    from .reference import deltat as dt
    from .reference import leap_seconds as ls
    from .reference import time_scales as ts

    p = argparse.ArgumentParser(prog="lunaris deltat", description="ΔT, leap seconds and UT1-UTC at an instant.")
    _add_instant_args(p)
    p.add_argument("--method", choices=["table", "em2006"], default="table")
    args = p.parse_args(argv)

    jd = _instant_jd(args)
    dT = dt.delta_t_seconds(jd, method=args.method)

    print(f"JD_UTC        = {jd:.6f}")
    print(f"decimal year  = {ts.decimal_year(jd):.4f}")
    print(f"ΔT ({args.method:6s}) = {dT:.3f} s" + ("  (extrapolated)" if dt.is_extrapolated(jd) else ""))
    print(f"TAI-UTC       = {ls.leap_seconds(jd):.0f} s")
    print(f"UT1-UTC       = {ts.ut1_minus_utc(jd):.3f} s")
    return 0


def cmd_sidereal(argv: list[str]) -> int:
    from .format import to_hms
    from .reference import sidereal

    p = argparse.ArgumentParser(prog="lunaris sidereal", description="Greenwich and local sidereal time.")
    _add_instant_args(p)
    p.add_argument("--lon", type=float, default=0.0, help="observer longitude in degrees (positive West)")
    args = p.parse_args(argv)

    jd = _instant_jd(args)
    gmst = sidereal.mean_sidereal_time(jd)
    gast = sidereal.apparent_sidereal_time(jd)
    lst = sidereal.local_sidereal_time(jd, args.lon)

    print(f"JD_UT = {jd:.8f}")
    print(f"  GMST = {gmst:.8f} deg  ({to_hms(gmst, 3)})")
    print(f"  GAST = {gast:.8f} deg  ({to_hms(gast, 3)})")
    print(f"  LST  = {lst:.8f} deg  ({to_hms(lst, 3)})")
    return 0


def cmd_moon(argv: list[str]) -> int:
    from .api import compute
    from .core.types import MoonInput
    from .format import to_dms, to_hms

    p = argparse.ArgumentParser(prog="lunaris moon", description="Moon position, phase and rise/transit/set.")
    _add_instant_args(p)
    _add_observer_args(p)
    p.add_argument("--civil", action="store_true", help="treat the instant as UTC (default: TT-equivalent)")
    p.add_argument("--events", action="store_true", help="also compute rise, transit and set")
    args = p.parse_args(argv)

    obs = _observer(args)
    inp = MoonInput(
        jd=_instant_jd(args),
        longitude=obs.longitude,
        latitude=obs.latitude,
        height=obs.height,
        pressure=obs.pressure,
        temperature=obs.temperature,
        utc_offset=obs.utc_offset,
    )
    out = compute(inp, civil_time=args.civil, with_events=args.events)

    print(f"JD = {inp.jd:.6f} ({'UTC' if args.civil else 'TT'})")
    print()
    print("Phase:")
    print(f"  Phase angle          = {out.phase_angle:.6f}")
    print(f"  Illumination angle   = {out.illumination_angle:.6f}")
    print(f"  Illuminated fraction = {out.illuminated_fraction:.4f}")
    print(f"  Age                  = {out.phase_age:.3f} d")
    print(f"  Name                 = {out.phase_name}")
    print()
    print("Geocentric (ecliptic of date):")
    print(f"  Longitude = {out.longitude:.6f}  ({to_dms(out.longitude, 2)})")
    print(f"  Latitude  = {out.latitude:.6f}  ({to_dms(out.latitude, 2)})")
    print(f"  Distance  = {out.distance:.3f} km")
    print()
    print("Topocentric:")
    print(f"  Right ascension = {to_hms(out.right_ascension, 3)}")
    print(f"  Declination     = {to_dms(out.declination, 2)}")
    print(f"  Hour angle      = {out.hour_angle:.6f}")
    print(f"  Azimuth         = {out.azimuth:.6f}")
    print(f"  Altitude        = {out.altitude:.6f}")

    if args.events:
        print()
        print(f"Events (UTC{obs.utc_offset:+g}h):")
        print(_fmt_event("Rise", out.rise))
        print(_fmt_event("Transit", out.transit))
        print(_fmt_event("Set", out.set))
    return 0


def cmd_riseset(argv: list[str]) -> int:
    from .api import rise_transit_set_local
    from .core.time import julian_day

    p = argparse.ArgumentParser(prog="lunaris riseset", description="Moonrise, transit and moonset for a UTC day.")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD (UTC day)")
    _add_observer_args(p)
    args = p.parse_args(argv)

    y, mo, d = args.date
    obs = _observer(args)
    rise, transit, set_ = rise_transit_set_local(julian_day(y, mo, d + 0.5), obs)

    print(f"Moon on {y:04d}-{mo:02d}-{d:02d} (times UTC{obs.utc_offset:+g}h):")
    print(_fmt_event("Rise", rise))
    print(_fmt_event("Transit", transit))
    print(_fmt_event("Set", set_))
    return 0


def cmd_format(argv: list[str]) -> int:
    from .format import to_dms, to_hms

    p = argparse.ArgumentParser(prog="lunaris format", description="Decimal degrees -> sexagesimal text.")
    p.add_argument("value", type=float)
    p.add_argument("--hms", action="store_true", help="format as time (degrees / 15)")
    p.add_argument("--precision", type=int, default=2)
    p.add_argument("--width", type=int, default=0)
    args = p.parse_args(argv)

    fn = to_hms if args.hms else to_dms
    print(fn(args.value, args.precision, args.width))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="lunaris", description="Moon position, phase and rise/set toolkit CLI.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="log to stderr (-v info, -vv debug)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("jd", help="Calendar date (UTC) -> Julian Day, TT and UT1.")
    sub.add_parser("calendar", help="Julian Day -> calendar date.")
    sub.add_parser("deltat", help="ΔT, leap seconds and UT1-UTC at an instant.")
    sub.add_parser("sidereal", help="Greenwich and local sidereal time.")
    sub.add_parser("moon", help="Moon position, phase and rise/transit/set.")
    sub.add_parser("riseset", help="Moonrise, transit and moonset for a UTC day.")
    sub.add_parser("format", help="Decimal degrees -> sexagesimal text.")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (numpy + matplotlib)")
    p_diag.add_argument("tool", choices=["plot-deltat"], help="Which diagnostic to run")

    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["validate-moon"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    commands = {
        "jd": cmd_jd,
        "calendar": cmd_calendar,
        "deltat": cmd_deltat,
        "sidereal": cmd_sidereal,
        "moon": cmd_moon,
        "riseset": cmd_riseset,
        "format": cmd_format,
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "diag":
            tool_map = {
                "plot-deltat": "lunaris.diagnostics.plot_deltat",
            }
            return _run_module_main(tool_map[args.tool], rest)

        if args.cmd == "ephem":
            tool_map = {
                "validate-moon": "lunaris.diagnostics.ephem.validate_moon",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except LunarisError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
