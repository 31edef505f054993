from __future__ import annotations

import argparse
from datetime import datetime
import importlib
import inspect
import logging
import math
import sys
from typing import Optional


def _parse_when(s: Optional[str], tz: Optional[int]) -> Optional[datetime]:
    """
    ISO-8601 date/time. A naive value is read at --tz if given, otherwise in
    the host's local timezone.
    """
    from sunphase.core.time import coerce_offset, fixed_offset

    if s is None:
        return None
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as e:
        raise SystemExit(f"--time: not an ISO-8601 date/time: {s!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=fixed_offset(coerce_offset(tz, "--tz"))) if tz is not None else dt.astimezone()
    return dt


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


def _location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, required=True, help="latitude in degrees (positive North)")
    p.add_argument("--lon", type=float, required=True, help="longitude in degrees (positive East)")
    p.add_argument("--alt", type=float, default=0.0, help="altitude in meters")
    p.add_argument("--time", default=None, help="ISO-8601 date/time (default: now)")
    p.add_argument("--tz", type=int, default=None, help="offset in minutes from UTC (default: from --time or host)")


def _engine(args):
    import sunphase

    when = _parse_when(args.time, args.tz)
    return sunphase.make_engine(args.lat, args.lon, args.alt, when=when, timezone_offset=args.tz)


def cmd_position(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="sunphase position", description="Sun azimuth and elevation at an instant.")
    _location_args(p)
    args = p.parse_args(argv)

    eng = _engine(args)
    pos = eng.sun_position
    print(f"Time      : {eng.reference_instant().isoformat()}")
    print(f"Azimuth   : {pos.azimuth_deg:.4f} deg")
    print(f"Elevation : {pos.elevation_deg:.4f} deg")
    return 0


def cmd_events(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="sunphase events", description="Solar events for the day of an instant.")
    _location_args(p)
    args = p.parse_args(argv)

    eng = _engine(args)
    d = eng.daily
    print(f"Day (UTC)        : {d.day.isoformat()}")
    print(f"Equation of time : {d.eqtime_min:.4f} min")
    print(f"Declination      : {math.degrees(d.declination_rad):.4f} deg")
    print()
    for name, when in eng.events().as_dict().items():
        print(f"  {name.replace('_', ' '):<18} {when.strftime('%Y-%m-%d %H:%M:%S %z')}")
    length = eng.day_length()
    print()
    print(f"Day length       : {length.total_seconds() / 3600.0:.4f} h")
    return 0


def cmd_blend(argv: list[str]) -> int:
    from sunphase.timeofday import TimeOfDayDriver

    p = argparse.ArgumentParser(prog="sunphase blend", description="Daylight blend weight at an instant.")
    _location_args(p)
    p.add_argument("--blend-minutes", type=float, default=5.0)
    args = p.parse_args(argv)

    when = _parse_when(args.time, args.tz) or datetime.now().astimezone()
    drv = TimeOfDayDriver(
        (args.lat, args.lon, args.alt),
        blend_minutes=args.blend_minutes,
        timezone_offset=args.tz,
        clock=lambda: when,
    )
    drv.init()
    print(f"{drv.update():.6f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="sunphase", description="Sun position and solar events toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="log recomputations")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("position", help="Sun azimuth and elevation at an instant")
    sub.add_parser("events", help="Sunrise, sunset, noon, midnight and twilights for a day")
    sub.add_parser("blend", help="Daylight blend weight (0 night .. 1 day)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (need the diagnostics extras)")
    p_diag.add_argument(
        "tool",
        choices=["year-table", "day-length-plot"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    from sunphase.core.errors import SunphaseError

    commands = {"position": cmd_position, "events": cmd_events, "blend": cmd_blend}
    if args.cmd in commands:
        try:
            return commands[args.cmd](rest)
        except SunphaseError as e:
            raise SystemExit(f"sunphase {args.cmd}: {e}") from e

    if args.cmd == "diag":
        tool_map = {
            "year-table": "sunphase.diagnostics.year_table",
            "day-length-plot": "sunphase.diagnostics.day_length_plot",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
