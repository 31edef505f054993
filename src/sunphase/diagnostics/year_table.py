#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone

from sunphase.core.types import Location
from sunphase.engines.sun import SunEngine


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "sunphase[diagnostics]"') from e


def hhmm(minutes: float) -> str:
    m = int(round(minutes)) % 1440
    return f"{m // 60:02d}:{m % 60:02d}"


def sweep_year(np, loc: Location, year: int, tz: int):
    """
    Drive one engine through every UTC day of the year.
    Returns (days, rise_min, set_min, length_h, noon_elev_deg) arrays.
    """
    t0 = datetime(year, 1, 1, tzinfo=timezone.utc)
    n = (datetime(year + 1, 1, 1, tzinfo=timezone.utc) - t0).days

    eng = SunEngine(loc, t0, tz)
    # solar noon can fall on the neighbouring UTC day near the antimeridian;
    # sampling it on a second engine keeps the day sweep one table per day
    noon_eng = SunEngine(loc, t0, tz)
    days = []
    rise = np.empty(n)
    set_ = np.empty(n)
    length = np.empty(n)
    elev = np.empty(n)
    for k in range(n):
        eng.set_time(t0 + timedelta(days=k))
        ev = eng.events()
        days.append(eng.daily.day)
        rise[k] = ev.sunrise.hour * 60 + ev.sunrise.minute + ev.sunrise.second / 60.0
        set_[k] = ev.sunset.hour * 60 + ev.sunset.minute + ev.sunset.second / 60.0
        length[k] = ev.day_length.total_seconds() / 3600.0
        noon_eng.set_time(ev.solar_noon)
        elev[k] = noon_eng.sun_position.elevation_deg
    return days, rise, set_, length, elev


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Sunrise/sunset table over one year.")
    p.add_argument("--lat", type=float, default=45.0, help="latitude in degrees (positive North)")
    p.add_argument("--lon", type=float, default=0.0, help="longitude in degrees (positive East)")
    p.add_argument("--alt", type=float, default=0.0, help="altitude in meters")
    p.add_argument("--year", type=int, default=2024)
    p.add_argument("--tz", type=int, default=0, help="display offset in minutes from UTC")
    args = p.parse_args(argv)

    np = _need_numpy()
    days, rise, set_, length, elev = sweep_year(np, Location(args.lat, args.lon, args.alt), args.year, args.tz)

    print(f"lat={args.lat:g} lon={args.lon:g} alt={args.alt:g} m  year={args.year}  tz={args.tz:+d} min")
    print(f"{'Date':<12}{'Rise':>7}{'Set':>7}{'Length h':>10}{'Noon elev':>11}")
    for k, d in enumerate(days):
        if d.day != 1:
            continue
        print(f"{d.isoformat():<12}{hhmm(rise[k]):>7}{hhmm(set_[k]):>7}{length[k]:>10.2f}{elev[k]:>11.2f}")

    k_min = int(np.argmin(length))
    k_max = int(np.argmax(length))
    print()
    print(f"Shortest day: {days[k_min].isoformat()}  {length[k_min]:.2f} h")
    print(f"Longest day : {days[k_max].isoformat()}  {length[k_max]:.2f} h")
    print(f"Mean length : {float(np.mean(length)):.2f} h")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
