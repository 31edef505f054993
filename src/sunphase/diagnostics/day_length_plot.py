#!/usr/bin/env python3
from __future__ import annotations

import argparse

from sunphase.core.types import Location
from sunphase.diagnostics.year_table import _need_numpy, sweep_year


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "sunphase[diagnostics]"') from e


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot day length and noon elevation over one year.")
    p.add_argument("--lat", type=float, action="append", default=[], help="latitude in degrees (repeatable)")
    p.add_argument("--lon", type=float, default=0.0, help="longitude in degrees (positive East)")
    p.add_argument("--alt", type=float, default=0.0, help="altitude in meters")
    p.add_argument("--year", type=int, default=2024)
    p.add_argument("--out", default="day_length.png", help="output image filename")
    args = p.parse_args(argv)

    lats = args.lat or [0.0, 30.0, 45.0, 60.0]

    np = _need_numpy()
    plt = _need_matplotlib()

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
    for lat in lats:
        days, _, _, length, elev = sweep_year(np, Location(lat, args.lon, args.alt), args.year, 0)
        x = np.arange(len(days))
        ax1.plot(x, length, linewidth=1.5, label=f"lat {lat:g}")
        ax2.plot(x, elev, linewidth=1.5, label=f"lat {lat:g}")

    ax1.set_ylabel("Day length (h)")
    ax1.set_title(f"Sunrise to sunset, {args.year}")
    ax1.grid(True, alpha=0.3)
    ax1.legend()
    ax2.set_ylabel("Noon elevation (deg)")
    ax2.set_xlabel("Day of year")
    ax2.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(args.out, dpi=150)
    print(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
