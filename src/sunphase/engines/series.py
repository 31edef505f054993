"""
sunphase.engines.series
-----------------------
Truncated Fourier series for the equation of time and the solar declination
(NOAA Global Monitoring Division coefficients, after Spencer 1971).

Both are functions of the fractional-year angle gamma only; the caller decides
which instant gamma refers to.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

TWO_PI = 2.0 * math.pi

# Equation of time (minutes) = EOT_SCALE * (c0 + c1 cos g + s1 sin g + c2 cos 2g + s2 sin 2g)
EOT_SCALE = 229.18
EOT_TERMS = (0.000075, 0.001868, -0.032077, -0.014615, -0.040849)

# Declination (radians) = d0 + c1 cos g + s1 sin g + c2 cos 2g + s2 sin 2g + c3 cos 3g + s3 sin 3g
DECL_TERMS = (0.006918, -0.399912, 0.070257, -0.006758, 0.000907, -0.002697, 0.00148)


@dataclass(frozen=True)
class SolarSeries:
    gamma_rad: float
    eqtime_min: float
    declination_rad: float


def fractional_year_angle(fraction: float) -> float:
    """Fraction of the year in [0, 1] -> gamma in radians."""
    return fraction * TWO_PI


def equation_of_time_minutes(gamma: float) -> float:
    c0, c1, s1, c2, s2 = EOT_TERMS
    return EOT_SCALE * (
        c0
        + c1 * math.cos(gamma)
        + s1 * math.sin(gamma)
        + c2 * math.cos(2.0 * gamma)
        + s2 * math.sin(2.0 * gamma)
    )


def declination_rad(gamma: float) -> float:
    d0, c1, s1, c2, s2, c3, s3 = DECL_TERMS
    return (
        d0
        + c1 * math.cos(gamma)
        + s1 * math.sin(gamma)
        + c2 * math.cos(2.0 * gamma)
        + s2 * math.sin(2.0 * gamma)
        + c3 * math.cos(3.0 * gamma)
        + s3 * math.sin(3.0 * gamma)
    )


def solar_series(fraction: float) -> SolarSeries:
    g = fractional_year_angle(fraction)
    return SolarSeries(
        gamma_rad=g,
        eqtime_min=equation_of_time_minutes(g),
        declination_rad=declination_rad(g),
    )
