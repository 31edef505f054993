"""
sunphase.engines.instant
------------------------
Apparent sun position (azimuth, elevation) at one instant.
"""

from __future__ import annotations

import math
from datetime import datetime

from ..core.time import minutes_of_day, shift_to_offset, year_fraction
from ..core.types import GeoLocation, LatitudeTrig, SunPosition
from .series import solar_series
from .specs import DEFAULT_SPEC, SolarModelSpec


def refraction_deg(elevation_deg: float, spec: SolarModelSpec = DEFAULT_SPEC) -> float:
    """
    Empirical atmospheric refraction (degrees) for a true elevation.

    The formula has a pole near -b degrees; elevations below the configured floor are
    evaluated at the floor, which keeps the value finite and continuous.
    """
    h = max(elevation_deg, spec.refraction_floor_deg)
    return spec.refraction_coeff / math.tan(math.radians(h + spec.refraction_a / (h + spec.refraction_b)))


def hour_angle_rad(local_minutes: float, eqtime_min: float, lon_deg: float, tz_minutes: int) -> float:
    time_offset = eqtime_min + 4.0 * lon_deg - tz_minutes
    true_solar_time = local_minutes + time_offset
    return math.radians(true_solar_time * 0.25 - 180.0)


def compute_position(
    instant: datetime,
    tz_minutes: int,
    loc: GeoLocation,
    trig: LatitudeTrig,
    spec: SolarModelSpec = DEFAULT_SPEC,
) -> SunPosition:
    """instant must be aware; its wall clock is read at UTC+tz_minutes."""
    s = solar_series(year_fraction(instant))

    sin_d = math.sin(s.declination_rad)
    cos_d = math.cos(s.declination_rad)
    tan_d = sin_d / cos_d

    local = shift_to_offset(instant, tz_minutes)
    ha = hour_angle_rad(minutes_of_day(local), s.eqtime_min, math.degrees(loc.lon_rad), tz_minutes)
    cos_ha = math.cos(ha)

    cos_zenith = trig.sin * sin_d + trig.cos * cos_d * cos_ha
    zenith = math.degrees(math.acos(min(1.0, max(-1.0, cos_zenith))))
    true_elevation = 90.0 - zenith

    elevation = true_elevation + refraction_deg(true_elevation, spec) + spec.altitude_coeff * loc.alt_m

    azimuth = 180.0 + math.degrees(math.atan2(math.sin(ha), cos_ha * trig.sin - tan_d * trig.cos))
    return SunPosition(azimuth_deg=azimuth % 360.0, elevation_deg=elevation)
