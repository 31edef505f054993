"""
sunphase.engines.daily
----------------------
Daily solar parameters: equation of time, declination, and the ten event
instants (sunrise/sunset, solar noon/midnight, civil/nautical/astronomical
dawn and dusk) for one UTC calendar day.

The fractional year is taken at the start of the *following* day. This is the
reference the model has always used for its daily events; the instantaneous
calculator uses the instant itself, and the two must not be unified.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime

from ..core.time import day_year_fraction, minutes_after, utc_midnight
from ..core.types import GeoLocation, LatitudeTrig, SolarEvents
from .series import solar_series
from .specs import DEFAULT_SPEC, SolarModelSpec

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class HourAngles:
    """Event hour angles in degrees, in [0, 180]."""
    horizon: float
    civil: float
    nautical: float
    astronomical: float


@dataclass(frozen=True)
class DailySolarParameters:
    day: date
    eqtime_min: float
    declination_rad: float
    hour_angles: HourAngles
    events: SolarEvents  # UTC


def hour_angle_deg(threshold_cos: float, altitude_corr: float, cos_term: float, tan_term: float) -> float:
    """
    Hour angle (degrees) at which the sun's zenith angle has cosine threshold_cos.

    cos H = (threshold - altitude) / (cos(decl) cos(lat)) - tan(decl) tan(lat)

    No solution is saturated: an argument above 1 means the sun never gets
    that high (H = 0, dawn and dusk meet at solar noon); below -1 means it
    never sinks that low (H = 180, dawn and dusk meet at solar midnight).
    """
    x = (threshold_cos - altitude_corr) / cos_term - tan_term
    if x > 1.0:
        LOG.debug("hour angle saturated: cos H = %.6f > 1 (band never reached)", x)
        x = 1.0
    elif x < -1.0:
        LOG.debug("hour angle saturated: cos H = %.6f < -1 (band never left)", x)
        x = -1.0
    return math.degrees(math.acos(x))


def event_minutes(lon_deg: float, hour_angle: float, eqtime_min: float) -> float:
    """Minutes after UTC midnight at which the sun reaches the given hour angle."""
    return 720.0 - 4.0 * (lon_deg + hour_angle) - eqtime_min


def compute_daily(
    day: date,
    loc: GeoLocation,
    trig: LatitudeTrig,
    spec: SolarModelSpec = DEFAULT_SPEC,
) -> DailySolarParameters:
    s = solar_series(day_year_fraction(day))

    cos_term = math.cos(s.declination_rad) * trig.cos
    tan_term = math.tan(s.declination_rad) * trig.tan
    altitude_corr = math.radians(spec.altitude_coeff * loc.alt_m)

    ha = HourAngles(
        horizon=hour_angle_deg(spec.cos_horizon, altitude_corr, cos_term, tan_term),
        civil=hour_angle_deg(spec.cos_civil, altitude_corr, cos_term, tan_term),
        nautical=hour_angle_deg(spec.cos_nautical, altitude_corr, cos_term, tan_term),
        astronomical=hour_angle_deg(spec.cos_astronomical, altitude_corr, cos_term, tan_term),
    )

    lon_deg = math.degrees(loc.lon_rad)
    midnight = utc_midnight(day)

    def at(hour_angle: float) -> datetime:
        return minutes_after(midnight, event_minutes(lon_deg, hour_angle, s.eqtime_min))

    events = SolarEvents(
        astronomical_dawn=at(ha.astronomical),
        nautical_dawn=at(ha.nautical),
        civil_dawn=at(ha.civil),
        sunrise=at(ha.horizon),
        solar_noon=at(0.0),
        sunset=at(-ha.horizon),
        civil_dusk=at(-ha.civil),
        nautical_dusk=at(-ha.nautical),
        astronomical_dusk=at(-ha.astronomical),
        solar_midnight=at(-180.0),
    )

    return DailySolarParameters(
        day=day,
        eqtime_min=s.eqtime_min,
        declination_rad=s.declination_rad,
        hour_angles=ha,
        events=events,
    )
