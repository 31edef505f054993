from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
import math
from numbers import Real
from typing import Dict, Iterator, Tuple

from .errors import InputValidationError

@dataclass(frozen=True)
class Location:
    """Observer location as seen by callers (degrees, meters)."""
    lat_deg: float
    lon_deg: float  # positive East
    alt_m: float = 0.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.lat_deg, self.lon_deg, self.alt_m))

    @classmethod
    def of(cls, value: object) -> "Location":
        """
        Accepts a Location or a (lat, lon[, alt]) sequence of finite numbers.
        Latitude range is not checked: beyond about 65 degrees the model is
        merely inaccurate.
        """
        if isinstance(value, Location):
            parts = tuple(value)
        elif isinstance(value, (tuple, list)) and len(value) in (2, 3):
            parts = tuple(value)
        else:
            raise InputValidationError(f"location must be a Location or (lat, lon[, alt]), got {value!r}")
        for label, x in zip(("latitude", "longitude", "altitude"), parts):
            if isinstance(x, bool) or not isinstance(x, Real) or not math.isfinite(x):
                raise InputValidationError(f"location {label} must be a finite number, got {x!r}")
        return cls(*(float(x) for x in parts))

@dataclass(frozen=True)
class GeoLocation:
    """Internal location: angles in radians."""
    lat_rad: float
    lon_rad: float
    alt_m: float = 0.0

@dataclass(frozen=True)
class LatitudeTrig:
    sin: float
    cos: float
    tan: float

@dataclass(frozen=True)
class SunPosition:
    azimuth_deg: float    # clockwise from true north, [0, 360)
    elevation_deg: float  # above the horizon, negative below

    def __iter__(self) -> Iterator[float]:
        return iter((self.azimuth_deg, self.elevation_deg))

EVENT_NAMES: Tuple[str, ...] = (
    "astronomical_dawn",
    "nautical_dawn",
    "civil_dawn",
    "sunrise",
    "solar_noon",
    "sunset",
    "civil_dusk",
    "nautical_dusk",
    "astronomical_dusk",
    "solar_midnight",
)

@dataclass(frozen=True)
class SolarEvents:
    """The ten event instants of one calendar day (aware datetimes)."""
    astronomical_dawn: datetime
    nautical_dawn: datetime
    civil_dawn: datetime
    sunrise: datetime
    solar_noon: datetime
    sunset: datetime
    civil_dusk: datetime
    nautical_dusk: datetime
    astronomical_dusk: datetime
    solar_midnight: datetime

    def as_dict(self) -> Dict[str, datetime]:
        return {name: getattr(self, name) for name in EVENT_NAMES}

    @property
    def day_length(self) -> timedelta:
        return self.sunset - self.sunrise

@dataclass(frozen=True)
class RecomputeStats:
    daily: int = 0
    instant: int = 0
