from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

from .core.time import utc_midnight
from .core.types import Location, SolarEvents, SunPosition
from .engines.specs import DEFAULT_SPEC, SolarModelSpec
from .engines.sun import Clock, SunEngine


def make_engine(
    lat: float,
    lon: float,
    altitude: float = 0.0,
    *,
    when: Optional[datetime] = None,
    timezone_offset: Optional[float] = None,
    spec: SolarModelSpec = DEFAULT_SPEC,
    clock: Optional[Clock] = None,
) -> SunEngine:
    return SunEngine(
        Location(lat, lon, altitude),
        when,
        timezone_offset,
        spec=spec,
        clock=clock,
    )


def sun_position(lat: float, lon: float, when: datetime, *, altitude: float = 0.0) -> SunPosition:
    """One-shot azimuth/elevation at an aware instant."""
    return SunEngine(Location.of((lat, lon, altitude)), when, 0).sun_position


def solar_events(
    lat: float,
    lon: float,
    day: Union[date, datetime],
    *,
    altitude: float = 0.0,
    timezone_offset: float = 0,
    spec: SolarModelSpec = DEFAULT_SPEC,
) -> SolarEvents:
    """
    One-shot event table. A plain date is read as a UTC calendar day; a
    datetime selects the UTC day containing it.
    """
    when = day if isinstance(day, datetime) else utc_midnight(day)
    eng = SunEngine(Location.of((lat, lon, altitude)), when, timezone_offset, spec=spec)
    return eng.events()


def day_length(lat: float, lon: float, day: Union[date, datetime], *, altitude: float = 0.0) -> timedelta:
    return solar_events(lat, lon, day, altitude=altitude).day_length
