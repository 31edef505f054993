"""
sunphase.engines.sun
--------------------
The stateful engine. Holds location, timezone offset and reference instant,
and decides on every mutation which of the two calculators must run again.

Two cache tiers:
  - instantaneous position: recomputed when the reference instant moves to
    another whole second, or when the location changes;
  - daily parameters: recomputed when the reference instant moves to another
    UTC calendar day, or when the location changes.
Repeated calls within the same second do no work at all, so the engine can be
fed a fresh clock reading every rendered frame.

Not thread-safe: one owner is expected to drive it.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..core.time import (
    as_utc,
    coerce_offset,
    shift_to_offset,
    truncate_to_second,
    utc_day,
    utc_offset_minutes,
)
from ..core.types import (
    EVENT_NAMES,
    GeoLocation,
    LatitudeTrig,
    Location,
    RecomputeStats,
    SolarEvents,
    SunPosition,
)
from .daily import DailySolarParameters, compute_daily
from .instant import compute_position
from .specs import DEFAULT_SPEC, SolarModelSpec

LOG = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current instant, aware, in the host's local timezone."""
    return datetime.now().astimezone()


def to_geo(loc: Location) -> GeoLocation:
    return GeoLocation(
        lat_rad=math.radians(loc.lat_deg),
        lon_rad=math.radians(loc.lon_deg),
        alt_m=loc.alt_m,
    )


def latitude_trig(lat_rad: float) -> LatitudeTrig:
    s = math.sin(lat_rad)
    c = math.cos(lat_rad)
    return LatitudeTrig(sin=s, cos=c, tan=s / c)


class SunEngine:
    """
    Sun position and solar events for one observer.

    Parameters
    ----------
    location:
        Location or (lat_deg, lon_deg[, alt_m]).
    when:
        Aware datetime; defaults to clock().
    timezone_offset:
        Minutes east of UTC used for wall-clock output. Defaults to the UTC
        offset carried by `when` (resolved once, here).
    spec:
        Model constants.
    clock:
        Source of "now" when `when` is omitted; defaults to the host clock.
    """

    def __init__(
        self,
        location: object,
        when: Optional[datetime] = None,
        timezone_offset: Optional[float] = None,
        *,
        spec: SolarModelSpec = DEFAULT_SPEC,
        clock: Optional[Clock] = None,
    ):
        loc = Location.of(location)
        if when is None:
            when = (clock or local_now)()
        instant = as_utc(when, "when")

        self.spec = spec
        self._geo = to_geo(loc)
        self._trig = latitude_trig(self._geo.lat_rad)
        self._tz = utc_offset_minutes(when) if timezone_offset is None else coerce_offset(timezone_offset)
        self._instant = instant

        self._n_daily = 0
        self._n_instant = 0
        self._daily: Optional[DailySolarParameters] = None
        self._daily_day: Optional[date] = None
        self._position: Optional[SunPosition] = None

        self._recompute_all("construct")

    def __repr__(self) -> str:
        loc = self.location
        return (
            f"SunEngine(lat={loc.lat_deg:.6f}, lon={loc.lon_deg:.6f}, alt={loc.alt_m:g}, "
            f"tz={self._tz:+d}, when={self._instant.isoformat()})"
        )

    # ---------------------------------------------------------
    # Recomputation
    # ---------------------------------------------------------

    def _refresh_daily(self, day: date, reason: str) -> None:
        LOG.debug("daily recompute (%s) for %s", reason, day)
        self._daily = compute_daily(day, self._geo, self._trig, self.spec)
        self._daily_day = day
        self._n_daily += 1

    def _refresh_position(self, reason: str) -> None:
        LOG.debug("position recompute (%s) at %s", reason, self._instant.isoformat())
        self._position = compute_position(self._instant, self._tz, self._geo, self._trig, self.spec)
        self._n_instant += 1

    def _recompute_all(self, reason: str) -> None:
        self._refresh_daily(utc_day(self._instant), reason)
        self._refresh_position(reason)

    # ---------------------------------------------------------
    # Mutation (the only way state changes)
    # ---------------------------------------------------------

    def _location_changed(self, geo: GeoLocation, tz: int) -> bool:
        eps = self.spec.angle_eps_rad
        return (
            abs(geo.lat_rad - self._geo.lat_rad) > eps
            or abs(geo.lon_rad - self._geo.lon_rad) > eps
            or abs(geo.alt_m - self._geo.alt_m) > self.spec.altitude_eps_m
            or tz != self._tz
        )

    def set_location(self, location: object, timezone_offset: Optional[float] = None) -> bool:
        """
        Move the observer. Both caches are rebuilt immediately if latitude or
        longitude moved by more than the angle epsilon, altitude by more than
        the altitude epsilon, or the offset changed. Returns True if so.
        """
        geo = to_geo(Location.of(location))
        tz = self._tz if timezone_offset is None else coerce_offset(timezone_offset)
        if not self._location_changed(geo, tz):
            return False
        self._geo = geo
        self._trig = latitude_trig(geo.lat_rad)
        self._tz = tz
        self._recompute_all("location")
        return True

    def set_time(self, when: datetime) -> bool:
        """
        Move the reference instant. Sub-second moves are ignored. The daily
        parameters follow only when the UTC calendar day changes. Returns True
        if anything was recomputed.
        """
        instant = as_utc(when, "when")
        if truncate_to_second(instant) == truncate_to_second(self._instant):
            return False
        self._instant = instant
        self._refresh_position("time")
        day = utc_day(instant)
        if day != self._daily_day:
            self._refresh_daily(day, "day rollover")
        return True

    # ---------------------------------------------------------
    # Reads
    # ---------------------------------------------------------

    def _offset(self, offset: Optional[float]) -> int:
        return self._tz if offset is None else coerce_offset(offset, "offset")

    @property
    def location(self) -> Location:
        return Location(
            lat_deg=math.degrees(self._geo.lat_rad),
            lon_deg=math.degrees(self._geo.lon_rad),
            alt_m=self._geo.alt_m,
        )

    @property
    def timezone_offset(self) -> int:
        return self._tz

    @property
    def sun_position(self) -> SunPosition:
        return self._position

    @property
    def daily(self) -> DailySolarParameters:
        """Cached daily parameters; event instants are in UTC."""
        return self._daily

    @property
    def stats(self) -> RecomputeStats:
        return RecomputeStats(daily=self._n_daily, instant=self._n_instant)

    def reference_instant(self, offset: Optional[float] = None) -> datetime:
        return shift_to_offset(self._instant, self._offset(offset))

    def events(self, offset: Optional[float] = None) -> SolarEvents:
        off = self._offset(offset)
        utc = self._daily.events
        return SolarEvents(**{name: shift_to_offset(getattr(utc, name), off) for name in EVENT_NAMES})

    def _event(self, name: str, offset: Optional[float]) -> datetime:
        return shift_to_offset(getattr(self._daily.events, name), self._offset(offset))

    def sunrise(self, offset: Optional[float] = None) -> datetime:
        return self._event("sunrise", offset)

    def sunset(self, offset: Optional[float] = None) -> datetime:
        return self._event("sunset", offset)

    def solar_noon(self, offset: Optional[float] = None) -> datetime:
        return self._event("solar_noon", offset)

    def solar_midnight(self, offset: Optional[float] = None) -> datetime:
        return self._event("solar_midnight", offset)

    def civil_dawn(self, offset: Optional[float] = None) -> datetime:
        """Sun 6 degrees below the horizon, before sunrise."""
        return self._event("civil_dawn", offset)

    def civil_dusk(self, offset: Optional[float] = None) -> datetime:
        """Sun 6 degrees below the horizon, after sunset."""
        return self._event("civil_dusk", offset)

    def nautical_dawn(self, offset: Optional[float] = None) -> datetime:
        """Sun 12 degrees below the horizon, before sunrise."""
        return self._event("nautical_dawn", offset)

    def nautical_dusk(self, offset: Optional[float] = None) -> datetime:
        """Sun 12 degrees below the horizon, after sunset."""
        return self._event("nautical_dusk", offset)

    def astronomical_dawn(self, offset: Optional[float] = None) -> datetime:
        """Sun 18 degrees below the horizon, before sunrise."""
        return self._event("astronomical_dawn", offset)

    def astronomical_dusk(self, offset: Optional[float] = None) -> datetime:
        """Sun 18 degrees below the horizon, after sunset."""
        return self._event("astronomical_dusk", offset)

    def day_length(self) -> timedelta:
        return self._daily.events.day_length
