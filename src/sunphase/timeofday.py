"""
sunphase.timeofday
------------------
Glue for a continuously rendering host: a driver that is initialised once and
updated every frame, turning the engine's sunrise/sunset into a smooth
daylight weight for blending day and night scenes.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Optional

from .core.errors import SunphaseError
from .core.time import as_utc, shift_to_offset
from .core.types import Location
from .engines.specs import DEFAULT_SPEC, SolarModelSpec
from .engines.sun import Clock, SunEngine, local_now

DAY = timedelta(days=1)


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    if edge0 == edge1:
        return 0.0 if x < edge0 else 1.0
    t = min(1.0, max(0.0, (x - edge0) / (edge1 - edge0)))
    return t * t * (3.0 - 2.0 * t)


def daylight_weight(rise: float, set_: float, blend: float, t: float) -> float:
    """Ramp up over [rise - blend, rise], down over [set, set + blend]."""
    return smoothstep(rise - blend, rise, t) * (1.0 - smoothstep(set_, set_ + blend, t))


def _start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def time_of_day(dt: datetime) -> float:
    """Fraction of dt's own wall-clock day elapsed, in [0, 1)."""
    return (dt - _start_of_day(dt)) / DAY


class TimeOfDayDriver:
    """
    Per-frame daylight weight.

    update() returns 0 at night and 1 in daytime, ramping up over the
    blend_minutes before sunrise and down over the blend_minutes after sunset.
    """

    def __init__(
        self,
        location: object,
        *,
        blend_minutes: float = 5.0,
        timezone_offset: Optional[float] = None,
        spec: SolarModelSpec = DEFAULT_SPEC,
        clock: Optional[Clock] = None,
    ):
        if blend_minutes < 0:
            raise ValueError("blend_minutes must be >= 0")
        self.location = Location.of(location)
        self.blend_minutes = float(blend_minutes)
        self.timezone_offset = timezone_offset
        self.spec = spec
        self.clock = clock or local_now
        self.engine: Optional[SunEngine] = None

    def init(self) -> SunEngine:
        self.engine = SunEngine(self.location, self.clock(), self.timezone_offset, spec=self.spec)
        return self.engine

    def update(self, now: Optional[datetime] = None, location: Optional[object] = None) -> float:
        if self.engine is None:
            raise SunphaseError("TimeOfDayDriver.update() called before init()")
        if location is not None:
            self.location = Location.of(location)
        now = as_utc(now if now is not None else self.clock(), "now")

        self.engine.set_location(self.location)
        self.engine.set_time(now)

        local = shift_to_offset(now, self.engine.timezone_offset)
        start = _start_of_day(local)
        # The event table belongs to the UTC day, which may be the local day
        # before or after; fold sunrise into the local day and evaluate the
        # daylight window of the previous, current and next local days.
        rise = (self.engine.sunrise() - start) / DAY
        rise -= math.floor(rise)
        span = self.engine.day_length() / DAY
        b = self.blend_minutes / 1440.0
        t = time_of_day(local)

        return max(daylight_weight(rise + k, rise + k + span, b, t) for k in (-1, 0, 1))
