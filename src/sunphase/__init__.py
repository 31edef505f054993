"""sunphase public API.

Keep this surface small: users should mostly interact with SunEngine and the
one-shot helpers re-exported here.
"""

from .api import (
    make_engine,
    sun_position,
    solar_events,
    day_length,
)
from .core.errors import SunphaseError, InputValidationError
from .core.types import Location, SunPosition, SolarEvents, RecomputeStats
from .engines.specs import SolarModelSpec, DEFAULT_SPEC
from .engines.sun import SunEngine
from .timeofday import TimeOfDayDriver, smoothstep

__all__ = [
    "make_engine",
    "sun_position",
    "solar_events",
    "day_length",
    "SunphaseError",
    "InputValidationError",
    "Location",
    "SunPosition",
    "SolarEvents",
    "RecomputeStats",
    "SolarModelSpec",
    "DEFAULT_SPEC",
    "SunEngine",
    "TimeOfDayDriver",
    "smoothstep",
]
