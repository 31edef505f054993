from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
import math
from numbers import Real

from .errors import InputValidationError


def as_utc(dt: datetime, name: str = "instant") -> datetime:
    """Validate an aware datetime and normalise it to UTC."""
    if not isinstance(dt, datetime):
        raise InputValidationError(f"{name} must be a datetime, got {type(dt).__name__}")
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise InputValidationError(f"{name} must be timezone-aware")
    return dt.astimezone(timezone.utc)


def coerce_offset(value: object, name: str = "timezone_offset") -> int:
    """Offset in minutes from UTC, floored to a whole minute."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InputValidationError(f"{name} must be a number of minutes, got {value!r}")
    if not math.isfinite(value):
        raise InputValidationError(f"{name} must be finite, got {value!r}")
    minutes = int(math.floor(value))
    if abs(minutes) >= 1440:
        raise InputValidationError(f"{name} must be within one day of UTC, got {value!r}")
    return minutes


def utc_offset_minutes(dt: datetime) -> int:
    """UTC offset of an aware datetime's own tzinfo, in whole minutes (east positive)."""
    off = dt.utcoffset()
    if off is None:
        raise InputValidationError("instant must be timezone-aware")
    return int(math.floor(off.total_seconds() / 60.0))


def fixed_offset(minutes: int) -> timezone:
    if minutes == 0:
        return timezone.utc
    return timezone(timedelta(minutes=minutes))


def shift_to_offset(dt: datetime, minutes: int) -> datetime:
    """Same instant, wall clock shown at UTC+minutes."""
    return dt.astimezone(fixed_offset(minutes))


def truncate_to_second(dt: datetime) -> datetime:
    return dt.replace(microsecond=0)


# ============================================================
# Calendar day helpers (proleptic Gregorian, UTC)
# ============================================================

def utc_day(dt: datetime) -> date:
    return dt.astimezone(timezone.utc).date()


def utc_midnight(d: date) -> datetime:
    return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)


def _year_bounds(year: int) -> tuple[datetime, datetime]:
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    return start, end


def year_fraction(dt: datetime) -> float:
    """
    Elapsed fraction of the calendar year at instant dt, using the actual
    year boundaries (leap years need no special case).
    """
    dt = dt.astimezone(timezone.utc)
    start, end = _year_bounds(dt.year)
    return (dt - start) / (end - start)


def day_year_fraction(d: date) -> float:
    """
    Fraction of the year of d elapsed at the start of the following day.
    On 31 December this is exactly 1.
    """
    start, end = _year_bounds(d.year)
    return (utc_midnight(d) + timedelta(days=1) - start) / (end - start)


def minutes_of_day(dt: datetime) -> float:
    """Clock minutes since midnight, whole seconds only."""
    return dt.hour * 60 + dt.minute + dt.second / 60.0


def minutes_after(midnight: datetime, minutes: float) -> datetime:
    """
    Clock instant `minutes` after midnight, split into whole minutes and
    fractional seconds. Values outside [0, 1440) roll into the adjacent day.
    """
    whole = math.floor(minutes)
    return midnight + timedelta(minutes=whole, seconds=(minutes - whole) * 60.0)
