# tests/test_daily.py

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from sunphase.core.types import EVENT_NAMES, GeoLocation
from sunphase.core.time import day_year_fraction
from sunphase.engines import series
from sunphase.engines.daily import compute_daily, event_minutes, hour_angle_deg
from sunphase.engines.specs import GEOMETRIC_SPEC
from sunphase.engines.sun import latitude_trig

UTC = timezone.utc
EQUINOX = date(2024, 3, 20)


def daily_for(lat_deg: float, lon_deg: float, day: date, alt_m: float = 0.0, spec=None):
    geo = GeoLocation(math.radians(lat_deg), math.radians(lon_deg), alt_m)
    if spec is None:
        return compute_daily(day, geo, latitude_trig(geo.lat_rad))
    return compute_daily(day, geo, latitude_trig(geo.lat_rad), spec)


def clock(h: int, m: int, s: int = 0, day: date = EQUINOX) -> datetime:
    return datetime(day.year, day.month, day.day, h, m, s, tzinfo=UTC)


def within(a: datetime, b: datetime, minutes: float) -> bool:
    return abs(a - b) <= timedelta(minutes=minutes)


def test_equinox_45n_greenwich():
    """
    45N 0E on 2024-03-20 with the 90.833 deg horizon:
    equation of time about -7.6 min, so solar noon falls near 12:07:37 UTC,
    sunrise near 06:01:56 and sunset near 18:13:18.
    """
    d = daily_for(45.0, 0.0, EQUINOX)
    ev = d.events

    assert d.eqtime_min == pytest.approx(-7.62, abs=0.05)
    assert within(ev.solar_noon, clock(12, 7, 37), 1)
    assert within(ev.sunrise, clock(6, 1, 56), 2)
    assert within(ev.sunset, clock(18, 13, 18), 2)
    assert abs(ev.day_length - timedelta(hours=12, minutes=11)) <= timedelta(minutes=2)


def test_uses_following_day_for_year_fraction():
    d = daily_for(45.0, 0.0, EQUINOX)
    s = series.solar_series(day_year_fraction(EQUINOX))
    assert d.eqtime_min == s.eqtime_min
    assert d.declination_rad == s.declination_rad


def test_events_are_ordered():
    ev = daily_for(45.0, 10.0, EQUINOX).events
    times = [getattr(ev, name) for name in EVENT_NAMES]
    assert times == sorted(times)
    assert len(set(times)) == len(times)


def test_events_are_utc_and_anchored_to_day():
    ev = daily_for(45.0, 0.0, EQUINOX).events
    for name, when in ev.as_dict().items():
        assert when.utcoffset() == timedelta(0), name
    assert ev.solar_noon.date() == EQUINOX
    # solar midnight is the one after the day's noon
    assert abs(ev.solar_midnight - ev.solar_noon - timedelta(hours=12)) < timedelta(milliseconds=1)


def test_longitude_shifts_events_by_four_minutes_per_degree():
    a = daily_for(45.0, 0.0, EQUINOX).events
    b = daily_for(45.0, 15.0, EQUINOX).events
    assert abs(a.solar_noon - b.solar_noon - timedelta(hours=1)) < timedelta(milliseconds=1)
    assert abs(a.day_length - b.day_length) < timedelta(milliseconds=1)


def test_events_may_roll_into_adjacent_day():
    # Far west: sunset lands after UTC midnight of the following day
    ev = daily_for(40.0, -170.0, EQUINOX).events
    assert ev.sunset.date() == EQUINOX + timedelta(days=1)


@pytest.mark.parametrize("day", [date(2024, 1, 15), date(2024, 3, 20), date(2024, 6, 21), date(2024, 9, 22), date(2024, 12, 21)])
def test_equator_day_length_is_constant(day):
    """
    On the equator the hour angles do not depend on declination through
    tan(lat); with a geometric horizon the day is exactly 12 hours, with the
    refracted horizon it stays within a minute of 12h07m.
    """
    geometric = daily_for(0.0, 37.0, day, spec=GEOMETRIC_SPEC).events.day_length
    assert abs(geometric - timedelta(hours=12)) <= timedelta(minutes=1)

    refracted = daily_for(0.0, -120.0, day).events.day_length
    assert abs(refracted - timedelta(hours=12, minutes=7)) <= timedelta(minutes=1)


def test_altitude_lengthens_the_day():
    low = daily_for(45.0, 0.0, EQUINOX).events.day_length
    high = daily_for(45.0, 0.0, EQUINOX, alt_m=3000.0).events.day_length
    assert high > low


def test_hour_angle_saturates():
    assert hour_angle_deg(0.0, 0.0, 1.0, -2.0) == 0.0     # argument 2 -> never reached
    assert hour_angle_deg(0.0, 0.0, 1.0, 2.0) == 180.0    # argument -2 -> never left
    assert hour_angle_deg(0.0, 0.0, 1.0, 0.0) == pytest.approx(90.0)


def test_polar_summer_astronomical_twilight_saturates():
    """At 50N in late June the sun never sinks 18 deg: dusk meets solar midnight."""
    d = daily_for(50.0, 0.0, date(2024, 6, 21))
    ev = d.events
    assert d.hour_angles.astronomical == 180.0
    assert abs(ev.astronomical_dusk - ev.solar_midnight) < timedelta(seconds=1)
    assert abs(ev.astronomical_dawn - (ev.solar_noon - timedelta(hours=12))) < timedelta(seconds=1)
    # nautical twilight still exists
    assert d.hour_angles.nautical < 180.0


def test_polar_night_collapses_onto_noon():
    d = daily_for(75.0, 20.0, date(2024, 12, 21))
    ev = d.events
    assert d.hour_angles.horizon == 0.0
    assert abs(ev.sunrise - ev.solar_noon) < timedelta(seconds=1)
    assert abs(ev.sunset - ev.solar_noon) < timedelta(seconds=1)
    for name, when in ev.as_dict().items():
        assert isinstance(when, datetime), name


def test_event_minutes_formula():
    assert event_minutes(0.0, 0.0, 0.0) == 720.0
    assert event_minutes(15.0, 0.0, 0.0) == 660.0
    assert event_minutes(0.0, 90.0, -5.0) == 365.0
