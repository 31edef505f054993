# tests/test_timeofday.py

from datetime import datetime, timedelta, timezone

import pytest

from sunphase import SunphaseError, TimeOfDayDriver, smoothstep
from sunphase.timeofday import time_of_day

UTC = timezone.utc
NOON = datetime(2024, 3, 20, 12, 0, tzinfo=UTC)


@pytest.fixture
def driver():
    drv = TimeOfDayDriver((45.0, 0.0, 0.0), blend_minutes=5, timezone_offset=0, clock=lambda: NOON)
    drv.init()
    return drv


def test_smoothstep():
    assert smoothstep(0.0, 1.0, -1.0) == 0.0
    assert smoothstep(0.0, 1.0, 2.0) == 1.0
    assert smoothstep(0.0, 1.0, 0.5) == 0.5
    assert smoothstep(0.0, 1.0, 0.25) == pytest.approx(0.15625)
    assert smoothstep(1.0, 1.0, 0.5) == 0.0
    assert smoothstep(1.0, 1.0, 1.5) == 1.0


def test_time_of_day_uses_own_wall_clock():
    assert time_of_day(datetime(2024, 1, 1, 6, 0, tzinfo=UTC)) == 0.25
    plus2 = timezone(timedelta(hours=2))
    assert time_of_day(datetime(2024, 1, 1, 18, 0, tzinfo=plus2)) == 0.75


def test_update_before_init_raises():
    drv = TimeOfDayDriver((45.0, 0.0), clock=lambda: NOON)
    with pytest.raises(SunphaseError):
        drv.update()


def test_negative_blend_rejected():
    with pytest.raises(ValueError):
        TimeOfDayDriver((45.0, 0.0), blend_minutes=-1)


def test_day_and_night(driver):
    assert driver.update() == 1.0
    assert driver.update(datetime(2024, 3, 20, 0, 30, tzinfo=UTC)) == 0.0
    assert driver.update(datetime(2024, 3, 20, 22, 0, tzinfo=UTC)) == 0.0


def test_ramps_around_sunrise_and_sunset(driver):
    rise = driver.engine.sunrise()
    set_ = driver.engine.sunset()
    assert driver.update(rise - timedelta(minutes=2.5)) == pytest.approx(0.5, abs=1e-3)
    assert driver.update(rise - timedelta(minutes=6)) == 0.0
    assert driver.update(rise + timedelta(seconds=30)) == 1.0
    assert driver.update(set_ + timedelta(minutes=2.5)) == pytest.approx(0.5, abs=1e-3)
    assert driver.update(set_ + timedelta(minutes=6)) == 0.0


def test_update_follows_location(driver):
    driver.update(NOON, location=(30.0, 10.0))
    assert driver.engine.location.lat_deg == pytest.approx(30.0)
    assert driver.engine.location.lon_deg == pytest.approx(10.0)
    # the same location again is free
    stats = driver.engine.stats
    driver.update(NOON, location=(30.0, 10.0))
    assert driver.engine.stats == stats


def test_per_frame_updates_are_cheap(driver):
    for frame in range(120):
        driver.update(NOON + timedelta(seconds=frame / 60.0))
    assert driver.engine.stats.daily == 1
    assert driver.engine.stats.instant == 2


# Sydney and Los Angeles: the local date differs from the UTC date for much
# of the day, so the UTC-day event table belongs to a neighbouring local day.
AEST = timezone(timedelta(hours=10))
PDT = timezone(timedelta(hours=-7))


def _driver_at(location, offset, when, blend=5):
    drv = TimeOfDayDriver(location, blend_minutes=blend, timezone_offset=offset, clock=lambda: when)
    drv.init()
    return drv


@pytest.mark.parametrize(
    "location, offset, day, night",
    [
        ((-33.87, 151.21), 600, datetime(2024, 3, 20, 8, 0, tzinfo=AEST), datetime(2024, 3, 20, 22, 0, tzinfo=AEST)),
        ((-33.87, 151.21), 600, datetime(2024, 3, 20, 16, 0, tzinfo=AEST), datetime(2024, 3, 20, 4, 0, tzinfo=AEST)),
        ((34.05, -118.24), -420, datetime(2024, 6, 20, 18, 30, tzinfo=PDT), datetime(2024, 6, 20, 23, 30, tzinfo=PDT)),
        ((34.05, -118.24), -420, datetime(2024, 6, 20, 7, 0, tzinfo=PDT), datetime(2024, 6, 20, 2, 0, tzinfo=PDT)),
    ],
)
def test_day_and_night_away_from_greenwich(location, offset, day, night):
    drv = _driver_at(location, offset, day)
    assert drv.engine.sun_position.elevation_deg > 5.0
    assert drv.update(day) == 1.0
    assert drv.update(night) == 0.0
    assert drv.engine.sun_position.elevation_deg < -5.0


@pytest.mark.parametrize(
    "location, offset, local_noon",
    [
        ((-33.87, 151.21), 600, datetime(2024, 3, 20, 12, 0, tzinfo=AEST)),
        ((34.05, -118.24), -420, datetime(2024, 6, 20, 12, 0, tzinfo=PDT)),
    ],
)
def test_ramps_away_from_greenwich(location, offset, local_noon):
    drv = _driver_at(location, offset, local_noon, blend=30)
    rise = drv.engine.sunrise()
    set_ = drv.engine.sunset()
    assert rise.date() == set_.date() == local_noon.date()

    # events drift by about a minute per day, well inside these margins
    assert drv.update(rise - timedelta(minutes=60)) == 0.0
    assert 0.0 < drv.update(rise - timedelta(minutes=15)) < 1.0
    assert drv.update(rise + timedelta(minutes=30)) == 1.0
    assert drv.update(set_ - timedelta(minutes=30)) == 1.0
    assert 0.0 < drv.update(set_ + timedelta(minutes=15)) < 1.0
    assert drv.update(set_ + timedelta(minutes=60)) == 0.0
