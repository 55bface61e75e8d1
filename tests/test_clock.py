from __future__ import annotations

import pytest

from castaway.sim.clock import DayClock


def test_advance_wraps_and_counts_days():
    clock = DayClock(day_length=120, night_start=70, night_end=110, morning_time=10)
    assert clock.day == 1
    clock.advance(125)
    assert clock.time_of_day == pytest.approx(5)
    assert clock.days_elapsed == 1
    assert clock.day == 2


def test_night_window_is_open_interval():
    clock = DayClock(day_length=120, night_start=70, night_end=110, morning_time=10)
    for t, expected in [(0, False), (70, False), (70.01, True), (100, True), (110, False), (119, False)]:
        clock.time_of_day = t
        assert clock.is_night is expected


def test_skip_to_morning_rolls_the_day_when_morning_has_passed():
    clock = DayClock(day_length=120, night_start=70, night_end=110, morning_time=10)
    clock.time_of_day = 80
    clock.skip_to_morning()
    assert clock.time_of_day == 10
    assert clock.day == 2

    clock.time_of_day = 5
    clock.skip_to_morning()
    assert clock.time_of_day == 10
    assert clock.day == 2


def test_night_factor_peaks_mid_night():
    clock = DayClock(day_length=120, night_start=70, night_end=110, morning_time=10)
    clock.time_of_day = 90
    assert clock.night_factor == pytest.approx(1.0)
    clock.time_of_day = 30
    assert clock.night_factor == pytest.approx(0.0)
    for t in range(0, 120, 7):
        clock.time_of_day = t
        assert 0.0 <= clock.night_factor <= 1.0
