"""Tests for fixed-step pacing."""

import pytest
from octocore import Pacer


def test_owed_whole_intervals():
    pacer = Pacer(clock_frequency=1000, timer_frequency=60, start_ns=0)
    clocks, ticks = pacer.owed(50_000_000)  # 50 ms
    assert clocks == 50
    assert ticks == 2  # 16.67 ms per tick


def test_remainder_carries_over():
    pacer = Pacer(clock_frequency=1000, timer_frequency=60, start_ns=0)
    assert pacer.owed(1_500_000) == (1, 0)
    assert pacer.owed(2_000_000) == (1, 0)
    assert pacer.owed(16_666_667) == (14, 1)


def test_no_drift_over_one_second():
    pacer = Pacer(clock_frequency=1000, timer_frequency=60, start_ns=0)
    total_clocks = total_ticks = 0
    for step in range(1, 101):
        clocks, ticks = pacer.owed(step * 10_000_000)
        total_clocks += clocks
        total_ticks += ticks
    assert total_clocks == 1000
    assert total_ticks == 59  # 60th tick lands 20 ns after the one-second mark


def test_time_going_backwards_owes_nothing():
    pacer = Pacer(start_ns=1_000_000_000)
    assert pacer.owed(0) == (0, 0)


def test_rejects_bad_frequency():
    with pytest.raises(ValueError):
        Pacer(clock_frequency=0)
