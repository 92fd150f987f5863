#!/usr/bin/env python3
"""
Tests for frame timing smoothing.

Verifies:
1. FrameTimer averages recent intervals
2. Pause gaps are discarded
3. Reset drops samples and the reference time
"""

import pytest

from toroidal_life.smoothing import FrameTimer


def test_first_tick_only_sets_reference():
    """No interval exists until the second frame."""
    timer = FrameTimer()
    assert timer.tick(1000.0) is False
    assert timer.seconds_per_frame() is None
    assert timer.frames_per_second() is None
    assert timer.format() == "fps: --, spf --"


def test_average_of_intervals():
    """Steady 20ms frames read as 50 fps."""
    timer = FrameTimer()
    now = 0.0
    timer.tick(now)
    for _ in range(10):
        now += 20.0
        assert timer.tick(now)
    assert timer.seconds_per_frame() == pytest.approx(0.020)
    assert timer.frames_per_second() == pytest.approx(50.0)
    assert timer.format() == "fps: 50.00, spf 0.020"


def test_window_forgets_old_frames():
    """Only the most recent `window` intervals count."""
    timer = FrameTimer(window=5)
    now = 0.0
    timer.tick(now)
    for _ in range(5):
        now += 100.0
        timer.tick(now)
    for _ in range(5):
        now += 10.0
        timer.tick(now)
    assert timer.seconds_per_frame() == pytest.approx(0.010)


def test_pause_gap_discarded():
    """A resume after a long pause must not skew the average."""
    timer = FrameTimer(max_sample_ms=3000.0)
    timer.tick(0.0)
    timer.tick(16.0)
    assert timer.tick(16.0 + 60_000.0) is False
    assert len(timer.samples) == 1
    assert timer.tick(16.0 + 60_000.0 + 16.0) is True
    assert timer.seconds_per_frame() == pytest.approx(0.016)


def test_zero_interval_has_no_frame_rate():
    timer = FrameTimer()
    timer.tick(5.0)
    timer.tick(5.0)
    assert timer.seconds_per_frame() == 0.0
    assert timer.frames_per_second() is None


def test_reset():
    timer = FrameTimer()
    timer.tick(0.0)
    timer.tick(30.0)
    timer.reset()
    assert timer.seconds_per_frame() is None
    assert timer.tick(5000.0) is False, "first tick after reset is a new reference"
