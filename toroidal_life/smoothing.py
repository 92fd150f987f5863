"""
Frame Timing Smoothing

FrameTimer averages the intervals between rendered frames over a fixed
window so the HUD shows a steady frame rate instead of per-frame jitter.

Intervals longer than a threshold are dropped. Those come from the
simulation sitting paused, and would drag the average down for the whole
window after every resume.
"""

from .history import BoundedHistoryBuffer

DEFAULT_WINDOW = 100
DEFAULT_MAX_SAMPLE_MS = 3000.0


class FrameTimer:
    """Moving average of frame intervals.

    Host/UI policy only. Nothing in the grid engine depends on it.
    """

    def __init__(self, window=DEFAULT_WINDOW, max_sample_ms=DEFAULT_MAX_SAMPLE_MS):
        """Initialize frame timer.

        Args:
            window: Number of most recent intervals averaged
            max_sample_ms: Intervals above this are discarded
        """
        self.samples = BoundedHistoryBuffer(window)
        self.max_sample_ms = max_sample_ms
        self.last_ms = None

    def tick(self, now_ms):
        """Record a frame rendered at `now_ms` (called each frame).

        The first call after construction or reset() only sets the
        reference time.

        Args:
            now_ms: Monotonic timestamp in milliseconds

        Returns:
            True if an interval was recorded, False otherwise
        """
        last_ms = self.last_ms
        self.last_ms = now_ms
        if last_ms is None:
            return False
        elapsed = now_ms - last_ms
        if elapsed < 0 or elapsed > self.max_sample_ms:
            return False
        self.samples.push(elapsed)
        return True

    def seconds_per_frame(self):
        """Average seconds per frame, or None before the first interval."""
        avg_ms = self.samples.mean()
        if avg_ms is None:
            return None
        return avg_ms / 1000.0

    def frames_per_second(self):
        """Average frame rate, or None when it cannot be computed yet."""
        spf = self.seconds_per_frame()
        if not spf:
            return None
        return 1.0 / spf

    def reset(self):
        """Drop all samples and the reference time (pattern or pace change)."""
        self.samples.clear()
        self.last_ms = None

    def format(self):
        fps = self.frames_per_second()
        if fps is None:
            return "fps: --, spf --"
        return f"fps: {fps:.2f}, spf {self.seconds_per_frame():.3f}"
