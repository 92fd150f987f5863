"""
Headless simulation controller - zero pygame dependency.

Simulation is the single owner of the grid and the frame timer. Hosts
(the pygame viewer, the CLI, tests) never hold the grid mutably; they go
through the controller's methods, and get told about changes through
listeners registered with add_listener().

Pacing goes through a Scheduler: on each tick the controller steps the
grid and, if anything is still alive, schedules the next tick. An
extinct grid stops the loop.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .presets import build_preset
from .smoothing import FrameTimer

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Controller tuning.

    Attributes:
        history_capacity: Frame intervals averaged for the FPS readout
        reduced_frame_delay_ms: Delay between ticks in reduced-FPS mode
        max_sample_ms: Frame intervals above this are dropped (pause gaps)
        default_preset: Preset loaded at construction
        grid_size: Side length for size-based presets; None keeps each preset's own
        seed: Seed for random presets; None draws from the OS
    """

    history_capacity: int = 100
    reduced_frame_delay_ms: float = 30.0
    max_sample_ms: float = 3000.0
    default_preset: str = "random"
    grid_size: int | None = None
    seed: int | None = None


class Scheduler(ABC):
    """Runs callbacks after a delay on the host's loop."""

    @abstractmethod
    def now(self):
        """Current time in milliseconds."""

    @abstractmethod
    def schedule(self, delay_ms, callback):
        """Run callback after delay_ms. Returns a handle for cancel()."""

    @abstractmethod
    def cancel(self, handle):
        """Drop a scheduled callback. Unknown handles are ignored."""


class ManualScheduler(Scheduler):
    """Scheduler driven explicitly by its owner's loop.

    The viewer calls run_pending() once per frame with the pygame clock;
    tests call advance(). Callbacks scheduled while run_pending() is
    running wait for the next call, so a zero delay means "next frame".
    """

    def __init__(self, start_ms=0.0):
        self.now_ms = start_ms
        self._pending = {}  # handle -> (due_ms, callback)
        self._next_handle = 1

    def now(self):
        return self.now_ms

    def schedule(self, delay_ms, callback):
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = (self.now_ms + delay_ms, callback)
        return handle

    def cancel(self, handle):
        self._pending.pop(handle, None)

    @property
    def pending(self):
        return len(self._pending)

    def run_pending(self, now_ms=None):
        """Run every callback due at `now_ms`. Returns how many ran."""
        if now_ms is not None:
            self.now_ms = max(self.now_ms, now_ms)
        due = sorted((due_ms, handle) for handle, (due_ms, _) in self._pending.items()
                     if due_ms <= self.now_ms)
        ran = 0
        for _, handle in due:
            entry = self._pending.pop(handle, None)
            if entry is None:
                continue  # cancelled by an earlier callback
            entry[1]()
            ran += 1
        return ran

    def advance(self, ms):
        """Move time forward by `ms` and run what became due."""
        return self.run_pending(self.now_ms + ms)


class Simulation:
    """Owns one grid and drives it through a Scheduler.

    Args:
        config: SimulationConfig (defaults if None)
        scheduler: Scheduler used for ticks (a ManualScheduler if None)
        rng: random.Random for random presets (seeded from config if None)
    """

    def __init__(self, config=None, scheduler=None, rng=None):
        self.config = config or SimulationConfig()
        self.scheduler = scheduler or ManualScheduler()
        self._rng = rng or random.Random(self.config.seed)
        self.frame_timer = FrameTimer(self.config.history_capacity,
                                      self.config.max_sample_ms)
        self.reduced_fps = False
        self.preset_key = None
        self._grid = None
        self._next_tick = None
        self._listeners = []

        self.load_preset(self.config.default_preset)

    # -----------------------------------------------------------------------
    # State
    # -----------------------------------------------------------------------

    @property
    def grid(self):
        return self._grid

    @property
    def running(self):
        return self._next_tick is not None

    def add_listener(self, callback):
        """Register callback(grid, full_redraw), called after every change."""
        self._listeners.append(callback)

    def _notify(self, full_redraw):
        for callback in self._listeners:
            callback(self._grid, full_redraw)

    # -----------------------------------------------------------------------
    # Grid replacement and editing
    # -----------------------------------------------------------------------

    def load_preset(self, name):
        """Replace the grid with a fresh copy of the named preset."""
        self.load_grid(build_preset(name, self._rng, self.config.grid_size), preset_key=name)

    def load_grid(self, grid, preset_key=None):
        """Replace the grid. A running simulation keeps running on the new one."""
        self._grid = grid
        self.preset_key = preset_key
        self.frame_timer.reset()
        self._notify(full_redraw=True)

    def toggle_cell(self, row, col):
        """Flip one cell while paused.

        Returns:
            The new CellState, or None if running or out of range
        """
        if self.running:
            return None
        new_state = self._grid.toggle(row, col)
        if new_state is None:
            logger.warning("toggle ignored, coordinates out of range: row %d, col %d", row, col)
            return None
        self._notify(full_redraw=True)
        return new_state

    # -----------------------------------------------------------------------
    # Pacing
    # -----------------------------------------------------------------------

    def play(self):
        if self.running:
            return
        self._next_tick = self.scheduler.schedule(0, self.tick)

    def pause(self):
        if self._next_tick is not None:
            self.scheduler.cancel(self._next_tick)
            self._next_tick = None

    def toggle_running(self):
        if self.running:
            self.pause()
        else:
            self.play()

    def toggle_reduced_fps(self):
        """Switch between every-frame ticks and the reduced fixed delay."""
        self.reduced_fps = not self.reduced_fps
        self.frame_timer.reset()

    def tick(self):
        """Scheduler callback: step once, then schedule the next tick if alive.

        Returns:
            True if the grid still has live cells
        """
        self._next_tick = None
        self.frame_timer.tick(self.scheduler.now())
        alive = self._grid.step()
        self._notify(full_redraw=False)
        if not alive:
            logger.info("grid extinct at generation %d, stopping", self._grid.generation)
            return False
        delay = self.config.reduced_frame_delay_ms if self.reduced_fps else 0
        self._next_tick = self.scheduler.schedule(delay, self.tick)
        return True

    def step_once(self):
        """Single step while paused. Returns False if running or extinct."""
        if self.running:
            return False
        alive = self._grid.step()
        self._notify(full_redraw=False)
        return alive

    def run_headless(self, steps):
        """Step synchronously, stopping early on extinction.

        Listeners are notified once, after the last step.

        Returns:
            Number of steps taken

        Raises:
            ValueError: If steps is negative
        """
        if steps < 0:
            raise ValueError(f"steps must be >= 0, got {steps}")
        taken = 0
        while taken < steps:
            taken += 1
            if not self._grid.step():
                logger.info("grid extinct at generation %d", self._grid.generation)
                break
        if taken:
            self._notify(full_redraw=taken > 1)
        return taken
