"""
Abstract Base Class for Grid Engines

The simulation controller and the viewer only talk to this interface,
so any two-state engine that keeps a current and a previous generation
can be driven and drawn the same way.
"""

from abc import ABC, abstractmethod


class CAEngine(ABC):
    """Base class for cellular automaton engines."""

    engine_name = ""   # e.g. "life"
    engine_label = ""  # e.g. "Game of Life"

    def __init__(self):
        self.generation = 0

    @property
    @abstractmethod
    def width(self):
        """Number of columns."""

    @property
    @abstractmethod
    def height(self):
        """Number of rows."""

    @abstractmethod
    def step(self):
        """Advance one generation. Returns True if any cell is alive."""

    def step_n(self, n):
        """Advance n generations. Returns the result of the last step."""
        alive = self.alive_count() > 0
        for _ in range(n):
            alive = self.step()
        return alive

    @abstractmethod
    def get(self, row, col):
        """Cell state at (row, col), or None when out of range."""

    @abstractmethod
    def toggle(self, row, col):
        """Flip the cell at (row, col). Returns the new state or None."""

    @abstractmethod
    def current_view(self):
        """Read-only flat view of the current generation."""

    @abstractmethod
    def previous_view(self):
        """Read-only flat view of the previous generation."""

    @abstractmethod
    def rows_with_previous(self):
        """Iterable of (current_row, previous_row) pairs."""

    @abstractmethod
    def clear(self):
        """Kill every cell."""

    def alive_count(self):
        return int(self.current_view().sum())

    @property
    def stats(self):
        """Return current grid statistics."""
        alive = self.alive_count()
        total = self.width * self.height
        return {
            "generation": self.generation,
            "alive": alive,
            "alive_pct": alive / total * 100,
        }
