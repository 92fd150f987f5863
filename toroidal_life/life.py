"""
Game of Life Engine - Conway's B3/S23 on a toroidal grid

The grid keeps two equally sized cell buffers. Each step reads the
current buffer, writes the next generation into the other one, then
swaps which buffer is "current". The buffer that was current before the
swap is kept as the previous generation, which lets a renderer repaint
only the cells that changed.

Edges wrap: the row above row 0 is the last row, the column right of
the last column is column 0, and corners are diagonal neighbours of the
opposite corners.
"""

import logging
import numbers
from enum import IntEnum

import numpy as np

from .engine_base import CAEngine

logger = logging.getLogger(__name__)


class CellState(IntEnum):
    """State of a single cell. Values double as the buffer encoding."""

    DEAD = 0
    ALIVE = 1

    def other(self):
        return CellState.ALIVE if self is CellState.DEAD else CellState.DEAD


class GridDimensionError(ValueError):
    """Raised when a grid is given a zero, negative or non-integer size."""


def _check_dimension(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise GridDimensionError(f"{name} must be a positive integer, got {value!r}")
    if value < 1:
        raise GridDimensionError(f"{name} must be >= 1, got {value}")
    return int(value)


def next_wrapped(value, max_value):
    """Index after `value`, wrapping from `max_value` back to 0."""
    if value >= max_value:
        return 0
    return value + 1


def prev_wrapped(value, max_value):
    """Index before `value`, wrapping from 0 to `max_value`."""
    if value == 0:
        return max_value
    return value - 1


def _wrap_table(size, helper):
    max_value = size - 1
    return np.array([helper(i, max_value) for i in range(size)], dtype=np.intp)


def next_state(state, live_neighbours):
    """B3/S23: survive on 2 or 3 neighbours, birth on exactly 3."""
    if state == CellState.ALIVE:
        return CellState.ALIVE if live_neighbours in (2, 3) else CellState.DEAD
    return CellState.ALIVE if live_neighbours == 3 else CellState.DEAD


# ---------------------------------------------------------------------------
# Reference implementation (modulo addressing). Slow on purpose; only used to
# cross-check LifeGrid in the test suite.
# ---------------------------------------------------------------------------

def count_neighbors_modulo(cells, row, col):
    """Count live neighbours of (row, col) in a 2-D sequence using `%`."""
    height = len(cells)
    width = len(cells[0])
    count = 0
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            count += int(cells[(row + delta_row) % height][(col + delta_col) % width])
    return count


def reference_step(cells):
    """Return the next generation of a 2-D sequence as a list of lists."""
    return [
        [int(next_state(cells[r][c], count_neighbors_modulo(cells, r, c)))
         for c in range(len(cells[0]))]
        for r in range(len(cells))
    ]


class GridRows:
    """Restartable iterable over the rows of a LifeGrid.

    Each iteration reads whichever buffer is current at that moment, so
    the object stays valid across steps, but the row views it yields must
    not be held past the next mutating call.
    """

    def __init__(self, grid, with_previous=False):
        self._grid = grid
        self._with_previous = with_previous

    def __len__(self):
        return self._grid.height

    def __iter__(self):
        current = self._grid._readonly(self._grid._current_buffer())
        if not self._with_previous:
            return iter(current)
        previous = self._grid._readonly(self._grid._previous_buffer())
        return zip(current, previous)


class LifeGrid(CAEngine):

    engine_name = "life"
    engine_label = "Game of Life"

    def __init__(self, width, height):
        """
        Args:
            width: Number of columns, a positive integer
            height: Number of rows, a positive integer

        Raises:
            GridDimensionError: If either dimension is not a positive integer
        """
        super().__init__()
        self._width = _check_dimension("width", width)
        self._height = _check_dimension("height", height)

        shape = (self._height, self._width)
        # Double buffer; _current selects the live generation
        self._buffers = (np.zeros(shape, dtype=np.uint8),
                         np.zeros(shape, dtype=np.uint8))
        self._current = 0

        # Wrap tables built once from the wrap helpers
        self._up = _wrap_table(self._height, prev_wrapped)
        self._down = _wrap_table(self._height, next_wrapped)
        self._left = _wrap_table(self._width, prev_wrapped)
        self._right = _wrap_table(self._width, next_wrapped)

        # Scratch space reused by every step
        self._row_shift = np.zeros(shape, dtype=np.uint8)
        self._col_shift = np.zeros(shape, dtype=np.uint8)
        self._counts = np.zeros(shape, dtype=np.uint8)
        self._born = np.zeros(shape, dtype=bool)
        self._kept = np.zeros(shape, dtype=bool)

        logger.debug("created %dx%d grid", self._width, self._height)

    @classmethod
    def generate(cls, width, height, predicate):
        """Build a grid where cell i (row-major) is alive iff predicate(i)."""
        grid = cls(width, height)
        count = grid._width * grid._height
        cells = np.fromiter(
            (CellState.ALIVE if predicate(i) else CellState.DEAD for i in range(count)),
            dtype=np.uint8, count=count,
        )
        grid._current_buffer()[:] = cells.reshape(grid._height, grid._width)
        return grid

    @classmethod
    def from_cells(cls, rows):
        """Build a grid from equal-length rows of CellState values."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        grid._current_buffer()[:] = np.asarray(rows, dtype=np.uint8)
        return grid

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def _current_buffer(self):
        return self._buffers[self._current]

    def _previous_buffer(self):
        return self._buffers[1 - self._current]

    @staticmethod
    def _readonly(buffer):
        view = buffer.view()
        view.flags.writeable = False
        return view

    def _in_range(self, row, col):
        return 0 <= row < self._height and 0 <= col < self._width

    def get(self, row, col):
        if not self._in_range(row, col):
            return None
        return CellState(int(self._current_buffer()[row, col]))

    def toggle(self, row, col):
        if not self._in_range(row, col):
            return None
        cells = self._current_buffer()
        new_state = CellState(int(cells[row, col])).other()
        cells[row, col] = new_state
        return new_state

    def count_neighbors(self, row, col):
        """Live neighbours of (row, col) in the current generation."""
        cells = self._current_buffer()
        max_row = self._height - 1
        max_col = self._width - 1
        top = prev_wrapped(row, max_row)
        bottom = next_wrapped(row, max_row)
        left = prev_wrapped(col, max_col)
        right = next_wrapped(col, max_col)
        return (int(cells[top, left]) + int(cells[top, col]) + int(cells[top, right])
                + int(cells[row, left]) + int(cells[row, right])
                + int(cells[bottom, left]) + int(cells[bottom, col]) + int(cells[bottom, right]))

    def step(self):
        """Advance one generation. Returns True if any cell is alive afterwards."""
        cur = self._current_buffer()
        nxt = self._previous_buffer()
        counts = self._counts
        counts.fill(0)

        # Sum the 8 shifted copies of the grid; indices come from the wrap
        # tables so they are always in range and mode="clip" never clips.
        for row_table in (self._up, None, self._down):
            if row_table is None:
                src = cur
            else:
                np.take(cur, row_table, axis=0, out=self._row_shift, mode="clip")
                src = self._row_shift
            for col_table in (self._left, None, self._right):
                if row_table is None and col_table is None:
                    continue
                if col_table is None:
                    counts += src
                else:
                    np.take(src, col_table, axis=1, out=self._col_shift, mode="clip")
                    counts += self._col_shift

        np.equal(counts, 3, out=self._born)
        np.equal(counts, 2, out=self._kept)
        np.logical_and(self._kept, cur, out=self._kept)
        np.logical_or(self._born, self._kept, out=nxt)

        self._current = 1 - self._current
        self.generation += 1
        return bool(nxt.any())

    def current_view(self):
        return self._readonly(self._current_buffer()).reshape(-1)

    def previous_view(self):
        return self._readonly(self._previous_buffer()).reshape(-1)

    def rows(self):
        return GridRows(self)

    def rows_with_previous(self):
        return GridRows(self, with_previous=True)

    def clear(self):
        for buffer in self._buffers:
            buffer.fill(CellState.DEAD)
        self.generation = 0

    def __str__(self):
        from .codec import serialize
        return serialize(self)

    def __repr__(self):
        return (f"LifeGrid(width={self._width}, height={self._height}, "
                f"generation={self.generation})")
