"""
Conway's Game of Life on a fixed-size toroidal grid.

The engine (LifeGrid) and its text format (codec) have no dependency
beyond numpy. The pygame viewer lives in toroidal_life.viewer and is
only imported when a window is opened.
"""

from .codec import (
    EmptyInputError,
    GridParseError,
    InconsistentRowWidthError,
    InvalidCharacterError,
    ParseErrorKind,
    parse,
    serialize,
)
from .history import BoundedHistoryBuffer
from .life import CellState, GridDimensionError, LifeGrid
from .simulator import ManualScheduler, Scheduler, Simulation, SimulationConfig

__all__ = [
    # Engine
    "CellState",
    "GridDimensionError",
    "LifeGrid",
    # Text format
    "parse",
    "serialize",
    "ParseErrorKind",
    "GridParseError",
    "EmptyInputError",
    "InvalidCharacterError",
    "InconsistentRowWidthError",
    # Sample buffer
    "BoundedHistoryBuffer",
    # Host controller
    "Simulation",
    "SimulationConfig",
    "Scheduler",
    "ManualScheduler",
]
