"""
Text grid format for LifeGrid.

Format:
- One line per row, rows separated by '\\n' (a trailing '\\r' is trimmed)
- '#' is an alive cell, '_' is a dead cell
- Whitespace around the whole text and around each line is ignored
- The first line fixes the width; every other line must match it
- The number of lines is the height

Example:
    \"\"\"
    __#__
    ___#_
    _###_
    \"\"\"

    Creates a 5x3 grid holding a glider.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from .life import CellState, LifeGrid

__all__ = [
    "ALIVE_CHAR",
    "DEAD_CHAR",
    "ParseErrorKind",
    "GridParseError",
    "EmptyInputError",
    "InvalidCharacterError",
    "InconsistentRowWidthError",
    "parse",
    "serialize",
    "normalize",
    "load",
    "dump",
]

logger = logging.getLogger(__name__)

ALIVE_CHAR = "#"
DEAD_CHAR = "_"

_CHAR_TO_STATE = {ALIVE_CHAR: CellState.ALIVE, DEAD_CHAR: CellState.DEAD}

# Unicode White_Space. str.strip() with no argument also drops \x1c-\x1f,
# which are not whitespace here and must be reported as invalid characters.
_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _lines(text: str) -> list[str]:
    """Trimmed rows. Only '\\n' separates rows; other line breaks are grid characters."""
    return [line.strip(_WHITESPACE) for line in text.strip(_WHITESPACE).split("\n")]


class ParseErrorKind(Enum):
    EMPTY_INPUT = "empty_input"
    INVALID_CHARACTER = "invalid_character"
    INCONSISTENT_ROW_WIDTH = "inconsistent_row_width"


class GridParseError(ValueError):
    """Raised when text does not describe a valid grid."""

    kind: ParseErrorKind


class EmptyInputError(GridParseError):
    kind = ParseErrorKind.EMPTY_INPUT

    def __init__(self) -> None:
        super().__init__("Grid text is empty")


class InvalidCharacterError(GridParseError):
    kind = ParseErrorKind.INVALID_CHARACTER

    def __init__(self, line: int, column: int, char: str) -> None:
        self.line = line
        self.column = column
        self.char = char
        super().__init__(
            f"Invalid character {char!r} at line {line + 1}, column {column + 1}\n"
            f"  Valid characters: '{ALIVE_CHAR}' (alive), '{DEAD_CHAR}' (dead)"
        )


class InconsistentRowWidthError(GridParseError):
    kind = ParseErrorKind.INCONSISTENT_ROW_WIDTH

    def __init__(self, line: int, expected: int, actual: int) -> None:
        self.line = line
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Inconsistent row width at line {line + 1}\n"
            f"  Expected: {expected} cells (from line 1)\n"
            f"  Actual: {actual} cells"
        )


def _parse_line(line: str, line_idx: int) -> list[CellState]:
    cells: list[CellState] = []
    for col_idx, char in enumerate(line):
        state = _CHAR_TO_STATE.get(char)
        if state is None:
            raise InvalidCharacterError(line_idx, col_idx, char)
        cells.append(state)
    return cells


def parse(text: str) -> LifeGrid:
    """
    Parse a grid from its text form.

    The next-generation buffer of the returned grid starts all dead.

    Args:
        text: Grid text, see module docstring for the format

    Returns:
        A new LifeGrid holding the parsed cells

    Raises:
        EmptyInputError: If the text is empty or only whitespace
        InvalidCharacterError: If a line holds anything but '#' or '_'
        InconsistentRowWidthError: If lines differ in length
    """
    if not text.strip(_WHITESPACE):
        raise EmptyInputError()

    rows: list[list[CellState]] = []
    width: int | None = None
    for line_idx, line in enumerate(_lines(text)):
        row = _parse_line(line, line_idx)
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise InconsistentRowWidthError(line_idx, width, len(row))
        rows.append(row)

    grid = LifeGrid.from_cells(rows)
    logger.debug("parsed %dx%d grid", grid.width, grid.height)
    return grid


def serialize(grid: LifeGrid) -> str:
    """Render the current generation, one '\\n'-terminated line per row."""
    lines = []
    for row in grid.rows():
        lines.append("".join(ALIVE_CHAR if cell else DEAD_CHAR for cell in row))
        lines.append("\n")
    return "".join(lines)


def normalize(text: str) -> str:
    """Canonical form of grid text: trimmed lines, one '\\n' after each row."""
    if not text.strip(_WHITESPACE):
        return ""
    return "".join(line + "\n" for line in _lines(text))


def load(path: str | Path) -> LifeGrid:
    """Read a grid snapshot from a text file."""
    return parse(Path(path).read_text(encoding="utf-8"))


def dump(grid: LifeGrid, path: str | Path) -> None:
    """Write the current generation to a text file."""
    Path(path).write_text(serialize(grid), encoding="utf-8")
