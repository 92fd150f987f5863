"""Tests for the text grid format."""

import pytest

from toroidal_life.codec import (
    EmptyInputError,
    GridParseError,
    InconsistentRowWidthError,
    InvalidCharacterError,
    ParseErrorKind,
    dump,
    load,
    normalize,
    parse,
    serialize,
)
from toroidal_life.life import CellState


class TestParse:
    """Tests for parse()."""

    def test_simple_grid(self) -> None:
        field = "_____\n_###_\n#____\n____#\n__#__\n"
        grid = parse(field)
        assert grid.width == 5
        assert grid.height == 5
        assert grid.get(0, 0) is CellState.DEAD
        assert grid.get(1, 1) is CellState.ALIVE
        assert grid.get(2, 0) is CellState.ALIVE
        assert grid.get(3, 4) is CellState.ALIVE
        assert not grid.previous_view().any()

    def test_dimensions_from_lines(self) -> None:
        grid = parse("#__#__#\n_______")
        assert grid.width == 7
        assert grid.height == 2

    def test_surrounding_whitespace_ignored(self) -> None:
        grid = parse("\n\n   __#  \n\t_#_\n  #__   \n\n")
        assert grid.width == 3
        assert grid.height == 3
        assert serialize(grid) == "__#\n_#_\n#__\n"

    def test_windows_line_endings(self) -> None:
        grid = parse("#_\r\n_#\r\n")
        assert serialize(grid) == "#_\n_#\n"

    def test_single_cell(self) -> None:
        grid = parse("#")
        assert grid.width == 1
        assert grid.height == 1
        assert grid.get(0, 0) is CellState.ALIVE

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", " \t \n  \r\n"])
    def test_empty_input(self, text: str) -> None:
        with pytest.raises(EmptyInputError) as exc_info:
            parse(text)
        assert exc_info.value.kind is ParseErrorKind.EMPTY_INPUT

    @pytest.mark.parametrize("text, line, column, char", [
        ("__x__", 0, 2, "x"),
        ("___\n_.#", 1, 1, "."),
        ("##\n#O", 1, 1, "O"),
        ("#_ _#", 0, 2, " "),
        ("__\n_1", 1, 1, "1"),
    ])
    def test_invalid_character(self, text: str, line: int, column: int, char: str) -> None:
        with pytest.raises(InvalidCharacterError) as exc_info:
            parse(text)
        err = exc_info.value
        assert err.kind is ParseErrorKind.INVALID_CHARACTER
        assert (err.line, err.column, err.char) == (line, column, char)

    @pytest.mark.parametrize("text, line, column, char", [
        ("#\x0c#", 0, 1, "\x0c"),
        ("#\x0b#", 0, 1, "\x0b"),
        ("#\x1c#", 0, 1, "\x1c"),
        ("##\x1c", 0, 2, "\x1c"),
        ("\x1f##", 0, 0, "\x1f"),
        ("#_\x1d", 0, 2, "\x1d"),
        ("#\x1e#", 0, 1, "\x1e"),
        ("#\x85#", 0, 1, "\x85"),
        ("# #", 0, 1, " "),
        ("##\n#\r#", 1, 1, "\r"),
    ])
    def test_only_newline_separates_rows(self, text: str, line: int, column: int, char: str) -> None:
        with pytest.raises(InvalidCharacterError) as exc_info:
            parse(text)
        err = exc_info.value
        assert (err.line, err.column, err.char) == (line, column, char)

    def test_inconsistent_row_width(self) -> None:
        with pytest.raises(InconsistentRowWidthError) as exc_info:
            parse("____\n___\n____")
        err = exc_info.value
        assert err.kind is ParseErrorKind.INCONSISTENT_ROW_WIDTH
        assert err.line == 1
        assert err.expected == 4
        assert err.actual == 3

    def test_blank_line_inside_is_width_mismatch(self) -> None:
        with pytest.raises(InconsistentRowWidthError):
            parse("##\n\n##")

    def test_errors_are_value_errors(self) -> None:
        for text in ("", "x", "#\n##"):
            with pytest.raises(GridParseError):
                parse(text)
            with pytest.raises(ValueError):
                parse(text)


class TestSerialize:
    """Tests for serialize() and the round trip."""

    def test_each_row_newline_terminated(self) -> None:
        grid = parse("#_#\n___")
        assert serialize(grid) == "#_#\n___\n"

    def test_serializes_current_generation(self) -> None:
        grid = parse("_____\n__#__\n__#__\n__#__\n_____")
        grid.step()
        assert serialize(grid) == "_____\n_____\n_###_\n_____\n_____\n"

    @pytest.mark.parametrize("text", [
        "_____\n_###_\n#____\n____#\n__#__\n",
        "  #_#  \n  _#_\n#_#   ",
        "\n\n#\n",
        "__#____\n___#___\n_###___\n_______\n_______",
    ])
    def test_round_trip_normalizes_whitespace(self, text: str) -> None:
        assert serialize(parse(text)) == normalize(text)

    def test_normalize(self) -> None:
        assert normalize("  \n #_ \n_#\n\n") == "#_\n_#\n"
        assert normalize("#_\r\n_#\r\n") == "#_\n_#\n"
        assert normalize(" \n ") == ""


def test_load_and_dump(tmp_path) -> None:
    path = tmp_path / "glider.txt"
    path.write_text("__#\n#_#\n_##\n", encoding="utf-8")
    grid = load(path)
    assert grid.width == 3
    grid.step()
    out = tmp_path / "next.txt"
    dump(grid, out)
    assert out.read_text(encoding="utf-8") == serialize(grid)
    assert serialize(load(out)) == serialize(grid)
