"""Tests for the command line entry point (headless paths only)."""

import pytest

from toroidal_life.__main__ import main
from toroidal_life.presets import GLIDER, PRESET_ORDER


def test_snap_zero_prints_preset(capsys):
    assert main(["glider", "--snap", "0"]) == 0
    out = capsys.readouterr().out
    assert out == GLIDER.strip() + "\n"


def test_snap_steps_glider(capsys):
    assert main(["glider", "--snap", "4"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 10
    assert lines[0] == "_" * 23
    assert lines[1].startswith("___#_")
    assert lines[2].startswith("____#")
    assert lines[3].startswith("__###")


def test_snap_from_file(tmp_path, capsys):
    path = tmp_path / "blinker.txt"
    path.write_text("_____\n_____\n_###_\n_____\n_____\n", encoding="utf-8")
    assert main(["--file", str(path), "--snap", "1"]) == 0
    assert capsys.readouterr().out == "_____\n__#__\n__#__\n__#__\n_____\n"


def test_snap_three_by_three_fills_torus(tmp_path, capsys):
    # On a 3x3 torus every cell touches every other, so a row of three
    # gives each dead cell exactly three neighbours.
    path = tmp_path / "row.txt"
    path.write_text("___\n###\n___\n", encoding="utf-8")
    assert main(["--file", str(path), "--snap", "1"]) == 0
    assert capsys.readouterr().out == "###\n###\n###\n"


def test_seeded_random_is_repeatable(capsys):
    main(["random", "--seed", "3", "--snap", "2"])
    first = capsys.readouterr().out
    main(["random", "--seed", "3", "--snap", "2"])
    assert capsys.readouterr().out == first


def test_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    for key in PRESET_ORDER:
        assert key in out


def test_invalid_file(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("#_\n#x\n", encoding="utf-8")
    assert main(["--file", str(path), "--snap", "0"]) == 1
    assert "Invalid grid" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["--file", str(tmp_path / "nope.txt"), "--snap", "0"]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_unknown_argument(capsys):
    assert main(["--bogus"]) == 2
    assert "Unknown argument" in capsys.readouterr().err


def test_file_not_utf8(tmp_path, capsys):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"#_\n_\xff\n")
    assert main(["--file", str(path), "--snap", "0"]) == 1
    assert "not UTF-8" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["--seed", "abc", "--snap", "0"],
    ["--snap", "-3"],
    ["--snap", "two"],
    ["--window", "900", "--snap", "0"],
    ["--window", "axb", "--snap", "0"],
    ["--window", "0x10", "--snap", "0"],
    ["--size", "0", "--snap", "0"],
    ["--size", "big", "--snap", "0"],
    ["--snap"],
    ["glider", "--file"],
])
def test_bad_values_exit_two(argv, capsys):
    assert main(argv) == 2
    err = capsys.readouterr().err
    assert argv[0] in err or argv[-1] in err


@pytest.mark.parametrize("preset, expected", [
    ("clear", "________\n" * 8),
    ("fixed", None),
])
def test_size_overrides_sized_presets(preset, expected, capsys):
    assert main([preset, "--size", "8", "--snap", "0"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert len(lines) == 8 and all(len(line) == 8 for line in lines)
    if expected is not None:
        assert out == expected


def test_size_ignored_by_pattern_presets(capsys):
    assert main(["glider", "--size", "8", "--snap", "0"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert (len(lines[0]), len(lines)) == (23, 10)
