"""
Game of Life - Entry Point

Usage:
    python -m toroidal_life [preset] [--size N] [--file PATH] [--snap N]
                            [--seed S] [--window WxH] [--verbose]

Examples:
    python -m toroidal_life
    python -m toroidal_life glider_gun
    python -m toroidal_life random --size 128
    python -m toroidal_life --file pattern.txt
    python -m toroidal_life glider --snap 4

--size N sets the side length of the clear, random and fixed presets;
pattern presets keep their own dimensions.

--snap N runs N generations without opening a window and prints the
resulting grid in text form ('#' alive, '_' dead).

Use --list to see all available presets.
"""

import logging
import sys

from .codec import GridParseError, load, serialize
from .presets import PRESET_ORDER, list_presets
from .simulator import ManualScheduler, Simulation, SimulationConfig


class UsageError(ValueError):
    """Bad command line argument; main() exits with status 2."""


def _int_arg(flag, value, minimum=None):
    try:
        number = int(value)
    except ValueError:
        raise UsageError(f"{flag} expects an integer, got {value!r}") from None
    if minimum is not None and number < minimum:
        raise UsageError(f"{flag} must be at least {minimum}, got {number}")
    return number


def _window_arg(value):
    parts = value.split("x")
    if len(parts) != 2:
        raise UsageError(f"--window expects WxH, got {value!r}")
    return _int_arg("--window", parts[0], 1), _int_arg("--window", parts[1], 1)


def snap(sim, steps):
    """Headless mode: run N steps, print the grid, return steps taken."""
    taken = sim.run_headless(steps)
    sys.stdout.write(serialize(sim.grid))
    return taken


def parse_args(args):
    """Turn argv into an options dict, or None for --list/--help."""
    opts = {
        "preset": "random",
        "file": None,
        "seed": None,
        "size": None,
        "window": (900, 900),
        "snap": None,
        "verbose": False,
    }
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--file", "--seed", "--size", "--window", "--snap"):
            if i + 1 >= len(args):
                raise UsageError(f"{arg} needs a value")
            value = args[i + 1]
            if arg == "--file":
                opts["file"] = value
            elif arg == "--seed":
                opts["seed"] = _int_arg(arg, value)
            elif arg == "--size":
                opts["size"] = _int_arg(arg, value, 1)
            elif arg == "--window":
                opts["window"] = _window_arg(value)
            else:
                opts["snap"] = _int_arg(arg, value, 0)
            i += 2
        elif arg in ("--verbose", "-v"):
            opts["verbose"] = True
            i += 1
        elif arg == "--list":
            print("\nAvailable presets:\n")
            for key, name, desc in list_presets():
                print(f"    {key:12s} {name:12s} {desc}")
            print()
            return None
        elif arg in ("--help", "-h"):
            print(__doc__)
            return None
        elif arg in PRESET_ORDER:
            opts["preset"] = arg
            i += 1
        else:
            raise UsageError(f"Unknown argument: {arg}")
    return opts


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        opts = parse_args(args)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        print("Use --help for usage, --list to see available presets", file=sys.stderr)
        return 2
    if opts is None:
        return 0

    logging.basicConfig(
        level=logging.DEBUG if opts["verbose"] else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig(default_preset=opts["preset"], seed=opts["seed"],
                              grid_size=opts["size"])
    sim = Simulation(config, scheduler=ManualScheduler())

    pattern_file = opts["file"]
    if pattern_file is not None:
        try:
            sim.load_grid(load(pattern_file))
        except GridParseError as exc:
            print(f"Invalid grid in {pattern_file}: {exc}", file=sys.stderr)
            return 1
        except UnicodeDecodeError as exc:
            print(f"Cannot read {pattern_file}: not UTF-8 text ({exc.reason})", file=sys.stderr)
            return 1
        except OSError as exc:
            print(f"Cannot read {pattern_file}: {exc}", file=sys.stderr)
            return 1

    if opts["snap"] is not None:
        snap(sim, opts["snap"])
        return 0

    # Imported here so headless use works without pygame installed
    from .viewer import Viewer

    win_w, win_h = opts["window"]
    print("Starting Game of Life Viewer")
    print(f"  Pattern: {pattern_file or opts['preset']}")
    print(f"  Grid: {sim.grid.width}x{sim.grid.height}")
    print(f"  Window: {win_w}x{win_h}")
    print()

    viewer = Viewer(sim, width=win_w, height=win_h)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
