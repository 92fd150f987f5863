"""
Starting Patterns

Each preset names a grid size and either a text pattern (see codec) or a
seed rule. Random presets draw from a host-supplied random.Random; the
engine itself never produces randomness.
"""

import logging
import random

from .codec import parse
from .life import LifeGrid

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 64
BIG_SIZE = 400
RANDOM_DENSITY = 0.5

GLIDER = """
__#____________________
___#___________________
_###___________________
_______________________
_______________________
_______________________
_______________________
_______________________
_______________________
_______________________
"""

GLIDER_GUN = """
______________________________________________________________
______________________________________________________________
______________________________________________________________
____________________________#_________________________________
__________________________#_#_________________________________
________________##______##____________##______________________
_______________#___#____##____________##______________________
____##________#_____#___##____________________________________
____##________#___#_##____#_#_________________________________
______________#_____#_______#_________________________________
_______________#___#__________________________________________
________________##____________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
______________________________________________________________
"""


def _fixed_rule(i):
    return i % 2 == 0 or i % 7 == 0


PRESETS = {
    "clear": {
        "name": "Clear",
        "description": "Empty grid for drawing by hand",
        "size": DEFAULT_SIZE,
        "seed": "empty",
    },
    "random": {
        "name": "Random",
        "description": "Half the cells alive, chosen at random",
        "size": DEFAULT_SIZE,
        "seed": "random",
    },
    "glider": {
        "name": "Glider",
        "description": "A single glider crossing a 23x10 torus",
        "pattern": GLIDER,
    },
    "glider_gun": {
        "name": "Glider Gun",
        "description": "Gosper glider gun on a 62x27 torus",
        "pattern": GLIDER_GUN,
    },
    "fixed": {
        "name": "Fixed",
        "description": "Deterministic stripes: every 2nd and 7th cell alive",
        "size": DEFAULT_SIZE,
        "seed": "fixed",
    },
    "random_big": {
        "name": "Random Big",
        "description": "Random fill on a 400x400 grid",
        "size": BIG_SIZE,
        "seed": "random",
    },
    "fixed_big": {
        "name": "Fixed Big",
        "description": "Fixed stripes on a 400x400 grid",
        "size": BIG_SIZE,
        "seed": "fixed",
    },
}

PRESET_ORDER = ["clear", "random", "glider", "glider_gun", "fixed", "random_big", "fixed_big"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) in display order."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"]) for k in PRESET_ORDER]


def build_preset(name, rng=None, size=None):
    """Create a fresh grid for the named preset.

    Args:
        name: Preset key, see PRESET_ORDER
        rng: random.Random used by random presets (a new unseeded one if None)
        size: Side length overriding a size-based preset's default; pattern
            presets keep their own dimensions

    Raises:
        KeyError: If the preset does not exist
    """
    preset = get_preset(name)
    if preset is None:
        raise KeyError(f"Unknown preset {name!r}; choose one of: {', '.join(PRESET_ORDER)}")

    if "pattern" in preset:
        grid = parse(preset["pattern"])
    else:
        if size is None:
            size = preset["size"]
        seed = preset["seed"]
        if seed == "random":
            rng = rng or random.Random()
            grid = LifeGrid.generate(size, size, lambda _i: rng.random() < RANDOM_DENSITY)
        elif seed == "fixed":
            grid = LifeGrid.generate(size, size, _fixed_rule)
        else:
            grid = LifeGrid(size, size)

    logger.info("loaded preset %s (%dx%d)", name, grid.width, grid.height)
    return grid
