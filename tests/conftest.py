"""
Shared fixtures for the circuit engine tests.

Grids are drawn as text, one string per row:

    .  blank cell (nothing can go here)
    _  editable cell, empty
    - | +  wire
    B  5 V battery
    R  5 ohm resistor
    L  5 ohm lamp, target 1 A +/- 0.1 A
"""

import pytest

from components import Component
from grid import Grid

LEGEND = {
    "-": Component.wire,
    "|": Component.wire,
    "+": Component.wire,
    "B": lambda: Component.battery(5.0),
    "R": lambda: Component.resistor(5.0),
    "L": lambda: Component.lamp(5.0, target_current=1.0, target_margin=0.1),
    "_": Component.empty,
}


def make_grid(*rows, goal=0, parts=None):
    """Build a Grid from text rows; *parts* overrides cells by ``(row, col)``."""
    grid = Grid(len(rows), max(len(r) for r in rows), goal_lamp_count=goal)
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            if ch != ".":
                grid[r, c] = LEGEND[ch]()
    for cell, comp in (parts or {}).items():
        grid[cell] = comp
    return grid


@pytest.fixture
def series_loop():
    """
    Battery on top, resistor at the bottom, wires down both sides.

    The battery's positive pole faces right.
    """
    return make_grid(
        "+B+",
        "|.|",
        "+R+",
    )


@pytest.fixture
def lamp_loop():
    return make_grid(
        "+B+",
        "|.|",
        "+L+",
        goal=1,
    )


@pytest.fixture
def shorted_loop():
    return make_grid(
        "+B+",
        "|.|",
        "+-+",
        goal=0,
    )


@pytest.fixture
def parallel_loads():
    return make_grid(
        "+B+",
        "|.|",
        "+R+",
        "|.|",
        "+R+",
    )


@pytest.fixture
def editable_slot():
    """Series loop whose load cell is left for the player."""
    return make_grid(
        "+B+",
        "|.|",
        "+_+",
    )
