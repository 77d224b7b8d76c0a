import logging
import threading
from enum import Enum

from components import Component
from goals import evaluate

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    @property
    def opposite(self):
        return _OPPOSITES[self]

    def step(self, cell):
        return cell[0] + self.value[0], cell[1] + self.value[1]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class PlacementError(ValueError):
    """Base class for rejected grid edits."""


class CellOutOfBounds(PlacementError):
    pass


class CellNotEditable(PlacementError):
    pass


class IllegalJunction(PlacementError):
    """A non-wire component would touch more than two filled cells."""


class Grid:
    """Puzzle board of ``rows x cols`` cells.

    A cell holds None (permanently blank), a fixed Component, or an
    editable Component that starts empty. Cells are addressed as
    ``(row, col)`` with row 0 at the top.
    """

    def __init__(self, rows, cols, goal_lamp_count=0):
        if rows <= 0 or cols <= 0:
            raise ValueError("grid must have at least one row and one column")
        if goal_lamp_count < 0:
            raise ValueError("goal_lamp_count must be >= 0")
        self.rows = rows
        self.cols = cols
        self.goal_lamp_count = goal_lamp_count
        self._cells = [[None] * cols for _ in range(rows)]
        self.lock = threading.RLock()

    def in_bounds(self, cell):
        r, c = cell
        return 0 <= r < self.rows and 0 <= c < self.cols

    def __getitem__(self, cell):
        if not self.in_bounds(cell):
            raise CellOutOfBounds(f"cell {cell} outside {self.rows}x{self.cols} grid")
        r, c = cell
        return self._cells[r][c]

    def __setitem__(self, cell, component):
        if not self.in_bounds(cell):
            raise CellOutOfBounds(f"cell {cell} outside {self.rows}x{self.cols} grid")
        r, c = cell
        self._cells[r][c] = component

    def cells(self):
        """Yield ``(cell, component)`` for every non-blank cell, row-major."""
        for r, row in enumerate(self._cells):
            for c, comp in enumerate(row):
                if comp is not None:
                    yield (r, c), comp

    def is_filled(self, cell):
        if not self.in_bounds(cell):
            return False
        comp = self[cell]
        return comp is not None and not comp.is_empty

    def neighbor_directions(self, cell):
        return [d for d in Direction if self.is_filled(d.step(cell))]

    def neighbors(self, cell):
        """Adjacent filled cells in UP, RIGHT, DOWN, LEFT order."""
        return [d.step(cell) for d in self.neighbor_directions(cell)]

    def is_junction_legal(self, cell):
        comp = self[cell]
        if comp is None or comp.is_empty or comp.is_wire:
            return True
        return len(self.neighbors(cell)) <= 2

    def is_solved(self):
        return evaluate(self).solved


def _check_editable(grid, cell):
    if not grid.in_bounds(cell):
        raise CellOutOfBounds(f"cell {cell} outside {grid.rows}x{grid.cols} grid")
    current = grid[cell]
    if current is None or not current.is_editable:
        raise CellNotEditable(f"cell {cell} is fixed")
    return current


def place_component(grid, cell, component):
    """Put a copy of *component* into the editable *cell*.

    Raises a PlacementError and leaves the grid untouched when the cell is
    fixed or the placement would give a non-wire more than two neighbors.
    """
    with grid.lock:
        previous = _check_editable(grid, cell)
        placed = component.copy()
        placed.is_editable = True
        placed.reset_solution()
        grid[cell] = placed
        touched = [cell] + grid.neighbors(cell)
        bad = [c for c in touched if not grid.is_junction_legal(c)]
        if bad:
            grid[cell] = previous
            raise IllegalJunction(f"placing {placed.label()} at {cell} overloads {bad}")
        logger.info("Placed %s at %s", placed.label(), cell)


def clear_component(grid, cell):
    with grid.lock:
        _check_editable(grid, cell)
        grid[cell] = Component.empty()
        logger.info("Cleared %s", cell)
