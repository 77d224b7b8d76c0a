import math

from constants import EPSILON


class GoalReport:
    def __init__(self, lit_lamps, goal_lamp_count, faulted_cells):
        self.lit_lamps = lit_lamps
        self.goal_lamp_count = goal_lamp_count
        self.faulted_cells = faulted_cells

    @property
    def solved(self):
        return not self.faulted_cells and self.lit_lamps >= self.goal_lamp_count


def is_active(current, epsilon=EPSILON):
    """A faulted (NaN) component is never active."""
    return not math.isnan(current) and abs(current) > epsilon


def update_active_flags(grid, epsilon=EPSILON):
    for _, comp in grid.cells():
        comp.is_active = is_active(comp.current, epsilon)


def evaluate(grid):
    """Count lit lamps and faulted cells from the grid's solved state."""
    lit = 0
    faulted = []
    for cell, comp in grid.cells():
        if comp.is_faulted:
            faulted.append(cell)
        elif comp.goal_met:
            lit += 1
    return GoalReport(lit, grid.goal_lamp_count, faulted)
