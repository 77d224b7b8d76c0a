"""Entry point used by the game: rebuild, solve and score a puzzle grid."""
import logging

from constants import EPSILON, PIVOT_EPSILON
from faults import classify, mark_faulted, mark_open
from goals import evaluate, update_active_flags
from network import build_network
from simulator import SingularSystemError, Solver

logger = logging.getLogger(__name__)


class SolveResult:
    def __init__(self, solved, lit_lamps, goal_lamp_count, faulted_cells, open_cells,
                 node_count, node_voltages):
        self.solved = solved
        self.lit_lamps = lit_lamps
        self.goal_lamp_count = goal_lamp_count
        self.faulted_cells = faulted_cells
        self.open_cells = open_cells
        self.node_count = node_count
        self.node_voltages = node_voltages

    def __bool__(self):
        return self.solved

    def __repr__(self):
        return (f"SolveResult(solved={self.solved}, lamps={self.lit_lamps}/{self.goal_lamp_count}, "
                f"faulted={len(self.faulted_cells)})")


def solve(grid, epsilon=EPSILON, pivot_epsilon=PIVOT_EPSILON):
    """Solve *grid* in place and report whether the puzzle is complete.

    Every component's ``current``, ``voltage`` and ``is_active`` are
    rewritten. Short circuits show up as NaN on the affected parts rather
    than as exceptions. Node potentials in the result are relative to each
    powered subgraph's own ground. Wire current is not computed: wires
    read 0 and inactive, or NaN inside a short.
    """
    with grid.lock:
        for _, comp in grid.cells():
            comp.reset_solution()

        network = build_network(grid)
        partition = classify(network)
        for branch in partition.open_branches:
            mark_open(branch)

        faulted = []
        node_voltages = {}
        for subgraph in partition.subgraphs:
            solver = Solver(subgraph, epsilon=epsilon, pivot_epsilon=pivot_epsilon)
            try:
                results = solver.solve()
            except SingularSystemError as e:
                logger.debug("Subgraph grounded at node %d is singular: %s", subgraph.ground, e)
                faulted.extend(mark_faulted(network, subgraph, grid))
                continue
            node_voltages.update(solver.voltages)
            for cell, (current, voltage) in results.items():
                grid[cell].current = current
                grid[cell].voltage = voltage

        update_active_flags(grid, epsilon)
        report = evaluate(grid)
        result = SolveResult(
            solved=report.solved,
            lit_lamps=report.lit_lamps,
            goal_lamp_count=grid.goal_lamp_count,
            faulted_cells=sorted(faulted),
            open_cells=sorted(b.cell for b in partition.open_branches),
            node_count=network.node_count,
            node_voltages=node_voltages,
        )
    logger.debug("Solved grid: %r", result)
    return result


def summary_lines(grid, result):
    """Plain-text dump of a solve for a debug console."""
    lines = [f"Solved: {result.solved} ({result.lit_lamps}/{result.goal_lamp_count} lamps)"]
    lines.append("Node voltages:")
    for node in sorted(result.node_voltages):
        lines.append(f"  N{node}: {result.node_voltages[node]:.3f} V")
    lines.append("Currents through components:")
    for cell, comp in grid.cells():
        if comp.is_empty or comp.is_wire:
            continue
        lines.append(f"  {comp.label()} at {cell}: {comp.current:.3f} A, {comp.voltage:.3f} V")
    return lines
