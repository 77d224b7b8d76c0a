"""Open and short circuit classification.

Before solving, the network is split into battery-powered subgraphs and
open branches. Open branches carry no current. A subgraph whose equations
turn out singular is a short circuit and every part of it is marked with
the NaN sentinel.
"""
import logging

logger = logging.getLogger(__name__)

FAULT = float("nan")


class Subgraph:
    """Real nodes joined by live branches, powered by at least one battery."""

    def __init__(self, nodes, branches):
        self.nodes = nodes
        self.branches = branches

    @property
    def batteries(self):
        return [b for b in self.branches if b.is_battery]

    @property
    def ground(self):
        return min(n for b in self.batteries for n in (b.a, b.b))


class Partition:
    def __init__(self):
        self.subgraphs = []
        self.open_branches = []


def _components(live):
    adjacency = {}
    for branch in live:
        adjacency.setdefault(branch.a, set()).add(branch.b)
        adjacency.setdefault(branch.b, set()).add(branch.a)
    seen = set()
    groups = []
    for start in sorted(adjacency):
        if start in seen:
            continue
        group = set()
        stack = [start]
        while stack:
            node = stack.pop()
            if node in group:
                continue
            group.add(node)
            stack.extend(adjacency[node])
        seen |= group
        groups.append(group)
    return groups


def classify(network):
    """Split branches into powered subgraphs and open branches."""
    partition = Partition()
    live = []
    for branch in network.branches:
        if network.is_live(branch):
            live.append(branch)
        else:
            partition.open_branches.append(branch)

    for nodes in _components(live):
        members = [b for b in live if b.a in nodes]
        subgraph = Subgraph(nodes, members)
        if subgraph.batteries:
            partition.subgraphs.append(subgraph)
        else:
            partition.open_branches.extend(members)
    return partition


def mark_open(branch):
    branch.component.current = 0.0
    branch.component.voltage = 0.0


def mark_faulted(network, subgraph, grid):
    """Put the NaN sentinel on every branch and wire of *subgraph*."""
    cells = [b.cell for b in subgraph.branches]
    cells.extend(cell for cell, node in network.wire_nodes.items() if node in subgraph.nodes)
    for cell in cells:
        grid[cell].current = FAULT
        grid[cell].voltage = FAULT
    logger.warning("Short circuit across %d cells: %s", len(cells), sorted(cells))
    return cells
