import logging

from components import ComponentKind

logger = logging.getLogger(__name__)


class UnionFind:
    def __init__(self):
        self.parent = {}

    def find(self, x):
        if self.parent.setdefault(x, x) != x:
            self.parent[x] = self.find(self.parent[x])
        return self.parent[x]

    def union(self, a, b):
        pa, pb = self.find(a), self.find(b)
        if pa != pb:
            self.parent[pb] = pa


class Branch:
    """Resistor or battery between nodes ``a`` and ``b``.

    For a battery ``a`` is the positive pole.
    """

    def __init__(self, cell, component, a, b):
        self.cell = cell
        self.component = component
        self.a = a
        self.b = b

    @property
    def is_battery(self):
        return self.component.kind is ComponentKind.BATTERY

    def __repr__(self):
        return f"Branch({self.cell}, {self.component.label()}, {self.a}->{self.b})"


class Network:
    """Nodes and branches contracted from one grid snapshot.

    Real nodes are ``0..node_count-1``; ids from ``node_count`` upward are
    open terminals that touch exactly one branch.
    """

    def __init__(self):
        self.node_count = 0
        self.open_nodes = set()
        self.branches = []
        self.wire_nodes = {}

    def new_open_node(self):
        node = self.node_count + len(self.open_nodes)
        self.open_nodes.add(node)
        return node

    def is_open(self, node):
        return node in self.open_nodes

    def is_live(self, branch):
        return not (self.is_open(branch.a) or self.is_open(branch.b))


def _contact(grid, cell, direction):
    # Wires are one contact point; other parts have one per side.
    if grid[cell].is_wire:
        return cell
    return cell + (direction,)


def compute_lumps(grid):
    """Union every touching pair of contact points and number the classes."""
    uf = UnionFind()
    order = []
    for cell, comp in grid.cells():
        if comp.is_empty:
            continue
        directions = grid.neighbor_directions(cell)
        if comp.is_wire:
            order.append(cell)
        else:
            order.extend(cell + (d,) for d in directions)
        for d in directions:
            uf.union(_contact(grid, cell, d), _contact(grid, d.step(cell), d.opposite))

    index = {}
    mapping = {}
    for key in order:
        root = uf.find(key)
        if root not in index:
            index[root] = len(index)
        mapping[key] = index[root]
    return mapping, len(index)


def build_network(grid):
    mapping, node_count = compute_lumps(grid)
    network = Network()
    network.node_count = node_count

    for cell, comp in grid.cells():
        if comp.is_empty:
            continue
        if comp.is_wire:
            network.wire_nodes[cell] = mapping[cell]
            continue
        directions = grid.neighbor_directions(cell)
        if len(directions) > 2:
            logger.warning("%s at %s touches %d cells, treating it as open",
                           comp.label(), cell, len(directions))
            terminals = []
        else:
            terminals = [mapping[cell + (d,)] for d in directions]
        while len(terminals) < 2:
            terminals.append(network.new_open_node())
        network.branches.append(Branch(cell, comp, terminals[0], terminals[1]))

    logger.debug("Built network: %d nodes, %d open terminals, %d branches",
                 node_count, len(network.open_nodes), len(network.branches))
    return network
