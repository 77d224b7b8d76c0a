import numpy as np

from constants import EPSILON, PIVOT_EPSILON


class SingularSystemError(ArithmeticError):
    """The nodal equations have no unique solution."""


def gaussian_solve(A, z, pivot_epsilon=PIVOT_EPSILON):
    """Solve ``A x = z`` by Gauss-Jordan elimination with partial pivoting."""
    n = len(z)
    M = np.hstack([np.array(A, dtype=float), np.array(z, dtype=float).reshape(-1, 1)])
    for i in range(n):
        p = i + int(np.argmax(np.abs(M[i:, i])))
        if abs(M[p, i]) < pivot_epsilon:
            raise SingularSystemError(f"pivot {M[p, i]:.3g} in column {i}")
        if p != i:
            M[[i, p]] = M[[p, i]]
        M[i] /= M[i, i]
        others = np.arange(n) != i
        M[others] -= np.outer(M[others, i], M[i])
    x = M[:, n]
    if not np.all(np.isfinite(x)):
        raise SingularSystemError("solution is not finite")
    return x


def _clamp(value, epsilon):
    return 0.0 if abs(value) < epsilon else float(value)


class Solver:
    """Modified nodal analysis of one battery-powered subgraph.

    Unknowns are the potentials of every node except ground, then one
    current per battery and per zero-ohm resistor. Those branches are
    stamped as voltage constraints ``V_a - V_b = E``.
    """

    def __init__(self, subgraph, epsilon=EPSILON, pivot_epsilon=PIVOT_EPSILON):
        self.subgraph = subgraph
        self.epsilon = epsilon
        self.pivot_epsilon = pivot_epsilon
        self.ground = subgraph.ground
        self.node_index = {}
        for n in sorted(subgraph.nodes):
            if n != self.ground:
                self.node_index[n] = len(self.node_index)
        self.sources = [b for b in subgraph.branches if self._is_source(b)]
        self.voltages = {}
        self.currents = {}

    def _is_source(self, branch):
        if branch.is_battery:
            return True
        return branch.component.resistance < self.epsilon and branch.a != branch.b

    def build_matrix(self):
        N = len(self.node_index)
        M = len(self.sources)
        size = N + M
        A = np.zeros((size, size))
        z = np.zeros(size)
        node_index = self.node_index

        def add_conductance(i, j, g):
            if i != self.ground:
                ii = node_index[i]
                A[ii, ii] += g
            if j != self.ground:
                jj = node_index[j]
                A[jj, jj] += g
            if i != self.ground and j != self.ground:
                ii, jj = node_index[i], node_index[j]
                A[ii, jj] -= g
                A[jj, ii] -= g

        for branch in self.subgraph.branches:
            if not self._is_source(branch) and branch.a != branch.b:
                add_conductance(branch.a, branch.b, 1.0 / branch.component.resistance)
        for k, src in enumerate(self.sources):
            row = N + k
            if src.a != self.ground:
                A[row, node_index[src.a]] += 1
                A[node_index[src.a], row] += 1
            if src.b != self.ground:
                A[row, node_index[src.b]] -= 1
                A[node_index[src.b], row] -= 1
            z[row] = src.component.source_voltage if src.is_battery else 0.0
        return A, z

    def solve(self):
        """Return ``{cell: (current, voltage)}`` for every branch.

        Battery current is positive while it delivers power. Resistor
        values are magnitudes.
        """
        A, z = self.build_matrix()
        x = gaussian_solve(A, z, self.pivot_epsilon)
        V = {self.ground: 0.0}
        for n, idx in self.node_index.items():
            V[n] = x[idx]
        self.voltages = {n: _clamp(v, self.epsilon) for n, v in V.items()}

        N = len(self.node_index)
        source_rows = {id(src): N + k for k, src in enumerate(self.sources)}
        self.currents = {}
        for branch in self.subgraph.branches:
            drop = V[branch.a] - V[branch.b]
            if branch.is_battery:
                current = -x[source_rows[id(branch)]]
            elif id(branch) in source_rows:
                current, drop = abs(x[source_rows[id(branch)]]), 0.0
            elif branch.a == branch.b:
                current = drop = 0.0
            else:
                drop = abs(drop)
                current = drop / branch.component.resistance
            self.currents[branch.cell] = (_clamp(current, self.epsilon), _clamp(drop, self.epsilon))
        return self.currents
