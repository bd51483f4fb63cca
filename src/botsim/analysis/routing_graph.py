"""
Routing graph: the static wiring implied by an instruction list.

Nodes are units; there is an edge u -> v when u's rule sends its low or
high chip to unit v. Sinks are terminal and kept separately.

This is a ONE-WAY derivation from the instructions. The factory never
uses it; it exists to inspect networks (cycles, units that are routed
to but never given a rule, fan-in).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
from scipy import sparse
from scipy.sparse.csgraph import connected_components

from botsim.core.instructions import Instruction, UnitRoutes, ValueToUnit


@dataclass
class RoutingGraph:
    """Sparse adjacency over unit IDs."""

    unit_ids: np.ndarray  # Sorted unit IDs (object dtype); row/column i is unit_ids[i]
    adjacency: sparse.csr_matrix  # [n, n] edge counts
    ruled_units: frozenset[int]  # Units that received at least one rule
    sink_ids: frozenset[int]  # Sinks referenced by any rule
    index: dict[int, int] = field(init=False, repr=False)  # unit ID -> row

    def __post_init__(self):
        self.index = {int(u): i for i, u in enumerate(self.unit_ids)}

    @classmethod
    def from_instructions(cls, instructions: Iterable[Instruction]) -> RoutingGraph:
        """Build the graph from an instruction list."""
        units: set[int] = set()
        ruled: set[int] = set()
        sinks: set[int] = set()
        edges: list[tuple[int, int]] = []

        for instruction in instructions:
            if isinstance(instruction, ValueToUnit):
                units.add(instruction.unit)
                continue
            if not isinstance(instruction, UnitRoutes):
                raise TypeError(f"Unknown instruction: {instruction!r}")

            units.add(instruction.unit)
            ruled.add(instruction.unit)
            for target in (instruction.low, instruction.high):
                if target.is_unit:
                    units.add(target.id)
                    edges.append((instruction.unit, target.id))
                else:
                    sinks.add(target.id)

        # IDs are unbounded; only their dense indices go into int64 arrays
        unit_ids = np.array(sorted(units), dtype=object)
        dense = {u: i for i, u in enumerate(unit_ids)}
        n = len(unit_ids)

        if edges:
            rows = np.array([dense[u] for u, _ in edges], dtype=np.int64)
            cols = np.array([dense[v] for _, v in edges], dtype=np.int64)
            data = np.ones(len(edges), dtype=np.int64)
            # Duplicate (row, col) entries are summed on conversion
            adjacency = sparse.coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr()
        else:
            adjacency = sparse.csr_matrix((n, n), dtype=np.int64)

        return cls(
            unit_ids=unit_ids,
            adjacency=adjacency,
            ruled_units=frozenset(ruled),
            sink_ids=frozenset(sinks),
        )

    @property
    def n_units(self) -> int:
        return len(self.unit_ids)

    def index_of(self, unit: int) -> int:
        """Row index of `unit` in the adjacency matrix."""
        return self.index[unit]

    def successors(self, unit: int) -> list[int]:
        """Units that `unit` routes chips to, ascending."""
        i = self.index_of(unit)
        start, end = self.adjacency.indptr[i], self.adjacency.indptr[i + 1]
        return sorted(int(self.unit_ids[j]) for j in self.adjacency.indices[start:end])

    def in_degree(self) -> dict[int, int]:
        """Number of rule edges pointing at each unit."""
        counts = np.asarray(self.adjacency.sum(axis=0)).ravel()
        return {int(u): int(c) for u, c in zip(self.unit_ids, counts)}

    def units_without_rules(self) -> list[int]:
        """Units that appear in the instructions but never get a rule."""
        return sorted(int(u) for u in self.unit_ids if int(u) not in self.ruled_units)

    def cyclic_units(self) -> list[list[int]]:
        """
        Groups of units that can route chips back to themselves.

        Each group is a strongly connected component with more than one
        unit, or a single unit routing to itself.
        """
        if self.n_units == 0:
            return []

        n_components, labels = connected_components(
            self.adjacency, directed=True, connection="strong"
        )
        self_loops = self.adjacency.diagonal() > 0

        groups = []
        for label in range(n_components):
            members = np.flatnonzero(labels == label)
            if len(members) > 1 or self_loops[members[0]]:
                groups.append(sorted(int(self.unit_ids[i]) for i in members))
        return sorted(groups)

    def has_cycle(self) -> bool:
        return bool(self.cyclic_units())
