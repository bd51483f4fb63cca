"""Unit tests for RoutingGraph."""

import numpy as np
import pytest

from botsim.core import Target, UnitRoutes, ValueToUnit
from botsim.analysis.routing_graph import RoutingGraph


class TestRoutingGraphCreation:
    """Tests for building the graph."""

    def test_example(self, example_instructions):
        graph = RoutingGraph.from_instructions(example_instructions)
        assert graph.n_units == 3
        assert list(graph.unit_ids) == [0, 1, 2]
        assert graph.sink_ids == frozenset({0, 1, 2})
        assert graph.adjacency.shape == (3, 3)

    def test_successors(self, example_instructions):
        graph = RoutingGraph.from_instructions(example_instructions)
        assert graph.successors(2) == [0, 1]
        assert graph.successors(1) == [0]
        assert graph.successors(0) == []

    def test_sparse_ids(self):
        graph = RoutingGraph.from_instructions([
            UnitRoutes(1000, Target.unit(7), Target.sink(3)),
            ValueToUnit(42, 1),
        ])
        assert list(graph.unit_ids) == [7, 42, 1000]
        assert graph.successors(1000) == [7]
        assert graph.index_of(42) == 1

    def test_unknown_unit(self, example_instructions):
        graph = RoutingGraph.from_instructions(example_instructions)
        with pytest.raises(KeyError):
            graph.index_of(99)

    def test_in_degree(self, example_instructions):
        graph = RoutingGraph.from_instructions(example_instructions)
        assert graph.in_degree() == {0: 2, 1: 1, 2: 0}

    def test_both_chips_to_same_unit(self):
        graph = RoutingGraph.from_instructions([UnitRoutes(0, Target.unit(1), Target.unit(1))])
        assert graph.in_degree()[1] == 2
        assert graph.successors(0) == [1]

    def test_empty(self):
        graph = RoutingGraph.from_instructions([])
        assert graph.n_units == 0
        assert graph.cyclic_units() == []
        assert not graph.has_cycle()

    def test_unknown_instruction(self):
        with pytest.raises(TypeError):
            RoutingGraph.from_instructions([object()])


class TestDanglingTargets:
    """Units routed to but never given a rule."""

    def test_units_without_rules(self):
        graph = RoutingGraph.from_instructions([
            UnitRoutes(0, Target.unit(1), Target.unit(2)),
            UnitRoutes(1, Target.sink(0), Target.sink(1)),
            ValueToUnit(5, 3),
        ])
        assert graph.units_without_rules() == [2, 5]

    def test_example_fully_ruled(self, example_instructions):
        graph = RoutingGraph.from_instructions(example_instructions)
        assert graph.units_without_rules() == []


class TestCycles:
    """Tests for cycle detection."""

    def test_example_acyclic(self, example_instructions):
        graph = RoutingGraph.from_instructions(example_instructions)
        assert not graph.has_cycle()

    def test_two_unit_cycle(self):
        graph = RoutingGraph.from_instructions([
            UnitRoutes(0, Target.sink(0), Target.unit(1)),
            UnitRoutes(1, Target.unit(0), Target.sink(1)),
            UnitRoutes(2, Target.unit(0), Target.sink(2)),
        ])
        assert graph.has_cycle()
        assert graph.cyclic_units() == [[0, 1]]

    def test_self_loop(self):
        graph = RoutingGraph.from_instructions([UnitRoutes(3, Target.unit(3), Target.sink(0))])
        assert graph.cyclic_units() == [[3]]

    def test_chain_acyclic(self, make_chain, rng):
        values = [int(v) for v in rng.permutation(20)]
        rules, deliveries, _ = make_chain(values)
        graph = RoutingGraph.from_instructions(rules + deliveries)
        assert not graph.has_cycle()
        assert np.all(graph.adjacency.diagonal() == 0)


class TestLargeIds:
    """Unit IDs are unbounded ints."""

    def test_ids_beyond_int64(self):
        big = 2 ** 64
        graph = RoutingGraph.from_instructions([
            UnitRoutes(big, Target.unit(big + 1), Target.sink(0)),
            UnitRoutes(big + 1, Target.unit(big), Target.sink(1)),
            ValueToUnit(3, 1),
        ])
        assert list(graph.unit_ids) == [3, big, big + 1]
        assert graph.successors(big) == [big + 1]
        assert graph.index_of(big + 1) == 2
        assert graph.in_degree() == {3: 0, big: 1, big + 1: 1}
        assert graph.units_without_rules() == [3]
        assert graph.cyclic_units() == [[big, big + 1]]
