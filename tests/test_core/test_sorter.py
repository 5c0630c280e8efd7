"""Unit tests for modorder.core.sorter module.

Test Coverage:
- Kahn ordering with priority tie-breaks
- Hard and soft edges in acyclic graphs
- Cycles made of soft edges (relaxed, not reported)
- Cycles made of hard edges (reported, appended by priority)
- Nodes blocked behind a hard cycle
- Iteration cap on inconsistent input
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

import pytest

from modorder.core.priority import assign_priority
from modorder.core.sorter import SortResult, _kahn, topological_sort
from modorder.models.graph import DependencyGraph, Edge, EdgeKind

HARD = EdgeKind.HARD
SOFT = EdgeKind.SOFT


def _graph(ids: Iterable[str], *edges: Tuple[str, str, EdgeKind]) -> DependencyGraph:
    graph = DependencyGraph(ids)
    for source, target, kind in edges:
        graph.add_edge(source, target, kind)
    return graph


def _sort(graph: DependencyGraph, prior=None) -> SortResult:
    return topological_sort(graph, assign_priority(graph.ids, prior))


def _positions(order) -> Dict[str, int]:
    return {node: i for i, node in enumerate(order)}


@pytest.mark.unit
class TestTopologicalSortAcyclic:
    """Tests for graphs without cycles."""

    def test_empty_graph(self) -> None:
        result = _sort(DependencyGraph([]))

        assert result.order == []
        assert result.cycled_ids == set()

    def test_no_edges_alphabetical(self) -> None:
        result = _sort(_graph(["c", "a", "b"]))

        assert result.order == ["a", "b", "c"]

    def test_no_edges_follows_prior_order(self) -> None:
        result = _sort(_graph(["a", "b", "c"]), prior=["c", "a", "b"])

        assert result.order == ["c", "a", "b"]

    def test_hard_edge_overrides_priority(self) -> None:
        """``core -> addon`` wins over a prior order putting addon first."""
        graph = _graph(["core", "addon"], ("core", "addon", HARD))

        result = _sort(graph, prior=["addon", "core"])

        assert result.order == ["core", "addon"]
        assert not result.cycled_ids

    def test_soft_edge_respected_without_cycle(self) -> None:
        graph = _graph(["a", "b"], ("b", "a", SOFT))

        assert _sort(graph).order == ["b", "a"]

    def test_chain(self) -> None:
        graph = _graph(
            ["d", "c", "b", "a"],
            ("a", "b", HARD),
            ("b", "c", HARD),
            ("c", "d", SOFT),
        )

        assert _sort(graph).order == ["a", "b", "c", "d"]

    def test_priority_decides_among_ready_nodes(self) -> None:
        """Released successors compete with already-ready nodes by priority."""
        graph = _graph(["a", "b", "c"], ("a", "c", HARD))

        result = _sort(graph, prior=["a", "c", "b"])

        assert result.order == ["a", "c", "b"]

    def test_every_edge_respected(self) -> None:
        graph = _graph(
            ["x", "y", "z", "w", "v"],
            ("v", "x", HARD),
            ("w", "x", SOFT),
            ("x", "y", HARD),
            ("z", "y", SOFT),
        )

        result = _sort(graph, prior=["y", "x", "z", "w", "v"])
        pos = _positions(result.order)

        assert sorted(result.order) == sorted(graph.ids)
        for edge in graph.edges():
            assert pos[edge.source] < pos[edge.target]

    def test_graph_not_modified(self) -> None:
        graph = _graph(["a", "b"], ("a", "b", HARD))
        before = graph.indegrees()

        _sort(graph)

        assert graph.indegrees() == before


@pytest.mark.unit
class TestTopologicalSortCycles:
    """Tests for cycle handling."""

    def test_soft_cycle_is_relaxed(self) -> None:
        """A cycle made only of hints is broken without reporting."""
        graph = _graph(["a", "b"], ("a", "b", SOFT), ("b", "a", SOFT))

        result = _sort(graph, prior=["b", "a"])

        assert result.order == ["b", "a"]
        assert result.cycled_ids == set()

    def test_mixed_cycle_keeps_hard_edge(self) -> None:
        """Relaxing soft edges still honours the hard one."""
        graph = _graph(["a", "b"], ("a", "b", HARD), ("b", "a", SOFT))

        result = _sort(graph, prior=["b", "a"])

        assert result.order == ["a", "b"]
        assert result.cycled_ids == set()

    def test_hard_cycle_reported(self) -> None:
        graph = _graph(["a", "b"], ("a", "b", HARD), ("b", "a", HARD))

        result = _sort(graph, prior=["b", "a"])

        assert result.cycled_ids == {"a", "b"}
        assert result.order == ["b", "a"]

    def test_hard_cycle_does_not_block_unrelated(self) -> None:
        graph = _graph(
            ["a", "b", "c"],
            ("a", "b", HARD),
            ("b", "a", HARD),
        )

        result = _sort(graph)

        assert result.order == ["c", "a", "b"]
        assert result.cycled_ids == {"a", "b"}

    def test_dependents_of_cycle_are_cycled(self) -> None:
        """Mods behind a hard cycle cannot be ordered either."""
        graph = _graph(
            ["a", "b", "c"],
            ("a", "b", HARD),
            ("b", "a", HARD),
            ("b", "c", HARD),
        )

        result = _sort(graph)

        assert result.cycled_ids == {"a", "b", "c"}
        assert sorted(result.order) == ["a", "b", "c"]

    def test_soft_edge_into_hard_cycle_is_relaxed(self) -> None:
        """A node tied to a cycle only by a hint is ordered in phase one."""
        graph = _graph(
            ["a", "b", "c"],
            ("a", "b", HARD),
            ("b", "a", HARD),
            ("a", "c", SOFT),
        )

        result = _sort(graph)

        assert result.order[0] == "c"
        assert result.cycled_ids == {"a", "b"}

    def test_each_id_exactly_once(self) -> None:
        graph = _graph(
            ["a", "b", "c", "d"],
            ("a", "b", HARD),
            ("b", "c", HARD),
            ("c", "a", HARD),
            ("d", "a", SOFT),
        )

        result = _sort(graph)

        assert len(result.order) == 4
        assert set(result.order) == {"a", "b", "c", "d"}
        assert result.cycled_ids == {"a", "b", "c"}


@pytest.mark.unit
class TestKahnIterationCap:
    """_kahn stops when nodes are released more often than they exist."""

    def test_stops_with_partial_order(self, caplog: pytest.LogCaptureFixture) -> None:
        # "c" is released by "a" but is not one of the nodes being sorted,
        # so the ready list yields one more node than the cap allows
        def successors(node: str) -> List[Edge]:
            return [Edge("a", "c", HARD)] if node == "a" else []

        indegree = {"a": 0, "b": 0, "c": 1}
        priority = {"a": 0, "b": 1, "c": 2}

        with caplog.at_level(logging.ERROR, logger="modorder"):
            order = _kahn(["a", "b"], indegree, successors, priority)

        assert order == ["a", "b"]
        assert any(
            record.levelno == logging.ERROR and "exceeded 2 iterations" in record.getMessage()
            for record in caplog.records
        )
