"""
Dependency graph model for modorder.

Each mod id is assigned a dense integer index once, and adjacency and
indegree are stored in index-addressed lists. An edge ``source -> target``
means "source must be loaded before target".
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Set, Tuple


class EdgeKind(Enum):
    """Strength of an ordering edge."""

    HARD = "hard"  # dependsOn: violating it breaks the dependent
    SOFT = "soft"  # loadBefore / loadAfter: advisory


@dataclass(frozen=True)
class Edge:
    """A directed ordering edge between two mod ids."""

    source: str
    target: str
    kind: EdgeKind

    @property
    def is_hard(self) -> bool:
        return self.kind is EdgeKind.HARD


class DependencyGraph:
    """Directed graph over a fixed set of mod ids.

    The node set is fixed at construction; edges may only connect known
    ids. An edge is identified by its endpoints and its kind: a HARD and a
    SOFT edge over the same pair coexist, and indegree counts each
    distinct edge once.

    Args:
        ids: Normalized, unique mod ids.

    Raises:
        ValueError: If ``ids`` contains duplicates.
    """

    def __init__(self, ids: Iterable[str]) -> None:
        self._ids: List[str] = list(ids)
        self._index: Dict[str, int] = {node: i for i, node in enumerate(self._ids)}
        if len(self._index) != len(self._ids):
            raise ValueError("DependencyGraph node ids must be unique")

        self._adjacency: List[Set[Tuple[int, EdgeKind]]] = [set() for _ in self._ids]
        self._indegree: List[int] = [0] * len(self._ids)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_edge(self, source: str, target: str, kind: EdgeKind) -> bool:
        """Add ``source -> target``.

        Self-edges and edges touching unknown ids are ignored. Re-adding an
        edge of the same kind is a no-op.

        Returns:
            True if a new edge was created.
        """
        src = self._index.get(source)
        dst = self._index.get(target)
        if src is None or dst is None or src == dst:
            return False

        key = (dst, kind)
        if key in self._adjacency[src]:
            return False

        self._adjacency[src].add(key)
        self._indegree[dst] += 1
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def ids(self) -> List[str]:
        """Node ids in insertion order."""
        return list(self._ids)

    def index_of(self, node: str) -> int:
        """Return the dense index of ``node`` (``KeyError`` if unknown)."""
        return self._index[node]

    def indegree(self, node: str) -> int:
        return self._indegree[self._index[node]]

    def indegrees(self) -> Dict[str, int]:
        """Return a fresh ``id -> indegree`` mapping safe to mutate."""
        return {node: self._indegree[i] for i, node in enumerate(self._ids)}

    def successors(self, node: str) -> List[Edge]:
        """Outgoing edges of ``node`` ordered by target id, HARD first."""
        src = self._index[node]
        edges = [Edge(node, self._ids[dst], kind) for dst, kind in self._adjacency[src]]
        edges.sort(key=lambda edge: (edge.target, not edge.is_hard))
        return edges

    def edges(self) -> Iterator[Edge]:
        """Iterate all edges, grouped by source in node order."""
        for node in self._ids:
            yield from self.successors(node)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._adjacency)

    def __contains__(self, node: object) -> bool:
        return node in self._index

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={len(self)}, edges={self.edge_count()})"
