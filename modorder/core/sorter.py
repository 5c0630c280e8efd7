"""Priority-ordered topological sorting for modorder.

A variant of Kahn's algorithm: whenever several mods are free to load
next, the one with the best ``(priority, id)`` key goes first. The ready
list is kept sorted with :mod:`bisect`, which is plenty for the tens to
low hundreds of mods a game installation holds.

Cycles are resolved in two phases:

1. **Soft relaxation**: the unreached mods are sorted again using only
   their HARD edges among themselves, so cycles made (partly) of
   loadBefore/loadAfter hints dissolve.
2. **Residual**: whatever is still unreached sits in, or behind, a cycle
   of hard dependencies. Those ids are reported as cycled and appended in
   priority order so that every mod still appears exactly once.
"""

from __future__ import annotations

from bisect import insort
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Set

from modorder.utils.logger import get_logger
from modorder.models.graph import DependencyGraph, Edge
from modorder.core.priority import PriorityTable, priority_key

logger = get_logger("core.sorter")

__all__ = ["SortResult", "topological_sort"]


@dataclass
class SortResult:
    """Output of :func:`topological_sort`.

    Attributes:
        order: Every graph id exactly once.
        cycled_ids: Ids that could not be ordered because of hard cycles.
    """

    order: List[str] = field(default_factory=list)
    cycled_ids: Set[str] = field(default_factory=set)


def topological_sort(graph: DependencyGraph, priority: PriorityTable) -> SortResult:
    """Order ``graph`` so that every edge's source precedes its target.

    Args:
        graph: Ordering graph; not modified.
        priority: Tie-break ranks from :func:`~modorder.core.priority.assign_priority`.

    Returns:
        A :class:`SortResult`. When the graph has no hard cycle the order
        respects every HARD edge.
    """
    order = _kahn(graph.ids, graph.indegrees(), graph.successors, priority)
    result = SortResult(order=order)

    if len(order) == len(graph):
        return result

    placed = set(order)
    remaining = [node for node in graph.ids if node not in placed]
    logger.debug("Cycle detected among %d mods, relaxing soft edges", len(remaining))

    # Phase 1: only hard edges between the unreached mods
    remaining_set = set(remaining)

    def hard_successors(node: str) -> List[Edge]:
        return [
            edge
            for edge in graph.successors(node)
            if edge.is_hard and edge.target in remaining_set
        ]

    indegree: Dict[str, int] = {node: 0 for node in remaining}
    for node in remaining:
        for edge in hard_successors(node):
            indegree[edge.target] += 1

    relaxed = _kahn(remaining, indegree, hard_successors, priority)
    result.order.extend(relaxed)

    # Phase 2: genuine hard cycles
    if len(relaxed) < len(remaining):
        relaxed_set = set(relaxed)
        cycled = [node for node in remaining if node not in relaxed_set]
        cycled.sort(key=lambda node: priority_key(priority, node))
        logger.debug("Unresolvable load order cycle among: %s", ", ".join(cycled))

        result.order.extend(cycled)
        result.cycled_ids.update(cycled)

    return result


def _kahn(
    nodes: Iterable[str],
    indegree: Dict[str, int],
    successors: Callable[[str], List[Edge]],
    priority: PriorityTable,
) -> List[str]:
    """Kahn's algorithm over ``nodes``; consumes ``indegree``.

    Returns the ids it could order; ids on or behind a cycle are left out.
    """
    node_list = list(nodes)
    ready = sorted(
        (priority_key(priority, node) for node in node_list if indegree[node] == 0)
    )

    order: List[str] = []
    iterations = 0
    while ready:
        iterations += 1
        if iterations > len(node_list):
            # Each node is released at most once; more means a broken graph.
            logger.error(
                "Topological sort exceeded %d iterations; aborting", len(node_list)
            )
            break

        _, node = ready.pop(0)
        order.append(node)

        for edge in successors(node):
            indegree[edge.target] -= 1
            if indegree[edge.target] == 0:
                insort(ready, priority_key(priority, edge.target))

    return order
