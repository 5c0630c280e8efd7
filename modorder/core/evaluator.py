"""Evaluation of an existing load order.

Instead of producing a new order, the evaluator checks the one the user
already has: for every edge whose two ends are both enabled, the target
must appear after the source. A target placed too early is flagged as a
hard or soft issue depending on the edge. The recommended order is
computed alongside so callers can offer a fix.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from modorder.utils.logger import get_logger
from modorder.models.graph import EdgeKind
from modorder.models.package import PackageDescriptor, normalize_id
from modorder.models.results import OrderEvaluation
from modorder.core.priority import assign_priority
from modorder.core.sorter import topological_sort
from modorder.core.graph_builder import build_dependency_graph

logger = get_logger("core.evaluator")

__all__ = ["evaluate_order", "normalize_order"]


def normalize_order(
    user_order: Optional[Iterable[str]],
    known_ids: Iterable[str],
) -> List[str]:
    """Normalize ids, drop unknown ones and duplicates, keep sequence.

    Example::

        >>> normalize_order([" B", "x", "a", "b"], ["a", "b"])
        ['b', 'a']
    """
    known = set(known_ids)
    enabled: List[str] = []
    seen = set()
    for entry in user_order or ():
        node = normalize_id(entry)
        if node in known and node not in seen:
            seen.add(node)
            enabled.append(node)
    return enabled


def evaluate_order(
    packages: Optional[Iterable[PackageDescriptor]],
    user_order: Optional[Iterable[str]],
) -> OrderEvaluation:
    """Check ``user_order`` against the dependencies of ``packages``.

    Args:
        packages: Discovered mods.
        user_order: Current order, e.g. from ``loadorder.json``.

    Returns:
        An :class:`OrderEvaluation`. Inputs are never modified.
    """
    # Materialize once; either argument may be a one-shot iterator
    order_entries = list(user_order or ())
    build = build_dependency_graph(packages)
    graph = build.graph

    priority = assign_priority(graph.ids, order_entries)
    sort_result = topological_sort(graph, priority)

    enabled_order = normalize_order(order_entries, graph.ids)
    index: Dict[str, int] = {node: i for i, node in enumerate(enabled_order)}

    evaluation = OrderEvaluation(
        enabled_order=enabled_order,
        sorted_ids=sort_result.order,
        diagnostics=list(build.diagnostics),
        cycled_ids=set(sort_result.cycled_ids),
    )

    for edge in graph.edges():
        source_pos = index.get(edge.source)
        target_pos = index.get(edge.target)
        if source_pos is None or target_pos is None:
            continue
        if target_pos < source_pos:
            if edge.kind is EdgeKind.HARD:
                evaluation.hard_issues.add(edge.target)
            else:
                evaluation.soft_issues.add(edge.target)

    logger.debug(
        "Evaluated order of %d mods: %d hard issues, %d soft issues, %d cycled",
        len(enabled_order),
        len(evaluation.hard_issues),
        len(evaluation.soft_issues),
        len(evaluation.cycled_ids),
    )
    return evaluation
