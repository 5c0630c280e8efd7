"""Tie-break priority for load order sorting.

The dependency graph rarely dictates a total order. Wherever it leaves a
choice, mods keep the relative position they had in the user's existing
order; mods the user never placed follow alphabetically.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from modorder.models.package import normalize_id

__all__ = ["PriorityTable", "assign_priority", "priority_key"]

#: ``id -> rank``; lower ranks sort earlier.
PriorityTable = Dict[str, int]

# Rank used for ids the table does not know about
_UNRANKED = float("inf")


def assign_priority(
    all_ids: Iterable[str],
    prior_order: Optional[Iterable[str]] = None,
) -> PriorityTable:
    """Rank every discovered id.

    Ids from ``prior_order`` receive ranks ``0..k-1`` in first-occurrence
    order; blank, duplicate and undiscovered entries are skipped. All other
    discovered ids follow in alphabetical order.

    Args:
        all_ids: Discovered, normalized ids.
        prior_order: Previously persisted order, possibly ``None``.

    Returns:
        A total, distinct ranking over ``all_ids``.

    Example::

        >>> assign_priority(["a", "b", "c"], ["C", "a", "c"])
        {'c': 0, 'a': 1, 'b': 2}
    """
    known = {normalize_id(node) for node in all_ids}
    known.discard("")

    priority: PriorityTable = {}
    for entry in prior_order or ():
        node = normalize_id(entry)
        if node in known and node not in priority:
            priority[node] = len(priority)

    for node in sorted(known - priority.keys()):
        priority[node] = len(priority)

    return priority


def priority_key(priority: PriorityTable, node: str):
    """Sort key ``(rank, id)``; unknown ids rank last."""
    return (priority.get(node, _UNRANKED), node)
