"""
Core functionality exports for modorder.

This module provides convenient access to the core subsystems of modorder.
Importing from here keeps user-facing imports clean and stable:

    from modorder.core import LoadOrderResolver, discover_packages

The resolver pieces (parser, graph builder, priority, sorter, evaluator)
are pure; discovery and the load order store perform file I/O.
"""

from __future__ import annotations

from modorder.core.constraint_parser import parse_constraint
from modorder.core.graph_builder import GraphBuildResult, build_dependency_graph
from modorder.core.priority import PriorityTable, assign_priority
from modorder.core.sorter import SortResult, topological_sort
from modorder.core.evaluator import evaluate_order
from modorder.core.resolver import LoadOrderResolver, evaluate, resolve
from modorder.core.discovery import (
    DiscoveredPackage,
    discover_package,
    discover_packages,
)
from modorder.core.load_order_store import LoadOrderStore, LoadOrderValidation

__all__ = [
    "parse_constraint",
    "build_dependency_graph",
    "GraphBuildResult",
    "assign_priority",
    "PriorityTable",
    "topological_sort",
    "SortResult",
    "evaluate_order",
    "LoadOrderResolver",
    "resolve",
    "evaluate",
    "DiscoveredPackage",
    "discover_package",
    "discover_packages",
    "LoadOrderStore",
    "LoadOrderValidation",
]
