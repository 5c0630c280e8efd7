"""Dependency graph construction for modorder.

Reads each descriptor's constraint strings and turns them into edges:

=============  =========================  =====
Field          Edge                       Kind
=============  =========================  =====
dependsOn X    X -> mod                   HARD
loadBefore X   mod -> X                   SOFT
loadAfter X    X -> mod                   SOFT
=============  =========================  =====

An edge is only added when the target is among the discovered mods and its
version satisfies the constraint. Failed hard dependencies become
diagnostics; failed soft hints are dropped silently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from modorder.utils.logger import get_logger
from modorder.models.graph import DependencyGraph, EdgeKind
from modorder.models.package import PackageDescriptor
from modorder.models.results import Diagnostic
from modorder.models.constraint import Constraint
from modorder.core.constraint_parser import parse_constraint

logger = get_logger("core.graph_builder")

__all__ = ["GraphBuildResult", "build_dependency_graph", "index_packages"]


@dataclass
class GraphBuildResult:
    """Graph plus everything learned while building it.

    Attributes:
        graph: Ordering graph over all discovered ids.
        diagnostics: Hard dependency problems, in discovery order.
        packages_by_id: First descriptor seen for each id.
    """

    graph: DependencyGraph
    diagnostics: List[Diagnostic] = field(default_factory=list)
    packages_by_id: Dict[str, PackageDescriptor] = field(default_factory=dict)


def index_packages(
    packages: Optional[Iterable[PackageDescriptor]],
) -> Dict[str, PackageDescriptor]:
    """Map id to descriptor, keeping the first of any duplicates."""
    by_id: Dict[str, PackageDescriptor] = {}
    for package in packages or ():
        existing = by_id.get(package.id)
        if existing is None:
            by_id[package.id] = package
            continue
        logger.warning(
            "Duplicate mod id '%s' detected. Keeping '%s', ignoring '%s'.",
            package.id,
            existing.root_path or existing.display_name,
            package.root_path or package.display_name,
        )
    return by_id


def build_dependency_graph(
    packages: Optional[Iterable[PackageDescriptor]],
) -> GraphBuildResult:
    """Build the ordering graph for ``packages``.

    Args:
        packages: Discovered mods. ``None`` is treated as empty.

    Returns:
        A :class:`GraphBuildResult`; never raises for bad metadata.
    """
    by_id = index_packages(packages)
    result = GraphBuildResult(graph=DependencyGraph(by_id), packages_by_id=by_id)

    for mod_id, package in by_id.items():
        _add_hard_dependencies(result, mod_id, package.depends_on)

        for constraint in _admitted(by_id, package.load_before):
            result.graph.add_edge(mod_id, constraint.target_id, EdgeKind.SOFT)

        for constraint in _admitted(by_id, package.load_after):
            result.graph.add_edge(constraint.target_id, mod_id, EdgeKind.SOFT)

    logger.debug(
        "Built dependency graph: %d mods, %d edges, %d diagnostics",
        len(result.graph),
        result.graph.edge_count(),
        len(result.diagnostics),
    )
    return result


def _add_hard_dependencies(
    result: GraphBuildResult,
    mod_id: str,
    entries: Iterable[str],
) -> None:
    by_id = result.packages_by_id
    for raw in entries:
        constraint = parse_constraint(raw)
        if constraint is None:
            continue

        target = by_id.get(constraint.target_id)
        if target is None:
            result.diagnostics.append(
                Diagnostic.missing_dependency(mod_id, constraint.target_id)
            )
            continue

        if not constraint.is_satisfied_by(target.version):
            result.diagnostics.append(
                Diagnostic.version_mismatch(
                    mod_id,
                    constraint.target_id,
                    constraint.to_spec(),
                    target.version,
                )
            )
            continue

        result.graph.add_edge(constraint.target_id, mod_id, EdgeKind.HARD)


def _admitted(
    by_id: Dict[str, PackageDescriptor],
    entries: Iterable[str],
) -> List[Constraint]:
    """Soft constraints whose target exists and accepts its version."""
    admitted: List[Constraint] = []
    for raw in entries:
        constraint = parse_constraint(raw)
        if constraint is None:
            continue
        target = by_id.get(constraint.target_id)
        if target is not None and constraint.is_satisfied_by(target.version):
            admitted.append(constraint)
    return admitted
