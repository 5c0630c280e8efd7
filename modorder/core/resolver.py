"""Load order resolver façade.

:class:`LoadOrderResolver` is the public entry point of the resolver core.
It ties together constraint parsing, graph construction, priority
assignment and sorting, and exposes two operations:

- :meth:`LoadOrderResolver.resolve` computes a dependency-respecting order
  from scratch, using a previous order only to break ties;
- :meth:`LoadOrderResolver.evaluate` checks an existing order and reports
  which entries are misplaced, without changing it.

Both are pure functions of their arguments. Malformed metadata never
raises; it shows up as diagnostics or cycled ids on the result.

Typical usage::

    from modorder import PackageDescriptor, LoadOrderResolver

    resolver = LoadOrderResolver()
    result = resolver.resolve(packages, prior_order=["core", "ui"])
    for message in result.missing_hard_dependencies:
        print(message)
    print(result.order)
"""

from __future__ import annotations

from typing import Iterable, Optional

from modorder.utils.logger import get_logger
from modorder.models.package import PackageDescriptor
from modorder.models.results import OrderEvaluation, ResolutionResult
from modorder.core.priority import assign_priority
from modorder.core.sorter import topological_sort
from modorder.core.evaluator import evaluate_order
from modorder.core.graph_builder import build_dependency_graph

logger = get_logger("core.resolver")

__all__ = ["LoadOrderResolver", "resolve", "evaluate"]


class LoadOrderResolver:
    """Compute and check mod load orders.

    The resolver keeps no state between calls, so one instance can be
    shared freely, including across threads.

    Example::

        >>> core = PackageDescriptor(id="core")
        >>> addon = PackageDescriptor(id="addon", depends_on=["core"])
        >>> LoadOrderResolver().evaluate([core, addon], ["addon", "core"]).hard_issues
        {'addon'}
    """

    def resolve(
        self,
        packages: Optional[Iterable[PackageDescriptor]],
        prior_order: Optional[Iterable[str]] = None,
    ) -> ResolutionResult:
        """Compute a load order for ``packages``.

        Args:
            packages: Discovered mods. Duplicated ids keep the first entry.
            prior_order: Previous order used as tie-break hint.

        Returns:
            Descriptors in load order, diagnostics and cycled ids.
        """
        build = build_dependency_graph(packages)
        priority = assign_priority(build.graph.ids, prior_order)
        sort_result = topological_sort(build.graph, priority)

        ordered = [build.packages_by_id[node] for node in sort_result.order]

        logger.debug(
            "Resolved %d mods (%d diagnostics, %d cycled)",
            len(ordered),
            len(build.diagnostics),
            len(sort_result.cycled_ids),
        )
        return ResolutionResult(
            packages=ordered,
            diagnostics=build.diagnostics,
            cycled_ids=sort_result.cycled_ids,
        )

    def evaluate(
        self,
        packages: Optional[Iterable[PackageDescriptor]],
        user_order: Optional[Iterable[str]] = None,
    ) -> OrderEvaluation:
        """Check ``user_order`` against the dependencies of ``packages``.

        Args:
            packages: Discovered mods.
            user_order: Order to check; ids not among ``packages`` are
                ignored.

        Returns:
            The normalized order, the recommended order and every
            misplaced id.
        """
        return evaluate_order(packages, user_order)


_default_resolver = LoadOrderResolver()


def resolve(
    packages: Optional[Iterable[PackageDescriptor]],
    prior_order: Optional[Iterable[str]] = None,
) -> ResolutionResult:
    """Shortcut for :meth:`LoadOrderResolver.resolve`."""
    return _default_resolver.resolve(packages, prior_order)


def evaluate(
    packages: Optional[Iterable[PackageDescriptor]],
    user_order: Optional[Iterable[str]] = None,
) -> OrderEvaluation:
    """Shortcut for :meth:`LoadOrderResolver.evaluate`."""
    return _default_resolver.evaluate(packages, user_order)
