"""
Result models returned by the modorder resolver.

Recoverable data-quality problems (missing dependencies, unsatisfied
version requirements) are carried as :class:`Diagnostic` records instead
of exceptions, so callers decide how to surface them.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from modorder.models.package import PackageDescriptor


class DiagnosticKind(Enum):
    """Category of a resolver diagnostic."""

    MISSING_DEPENDENCY = "missing_dependency"
    VERSION_MISMATCH = "version_mismatch"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem with one mod's hard dependency.

    Attributes:
        kind: What went wrong.
        package_id: Mod declaring the dependency.
        target_id: Mod depended upon.
        message: Human-readable description.
        required: Version requirement (e.g. ``">=2.0"``), if any.
        found: Version of the discovered target, if any.
    """

    kind: DiagnosticKind
    package_id: str
    target_id: str
    message: str
    required: Optional[str] = None
    found: Optional[str] = None

    @classmethod
    def missing_dependency(cls, package_id: str, target_id: str) -> "Diagnostic":
        return cls(
            kind=DiagnosticKind.MISSING_DEPENDENCY,
            package_id=package_id,
            target_id=target_id,
            message=f"Mod '{package_id}' has a missing hard dependency: '{target_id}'.",
        )

    @classmethod
    def version_mismatch(
        cls,
        package_id: str,
        target_id: str,
        required: str,
        found: Optional[str],
    ) -> "Diagnostic":
        return cls(
            kind=DiagnosticKind.VERSION_MISMATCH,
            package_id=package_id,
            target_id=target_id,
            message=(
                f"Mod '{package_id}' requires dependency '{target_id}' version "
                f"{required}, but found version {found or 'none'}."
            ),
            required=required,
            found=found,
        )

    def to_json(self) -> Dict[str, Optional[str]]:
        """Return a JSON-serializable representation."""
        return {
            "kind": self.kind.value,
            "package_id": self.package_id,
            "target_id": self.target_id,
            "required": self.required,
            "found": self.found,
            "message": self.message,
        }

    def __str__(self) -> str:
        return self.message


@dataclass
class ResolutionResult:
    """Outcome of resolving a load order from scratch.

    Attributes:
        packages: Descriptors in recommended load order.
        diagnostics: Missing or version-violated hard dependencies.
        cycled_ids: Ids caught in an unresolvable hard-dependency cycle.
    """

    packages: List[PackageDescriptor] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    cycled_ids: Set[str] = field(default_factory=set)

    @property
    def order(self) -> List[str]:
        """Recommended order as ids."""
        return [package.id for package in self.packages]

    @property
    def missing_hard_dependencies(self) -> List[str]:
        """Diagnostic messages, in the order they were found."""
        return [diagnostic.message for diagnostic in self.diagnostics]

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycled_ids)

    @property
    def has_diagnostics(self) -> bool:
        return bool(self.diagnostics)

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "order": self.order,
            "cycled": sorted(self.cycled_ids),
            "diagnostics": [d.to_json() for d in self.diagnostics],
        }


@dataclass
class OrderEvaluation:
    """Analysis of an existing load order against the dependency graph.

    Attributes:
        enabled_order: User order, normalized and restricted to discovered
            ids, duplicates removed.
        sorted_ids: The resolver's recommended order for all discovered ids.
        hard_issues: Ids placed before one of their hard dependencies.
        soft_issues: Ids placed against a loadBefore/loadAfter hint.
        diagnostics: Missing or version-violated hard dependencies.
        cycled_ids: Ids caught in an unresolvable hard-dependency cycle.
    """

    enabled_order: List[str] = field(default_factory=list)
    sorted_ids: List[str] = field(default_factory=list)
    hard_issues: Set[str] = field(default_factory=set)
    soft_issues: Set[str] = field(default_factory=set)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    cycled_ids: Set[str] = field(default_factory=set)

    @property
    def missing_hard_dependencies(self) -> List[str]:
        return [diagnostic.message for diagnostic in self.diagnostics]

    @property
    def has_issues(self) -> bool:
        """True if any entry of the user order is misplaced."""
        return bool(self.hard_issues or self.soft_issues)

    @property
    def is_sorted(self) -> bool:
        """True if the user order matches the recommendation exactly."""
        enabled = set(self.enabled_order)
        recommended = [node for node in self.sorted_ids if node in enabled]
        return recommended == self.enabled_order

    def status_of(self, mod_id: str) -> str:
        """Classify one id: ``cycle``, ``hard``, ``soft`` or ``ok``."""
        if mod_id in self.cycled_ids:
            return "cycle"
        if mod_id in self.hard_issues:
            return "hard"
        if mod_id in self.soft_issues:
            return "soft"
        return "ok"

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "enabled_order": list(self.enabled_order),
            "sorted": list(self.sorted_ids),
            "hard_issues": sorted(self.hard_issues),
            "soft_issues": sorted(self.soft_issues),
            "cycled": sorted(self.cycled_ids),
            "diagnostics": [d.to_json() for d in self.diagnostics],
        }
