"""
modorder: deterministic load order resolution for mods

modorder computes a safe load order for a set of plugin-like packages
("mods") that declare dependencies on each other, and checks an existing
user-curated order against those dependencies.

Features include:
    • Version-gated hard dependencies (``"core>=1.2"``)
    • Soft ordering hints (``loadBefore`` / ``loadAfter``)
    • Stable, priority-aware topological sorting
    • Cycle detection with soft-edge relaxation
    • Misplaced-entry reporting for existing orders

The resolver itself is pure: it performs no I/O and never raises on
malformed mod metadata. Discovery of mods on disk and the persisted
``loadorder.json`` are handled by :mod:`modorder.core.discovery` and
:mod:`modorder.core.load_order_store`.

Example::

    >>> from modorder import PackageDescriptor, resolve
    >>> core = PackageDescriptor(id="core", version="1.2.0")
    >>> addon = PackageDescriptor(id="addon", depends_on=["core>=1.0"])
    >>> resolve([addon, core]).order
    ['core', 'addon']
"""

from __future__ import annotations

from modorder.__version__ import __version__
from modorder.models import (
    Constraint,
    Diagnostic,
    DiagnosticKind,
    OrderEvaluation,
    PackageDescriptor,
    ResolutionResult,
)
from modorder.core.resolver import LoadOrderResolver, evaluate, resolve

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "modorder Contributors"
__license__ = "Apache-2.0"
__description__ = "Deterministic, dependency-aware load order resolution for mods."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "LoadOrderResolver",
    "resolve",
    "evaluate",
    "PackageDescriptor",
    "Constraint",
    "Diagnostic",
    "DiagnosticKind",
    "ResolutionResult",
    "OrderEvaluation",
]
