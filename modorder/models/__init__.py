"""
Unified data model exports for modorder.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``modorder.models`` instead of individual submodules.

Example:
    >>> from modorder.models import PackageDescriptor, Constraint
"""

from __future__ import annotations

from modorder.models.package import PackageDescriptor, normalize_id
from modorder.models.constraint import Constraint, Operator
from modorder.models.graph import DependencyGraph, Edge, EdgeKind
from modorder.models.results import (
    Diagnostic,
    DiagnosticKind,
    OrderEvaluation,
    ResolutionResult,
)
from modorder.models.load_order import LoadOrderFile, ModStatusEntry

__all__ = [
    "PackageDescriptor",
    "normalize_id",
    "Constraint",
    "Operator",
    "DependencyGraph",
    "Edge",
    "EdgeKind",
    "Diagnostic",
    "DiagnosticKind",
    "OrderEvaluation",
    "ResolutionResult",
    "LoadOrderFile",
    "ModStatusEntry",
]
