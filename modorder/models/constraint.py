"""
Dependency constraint model for modorder.

A constraint is the parsed form of a dependency string such as
``"core>=1.2"``: a target mod id, an optional comparison operator and an
optional version. Operator and version are only meaningful together.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional

from modorder.models.package import normalize_id
from modorder.utils.version_utils import parse_mod_version


class Operator(Enum):
    """Comparison operators supported in dependency strings."""

    NONE = ""
    GE = ">="
    LE = "<="
    GT = ">"
    LT = "<"
    EQ = "=="
    NE = "!="

    @classmethod
    def from_symbol(cls, symbol: Optional[str]) -> "Operator":
        """Map ``">="`` and friends to a member; unknown text is ``NONE``."""
        if not symbol:
            return cls.NONE
        return _BY_SYMBOL.get(symbol.strip(), cls.NONE)


_BY_SYMBOL: Dict[str, Operator] = {op.value: op for op in Operator if op.value}


@dataclass(frozen=True)
class Constraint:
    """A parsed dependency on another mod.

    Args:
        target_id: Id of the mod depended upon (normalized on init).
        operator: Comparison applied to the target's version.
        version: Version operand; required whenever ``operator`` is set.
    """

    target_id: str
    operator: Operator = Operator.NONE
    version: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "target_id", normalize_id(self.target_id))

        has_operator = self.operator is not Operator.NONE
        has_version = parse_mod_version(self.version) is not None
        if has_operator != has_version:
            object.__setattr__(self, "operator", Operator.NONE)
            object.__setattr__(self, "version", None)
        elif has_version:
            object.__setattr__(self, "version", self.version.strip())

    @property
    def is_versioned(self) -> bool:
        """True if the constraint gates on the target's version."""
        return self.operator is not Operator.NONE

    def is_satisfied_by(self, candidate: Optional[str]) -> bool:
        """Check a target version against this constraint.

        Unversioned constraints accept anything. A versioned constraint
        rejects a missing or malformed candidate instead of raising.

        Args:
            candidate: The target mod's declared version.

        Returns:
            True if the candidate satisfies the constraint.

        Example::

            >>> Constraint("core", Operator.GE, "1.2").is_satisfied_by("1.10")
            True
            >>> Constraint("core", Operator.GE, "1.2").is_satisfied_by("beta")
            False
        """
        if not self.is_versioned:
            return True

        actual = parse_mod_version(candidate)
        if actual is None:
            return False

        required = parse_mod_version(self.version)
        op = self.operator
        if op is Operator.GE:
            return actual >= required
        if op is Operator.LE:
            return actual <= required
        if op is Operator.GT:
            return actual > required
        if op is Operator.LT:
            return actual < required
        if op is Operator.EQ:
            return actual == required
        return actual != required

    def to_spec(self) -> str:
        """Render the version requirement, e.g. ``">=1.2"`` (may be empty)."""
        if not self.is_versioned:
            return ""
        return f"{self.operator.value}{self.version}"

    def __str__(self) -> str:
        return f"{self.target_id}{self.to_spec()}"
