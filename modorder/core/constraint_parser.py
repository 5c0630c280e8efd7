"""Dependency string parsing for modorder.

Turns the free-text entries of ``dependsOn`` / ``loadBefore`` /
``loadAfter`` into :class:`~modorder.models.constraint.Constraint` values.

Accepted shape::

    <id>[ <op> <version>]     e.g. "core", "core >= 1.2", "core!=2.0.1"

where ``<op>`` is one of ``>= <= > < == !=`` and ``<version>`` is two to
four dot-separated integers. Parsing never fails:

- text that does not match the shape becomes an unconditional dependency
  on the whole trimmed, lower-cased string;
- an operator without a usable version (or a version without an operator)
  is ambiguous, and both are dropped in favour of an unconditional
  dependency on the id.
"""

from __future__ import annotations

import re
from typing import Optional

from modorder.constants import CONSTRAINT_OPERATORS
from modorder.utils.logger import get_logger
from modorder.models.package import normalize_id
from modorder.utils.version_utils import parse_mod_version
from modorder.models.constraint import Constraint, Operator

logger = get_logger("core.constraint_parser")

__all__ = ["parse_constraint"]

_CONSTRAINT_PATTERN = re.compile(
    r"^\s*([a-zA-Z0-9_.-]+)\s*("
    + "|".join(re.escape(op) for op in CONSTRAINT_OPERATORS)
    + r")?\s*([0-9.]+)?\s*$"
)


def parse_constraint(raw: Optional[str]) -> Optional[Constraint]:
    """Parse one dependency string.

    Args:
        raw: Entry from a mod's metadata.

    Returns:
        The parsed constraint, or ``None`` for missing or blank input.

    Example::

        >>> parse_constraint("Core >= 1.2")
        Constraint(target_id='core', operator=<Operator.GE: '>='>, version='1.2')
        >>> parse_constraint("core >=").operator
        <Operator.NONE: ''>
    """
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None

    match = _CONSTRAINT_PATTERN.match(text)
    if match is None:
        return Constraint(normalize_id(text))

    target_id = normalize_id(match.group(1))
    symbol = match.group(2) or ""
    version_text = match.group(3) or ""

    version = version_text if parse_mod_version(version_text) is not None else None
    if version_text and version is None:
        logger.debug("Ignoring unparsable version %r in %r", version_text, raw)

    if bool(symbol) != (version is not None):
        logger.debug(
            "Ambiguous version constraint in %r; treating as plain dependency on %r",
            raw,
            target_id,
        )
        return Constraint(target_id)

    return Constraint(target_id, Operator.from_symbol(symbol), version)
