"""
Version helpers for modorder.

Mod versions are plain dotted integer sequences of two to four components
(``major.minor[.build[.revision]]``). Anything else, including PEP 440
extras such as pre-release tags, is treated as malformed. Well-formed
strings are converted to :class:`packaging.version.Version`, whose release
comparison pads missing components with zeros, so ``1.2`` equals
``1.2.0.0``.
"""

from __future__ import annotations

import re
from typing import Optional

from packaging.version import Version

from modorder.constants import (
    MAX_VERSION_COMPONENT_VALUE,
    MAX_VERSION_COMPONENTS,
    MIN_VERSION_COMPONENTS,
)

_DOTTED_INTEGERS = re.compile(r"^\d+(?:\.\d+)*$")


def parse_mod_version(value: Optional[str]) -> Optional[Version]:
    """Parse a mod version string.

    Args:
        value: Raw version text, e.g. ``"1.2.3"``.

    Returns:
        Parsed version, or ``None`` when ``value`` is missing or malformed.

    Examples:
        >>> parse_mod_version("1.2.3")
        <Version('1.2.3')>
        >>> parse_mod_version("1") is None
        True
        >>> parse_mod_version("1.0.0-beta") is None
        True
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not _DOTTED_INTEGERS.match(text):
        return None

    parts = text.split(".")
    if not MIN_VERSION_COMPONENTS <= len(parts) <= MAX_VERSION_COMPONENTS:
        return None
    if any(int(part) > MAX_VERSION_COMPONENT_VALUE for part in parts):
        return None

    return Version(text)


def is_valid_mod_version(value: Optional[str]) -> bool:
    """Return True if ``value`` is a well-formed mod version."""
    return parse_mod_version(value) is not None
