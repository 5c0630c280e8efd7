"""
Package descriptor model for modorder.

A :class:`PackageDescriptor` is the resolver's view of one discovered mod:
its identity, its version and the three lists of constraint strings that
drive ordering. Descriptors are immutable once built.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple


def normalize_id(value: Optional[str]) -> str:
    """
    Normalize a mod id for comparison and storage.

    Ids are case-insensitive and surrounding whitespace is not significant.

    Args:
        value: Raw id, possibly ``None``.

    Returns:
        Trimmed, lower-cased id (empty string for ``None``).
    """
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def _string_tuple(values: Any) -> Tuple[str, ...]:
    """Keep only the string entries of a list-like value."""
    if values is None or isinstance(values, (str, bytes, Mapping)):
        return ()
    if not isinstance(values, Iterable):
        return ()
    return tuple(v for v in values if isinstance(v, str))


def _derive_id(
    raw_id: Optional[str],
    name: Optional[str],
    root_path: Optional[str],
) -> str:
    """Pick the first usable identity: id, name, root path, generated."""
    # The whole path, not its last component: two anonymous mods in
    # same-named folders must stay distinct
    for candidate in (raw_id, name, root_path):
        normalized = normalize_id(candidate)
        if normalized:
            return normalized

    return uuid.uuid4().hex


@dataclass(frozen=True)
class PackageDescriptor:
    """
    Represents one discovered mod.

    Attributes:
        id: Normalized identity key. Derived from ``name`` or ``root_path``
            when blank, else a generated token.
        version: Declared version, if any.
        depends_on: Hard dependency constraint strings.
        load_before: Soft hints, mods this one should precede.
        load_after: Soft hints, mods this one should follow.
        name: Display name.
        root_path: Folder the mod was discovered in.
        metadata: Free-form metadata (authors, description, tags, ...).
    """

    id: Optional[str] = None
    version: Optional[str] = None
    depends_on: Tuple[str, ...] = ()
    load_before: Tuple[str, ...] = ()
    load_after: Tuple[str, ...] = ()
    name: Optional[str] = None
    root_path: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", _derive_id(self.id, self.name, self.root_path))
        object.__setattr__(self, "depends_on", _string_tuple(self.depends_on))
        object.__setattr__(self, "load_before", _string_tuple(self.load_before))
        object.__setattr__(self, "load_after", _string_tuple(self.load_after))
        if not isinstance(self.version, str) or not self.version.strip():
            object.__setattr__(self, "version", None)

    @classmethod
    def from_about(
        cls,
        about: Mapping[str, Any],
        *,
        root_path: Optional[str] = None,
    ) -> "PackageDescriptor":
        """
        Build a descriptor from a decoded ``About.json`` document.

        Unknown keys are kept in ``metadata``. Fields of the wrong type are
        ignored rather than rejected.

        Args:
            about: Decoded JSON object.
            root_path: Folder the document was read from.

        Returns:
            A new descriptor.
        """
        known = {"id", "name", "version", "dependsOn", "loadBefore", "loadAfter"}
        name = about.get("name")
        version = about.get("version")
        return cls(
            id=about.get("id") if isinstance(about.get("id"), str) else None,
            version=version if isinstance(version, str) else None,
            depends_on=_string_tuple(about.get("dependsOn")),
            load_before=_string_tuple(about.get("loadBefore")),
            load_after=_string_tuple(about.get("loadAfter")),
            name=name if isinstance(name, str) and name.strip() else None,
            root_path=root_path,
            metadata={k: v for k, v in about.items() if k not in known},
        )

    @property
    def display_name(self) -> str:
        """Name shown to users; falls back to the id."""
        return self.name or self.id

    def __str__(self) -> str:
        if self.version:
            return f"{self.id} {self.version}"
        return self.id
