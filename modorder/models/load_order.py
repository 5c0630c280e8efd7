"""
Persisted load order model for modorder.

Mirrors the ``loadorder.json`` document kept in the mods root::

    {
      "order": ["core", "addon"],
      "mods": [{"id": "addon", "enabled": true, "locked": false, "notes": ""}]
    }

Decoding is forgiving: entries of the wrong shape are skipped so that a
hand-edited file never prevents the manager from starting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from modorder.models.package import normalize_id


@dataclass
class ModStatusEntry:
    """Per-mod flags stored alongside the order."""

    enabled: bool = True
    locked: bool = False
    notes: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ModStatusEntry":
        enabled = data.get("enabled", True)
        locked = data.get("locked", False)
        notes = data.get("notes")
        return cls(
            enabled=enabled if isinstance(enabled, bool) else True,
            locked=locked if isinstance(locked, bool) else False,
            notes=notes if isinstance(notes, str) else None,
        )


@dataclass
class LoadOrderFile:
    """Decoded ``loadorder.json``.

    Attributes:
        order: Normalized ids in load order, without duplicates.
        mods: Status entries keyed by normalized id.
    """

    order: List[str] = field(default_factory=list)
    mods: Dict[str, ModStatusEntry] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> "LoadOrderFile":
        """Build from a decoded JSON value; anything unusable is dropped."""
        if not isinstance(data, Mapping):
            return cls()

        order: List[str] = []
        raw_order = data.get("order")
        if isinstance(raw_order, list):
            seen = set()
            for entry in raw_order:
                mod_id = normalize_id(entry)
                if mod_id and mod_id not in seen:
                    seen.add(mod_id)
                    order.append(mod_id)

        mods: Dict[str, ModStatusEntry] = {}
        raw_mods = data.get("mods")
        if isinstance(raw_mods, list):
            for entry in raw_mods:
                if not isinstance(entry, Mapping):
                    continue
                mod_id = normalize_id(entry.get("id"))
                if mod_id:
                    mods[mod_id] = ModStatusEntry.from_json(entry)

        return cls(order=order, mods=mods)

    def to_json(self) -> Dict[str, Any]:
        """Return the document shape written to disk."""
        return {
            "order": list(self.order),
            "mods": [
                {
                    "id": mod_id,
                    "enabled": entry.enabled,
                    "locked": entry.locked,
                    "notes": entry.notes,
                }
                for mod_id, entry in self.mods.items()
            ],
        }

    def index_of(self, mod_id: str) -> int:
        """Position of ``mod_id`` in the order, or ``-1``."""
        try:
            return self.order.index(normalize_id(mod_id))
        except ValueError:
            return -1
