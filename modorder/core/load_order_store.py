"""Persistence and editing of ``loadorder.json``.

The store is the resolver's caller-side collaborator: it reads the order
the user curated, hands it to the resolver, and writes changes back. The
resolver itself never touches the file.

Reading is forgiving by default, matching what a mod manager needs at
startup: a missing file is an empty order, and an undecodable file is
logged and treated as empty. Pass ``strict=True`` to get a
:class:`~modorder.exceptions.ParseError` instead.

Typical usage::

    store = LoadOrderStore(Path("Mods"))
    store.enable("com.example.addon")
    validation = store.validate([d.descriptor for d in discover_packages("Mods")])
    if validation.has_issues:
        ...
"""

from __future__ import annotations

import json
from pathlib import Path
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from modorder.constants import DEFAULT_ORDER_FILENAME
from modorder.exceptions import FileOperationError, ParseError
from modorder.models.load_order import LoadOrderFile
from modorder.models.package import PackageDescriptor, normalize_id
from modorder.models.results import OrderEvaluation
from modorder.core.resolver import LoadOrderResolver
from modorder.utils.filesystem import (
    clean_old_backups,
    safe_read_file,
    safe_write_file,
)
from modorder.utils.logger import get_logger

logger = get_logger("core.load_order_store")

__all__ = ["LoadOrderStore", "LoadOrderValidation"]

PathLike = Union[str, Path]

#: Number of ``loadorder.json`` backups kept when saving with a backup.
_BACKUPS_TO_KEEP = 5


@dataclass
class LoadOrderValidation:
    """Problems found in the persisted order.

    Attributes:
        hard_issue_ids: Mods loading before a hard dependency, or whose hard
            dependency is missing or has the wrong version.
        soft_issue_ids: Mods violating a loadBefore/loadAfter hint.
        missing_dependencies: Diagnostic messages not covered by the ignore
            list.
        cycled_ids: Mods caught in a hard-dependency cycle.
        evaluation: The underlying resolver evaluation.
    """

    hard_issue_ids: Set[str] = field(default_factory=set)
    soft_issue_ids: Set[str] = field(default_factory=set)
    missing_dependencies: List[str] = field(default_factory=list)
    cycled_ids: Set[str] = field(default_factory=set)
    evaluation: Optional[OrderEvaluation] = None

    @property
    def has_issues(self) -> bool:
        return bool(
            self.hard_issue_ids
            or self.soft_issue_ids
            or self.missing_dependencies
            or self.cycled_ids
        )

    @property
    def has_blocking_issues(self) -> bool:
        """True if anything beyond soft hints is wrong."""
        return bool(self.hard_issue_ids or self.missing_dependencies or self.cycled_ids)

    def status_of(self, mod_id: str) -> str:
        """Classify one id: ``cycle``, ``hard``, ``soft`` or ``ok``."""
        if mod_id in self.cycled_ids:
            return "cycle"
        if mod_id in self.hard_issue_ids:
            return "hard"
        if mod_id in self.soft_issue_ids:
            return "soft"
        return "ok"


class LoadOrderStore:
    """Read, edit and validate the load order file of one mods folder.

    Args:
        mods_root: Folder containing the mods and the order file.
        filename: Name of the order file.
        resolver: Resolver used by :meth:`validate`.
    """

    def __init__(
        self,
        mods_root: PathLike,
        filename: str = DEFAULT_ORDER_FILENAME,
        *,
        resolver: Optional[LoadOrderResolver] = None,
    ) -> None:
        self.mods_root = Path(mods_root)
        self.path = self.mods_root / filename
        self._resolver = resolver or LoadOrderResolver()

    # ------------------------------------------------------------------
    # Reading and writing
    # ------------------------------------------------------------------

    def read(self, *, strict: bool = False) -> LoadOrderFile:
        """Load the order file.

        Args:
            strict: Raise instead of returning an empty order when the file
                exists but cannot be read or decoded.

        Raises:
            ParseError: ``strict`` and the content is not valid JSON.
            FileOperationError: ``strict`` and the file cannot be read.
        """
        if not self.path.is_file():
            return LoadOrderFile()

        try:
            text = safe_read_file(self.path)
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            if strict:
                raise ParseError(
                    f"Invalid JSON: {exc.msg}",
                    file_path=str(self.path),
                    line_number=exc.lineno,
                ) from exc
            logger.warning("Failed to read %s: %s", self.path, exc)
            return LoadOrderFile()
        except FileOperationError as exc:
            if strict:
                raise
            logger.warning("Failed to read %s: %s", self.path, exc)
            return LoadOrderFile()

        return LoadOrderFile.from_json(data)

    def read_order(self) -> List[str]:
        return self.read().order

    def save(self, load_order: LoadOrderFile, *, backup: bool = False) -> Optional[Path]:
        """Write ``load_order`` atomically.

        Returns:
            Path of the backup taken, if ``backup`` was requested and a
            previous file existed.
        """
        content = json.dumps(load_order.to_json(), indent=2) + "\n"
        backup_path = safe_write_file(self.path, content, create_backup=backup)
        if backup_path is not None:
            clean_old_backups(self.path, keep=_BACKUPS_TO_KEEP)
        logger.info("Saved load order with %d mods to %s", len(load_order.order), self.path)
        return backup_path

    def save_order(self, mod_ids: Iterable[str], *, backup: bool = False) -> Optional[Path]:
        """Replace the order, keeping existing per-mod status entries."""
        current = self.read()
        order: List[str] = []
        for entry in mod_ids:
            mod_id = normalize_id(entry)
            if mod_id and mod_id not in order:
                order.append(mod_id)
        return self.save(LoadOrderFile(order=order, mods=current.mods), backup=backup)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def enable(self, mod_id: str) -> bool:
        """Append ``mod_id`` to the order if absent. Returns True on change."""
        mod_id = normalize_id(mod_id)
        current = self.read()
        if not mod_id or mod_id in current.order:
            return False
        current.order.append(mod_id)
        self.save(current)
        return True

    def disable(self, mod_id: str) -> bool:
        """Remove ``mod_id`` from the order. Returns True on change."""
        mod_id = normalize_id(mod_id)
        current = self.read()
        remaining = [entry for entry in current.order if entry != mod_id]
        if len(remaining) == len(current.order):
            return False
        current.order = remaining
        self.save(current)
        return True

    def move_up(self, mod_id: str) -> bool:
        """Swap ``mod_id`` with its predecessor. Returns True on change."""
        return self._move(mod_id, -1)

    def move_down(self, mod_id: str) -> bool:
        """Swap ``mod_id`` with its successor. Returns True on change."""
        return self._move(mod_id, 1)

    def _move(self, mod_id: str, step: int) -> bool:
        current = self.read()
        index = current.index_of(mod_id)
        other = index + step
        if index < 0 or not 0 <= other < len(current.order):
            return False
        order = current.order
        order[index], order[other] = order[other], order[index]
        self.save(current)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def split_enabled(
        self,
        packages: Iterable[PackageDescriptor],
    ) -> Tuple[List[PackageDescriptor], List[PackageDescriptor]]:
        """Partition ``packages`` by presence in the persisted order.

        Returns:
            ``(enabled, disabled)``: enabled mods in load order, disabled
            mods by display name.
        """
        position = {mod_id: i for i, mod_id in enumerate(self.read_order())}
        enabled = [p for p in packages if p.id in position]
        disabled = [p for p in packages if p.id not in position]
        enabled.sort(key=lambda p: (position[p.id], p.display_name.lower()))
        disabled.sort(key=lambda p: (p.display_name.lower(), p.id))
        return enabled, disabled

    def validate(
        self,
        packages: Iterable[PackageDescriptor],
        *,
        ignore: Sequence[str] = (),
    ) -> LoadOrderValidation:
        """Check the persisted order against the dependencies of ``packages``.

        Args:
            packages: Mods to check, normally the enabled ones.
            ignore: Substrings; dependency problems whose target id
                contains one of them are not reported.

        Returns:
            A :class:`LoadOrderValidation`.
        """
        ignored = [normalize_id(token) for token in ignore if normalize_id(token)]
        evaluation = self._resolver.evaluate(list(packages), self.read_order())

        validation = LoadOrderValidation(
            hard_issue_ids=set(evaluation.hard_issues),
            soft_issue_ids=set(evaluation.soft_issues),
            cycled_ids=set(evaluation.cycled_ids),
            evaluation=evaluation,
        )
        for diagnostic in evaluation.diagnostics:
            if any(token in diagnostic.target_id for token in ignored):
                logger.debug("Ignoring diagnostic: %s", diagnostic.message)
                continue
            validation.hard_issue_ids.add(diagnostic.package_id)
            validation.missing_dependencies.append(diagnostic.message)

        return validation
