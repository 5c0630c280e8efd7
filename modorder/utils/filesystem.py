"""
File helpers for mod folders and the load order file.

- :func:`safe_read_file` reads ``About.json`` and ``loadorder.json`` with a
  size cap, tolerating a UTF-8 byte order mark.
- :func:`safe_write_file` replaces ``loadorder.json`` atomically, so a
  crash mid-write never leaves the game with a truncated order, and can
  keep a timestamped copy of the previous version.
- :func:`list_subdirectories` enumerates candidate mod folders.

Every ``OSError`` is re-raised as :class:`~modorder.exceptions.FileOperationError`.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Union

from modorder.constants import MAX_FILE_SIZE
from modorder.exceptions import FileOperationError
from modorder.utils.logger import get_logger

logger = get_logger("filesystem")

PathLike = Union[str, Path]

_BACKUP_SUFFIX = ".backup"


def _require_file(path: Path, operation: str) -> Path:
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}", file_path=str(path), operation=operation
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}", file_path=str(path), operation=operation
        )
    return path.resolve()


def _copy(source: Path, target: Path, operation: str) -> None:
    try:
        shutil.copy2(source, target)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to {operation} {source.name}: {exc}",
            file_path=str(source),
            operation=operation,
            original_error=exc,
        ) from exc


def _atomic_write(target: Path, content: str) -> None:
    """Write to a sibling temp file, then rename it over ``target``."""
    temp_path: Optional[Path] = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
        temp_path = Path(temp_name)
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        temp_path.replace(target)
    except OSError as exc:
        if temp_path is not None:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as cleanup_exc:
                logger.warning("Could not remove %s: %s", temp_path, cleanup_exc)
        raise FileOperationError(
            f"Atomic write failed: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8-sig",
) -> str:
    """Return the text of ``file_path``.

    Args:
        file_path: File to read.
        max_size: Refuse files larger than this many bytes; ``None`` for
            no limit.
        encoding: Text encoding. The default drops a leading byte order
            mark, which Windows editors like to add to ``About.json``.

    Raises:
        FileOperationError: The file is missing, too large or unreadable.
    """
    path = _require_file(Path(file_path), "read")

    size = path.stat().st_size
    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def safe_write_file(
    file_path: PathLike,
    content: str,
    *,
    create_backup: bool = False,
) -> Optional[Path]:
    """Atomically replace ``file_path`` with ``content``.

    Args:
        file_path: Destination; parent folders are created as needed.
        content: Text to write (UTF-8, ``\\n`` line endings).
        create_backup: Copy an existing file aside first. If the write then
            fails, the original is restored from that copy.

    Returns:
        The backup path, or ``None`` if no backup was made.
    """
    path = Path(file_path)
    backup = create_backup_file(path) if create_backup and path.is_file() else None

    try:
        _atomic_write(path, content)
    except FileOperationError:
        if backup is not None and backup.exists():
            logger.warning("Write failed, restoring %s from %s", path, backup)
            _copy(backup, path, "restore")
        raise

    return backup


def create_backup_file(file_path: PathLike) -> Path:
    """Copy ``file_path`` to ``<name>.<timestamp>.backup`` beside it."""
    path = _require_file(Path(file_path), "backup")
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup = path.with_name(f"{path.name}.{stamp}{_BACKUP_SUFFIX}")
    _copy(path, backup, "backup")
    logger.debug("Backed up %s to %s", path.name, backup.name)
    return backup


def list_backups(file_path: PathLike) -> List[Path]:
    """Backups of ``file_path``, newest first."""
    path = Path(file_path)
    found = path.parent.glob(f"{path.name}.*{_BACKUP_SUFFIX}")
    return sorted(found, key=lambda backup: backup.name, reverse=True)


def clean_old_backups(file_path: PathLike, *, keep: int = 5) -> int:
    """Delete all but the ``keep`` newest backups.

    Returns:
        Number of backups deleted. Failures are logged, not raised.
    """
    deleted = 0
    for backup in list_backups(file_path)[keep:]:
        try:
            backup.unlink()
        except OSError as exc:
            logger.warning("Failed to delete backup %s: %s", backup, exc)
        else:
            deleted += 1
    if deleted:
        logger.debug("Deleted %d old backup(s) of %s", deleted, Path(file_path).name)
    return deleted


def list_subdirectories(directory: PathLike) -> List[Path]:
    """Visible immediate subfolders of ``directory``, sorted case-insensitively.

    Returns an empty list when ``directory`` is not a folder.
    """
    root = Path(directory)
    if not root.is_dir():
        return []

    try:
        folders = [
            entry
            for entry in root.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        ]
    except OSError as exc:
        raise FileOperationError(
            f"Cannot list directory: {exc}",
            file_path=str(root),
            operation="list",
            original_error=exc,
        ) from exc

    return sorted(folders, key=lambda folder: (folder.name.lower(), folder.name))
