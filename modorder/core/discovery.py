"""Discovery of installed mods.

Each immediate subfolder of the mods root is one mod. Its metadata lives
in ``About/About.json``::

    {
      "id": "com.example.addon",
      "name": "Addon",
      "version": "1.2.0",
      "dependsOn": ["com.example.core>=1.0"],
      "loadBefore": [],
      "loadAfter": ["com.example.ui"]
    }

A folder without a readable ``About.json`` is still reported, under an id
derived from its folder name, so that it can be ordered and shown with a
warning instead of disappearing from the list.
"""

from __future__ import annotations

import json
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from modorder.constants import (
    ABOUT_DIR_NAME,
    ABOUT_FILE_NAME,
    PREVIEW_FILE_NAME,
    RESERVED_FOLDER_NAMES,
)
from modorder.exceptions import FileOperationError, ParseError
from modorder.models.package import PackageDescriptor
from modorder.utils.filesystem import list_subdirectories, safe_read_file
from modorder.utils.logger import get_logger
from modorder.utils.version_utils import is_valid_mod_version

logger = get_logger("core.discovery")

__all__ = [
    "DiscoveredPackage",
    "discover_packages",
    "discover_package",
    "read_about",
]

PathLike = Union[str, Path]


@dataclass(frozen=True)
class DiscoveredPackage:
    """A mod folder and what could be learned from it.

    Attributes:
        descriptor: Resolver input built from the metadata.
        has_about: True if ``About.json`` was read successfully.
        preview_path: ``About/preview.png`` if present.
        status_message: Warning shown next to the mod, if any.
    """

    descriptor: PackageDescriptor
    has_about: bool = True
    preview_path: Optional[Path] = None
    status_message: Optional[str] = None

    @property
    def id(self) -> str:
        return self.descriptor.id


def read_about(path: PathLike) -> Dict[str, Any]:
    """Read and decode one ``About.json``.

    Raises:
        FileOperationError: The file cannot be read.
        ParseError: The content is not a JSON object.
    """
    text = safe_read_file(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON: {exc.msg}",
            file_path=str(path),
            line_number=exc.lineno,
        ) from exc

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object, got {type(data).__name__}",
            file_path=str(path),
        )
    return data


def discover_package(mod_dir: PathLike) -> DiscoveredPackage:
    """Describe the mod stored in ``mod_dir``. Never raises for bad metadata."""
    folder = Path(mod_dir)
    about_dir = folder / ABOUT_DIR_NAME
    about_path = about_dir / ABOUT_FILE_NAME
    preview = about_dir / PREVIEW_FILE_NAME
    preview_path = preview if preview.is_file() else None

    if not about_path.is_file():
        logger.debug("No %s in %s", ABOUT_FILE_NAME, folder)
        return _fallback(folder, "Missing About.json", preview_path)

    try:
        about = read_about(about_path)
    except (FileOperationError, ParseError) as exc:
        logger.warning("Could not read %s: %s", about_path, exc)
        return _fallback(folder, "Invalid About.json", preview_path)

    if not isinstance(about.get("id"), str) or not about["id"].strip():
        about = dict(about, id=folder.name)

    descriptor = PackageDescriptor.from_about(about, root_path=str(folder))
    if descriptor.version is not None and not is_valid_mod_version(descriptor.version):
        logger.debug(
            "%s has unusable version %r; version constraints on it fail",
            descriptor.id,
            descriptor.version,
        )
    return DiscoveredPackage(descriptor=descriptor, preview_path=preview_path)


def discover_packages(mods_root: PathLike) -> List[DiscoveredPackage]:
    """Describe every mod folder under ``mods_root``.

    Reserved folders (``disabled``) and hidden folders are skipped. The
    result follows folder name order.

    Args:
        mods_root: Directory holding one folder per mod.

    Returns:
        Discovered mods; empty if the root does not exist.
    """
    root = Path(mods_root)
    if not root.is_dir():
        logger.debug("Mods root %s does not exist", root)
        return []

    reserved = {name.lower() for name in RESERVED_FOLDER_NAMES}
    discovered: List[DiscoveredPackage] = []
    for folder in list_subdirectories(root):
        if folder.name.lower() in reserved:
            continue
        discovered.append(discover_package(folder))

    logger.info("Discovered %d mods in %s", len(discovered), root)
    return discovered


def _fallback(
    folder: Path,
    message: str,
    preview_path: Optional[Path],
) -> DiscoveredPackage:
    descriptor = PackageDescriptor(
        id=folder.name,
        name=folder.name,
        root_path=str(folder),
    )
    return DiscoveredPackage(
        descriptor=descriptor,
        has_about=False,
        preview_path=preview_path,
        status_message=message,
    )
