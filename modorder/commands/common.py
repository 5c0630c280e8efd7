"""Helpers shared by the modorder CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from modorder.config import ModOrderConfig
from modorder.context import ModOrderContext
from modorder.core.discovery import DiscoveredPackage, discover_packages
from modorder.core.load_order_store import LoadOrderStore
from modorder.exceptions import FileOperationError
from modorder.utils.logger import get_logger

logger = get_logger("commands")


def get_config(ctx: ModOrderContext) -> ModOrderConfig:
    return ctx.config if ctx.config is not None else ModOrderConfig()


def resolve_mods_dir(ctx: ModOrderContext, mods_dir: Optional[Path]) -> Path:
    """Pick the mods folder: argument, then config, then the cwd.

    Raises:
        FileOperationError: The chosen folder does not exist.
    """
    chosen = mods_dir or get_config(ctx).mods_dir or Path.cwd()
    if not chosen.is_dir():
        raise FileOperationError(
            f"Mods folder not found: {chosen}",
            file_path=str(chosen),
            operation="discover",
        )
    logger.debug("Using mods folder %s", chosen)
    return chosen


def open_store(ctx: ModOrderContext, mods_dir: Path) -> LoadOrderStore:
    return LoadOrderStore(mods_dir, get_config(ctx).order_file)


def load_mods(mods_dir: Path) -> List[DiscoveredPackage]:
    return discover_packages(mods_dir)
