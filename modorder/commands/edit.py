"""Load order editing commands for modorder.

``enable`` appends a mod to the load order, ``disable`` removes it and
``move`` swaps it with a neighbour. Each command only writes the load
order file when something actually changed.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from modorder.context import pass_context, ModOrderContext
from modorder.models.package import normalize_id
from modorder.commands.common import load_mods, open_store, resolve_mods_dir
from modorder.utils import get_logger, print_error, print_success, print_warning

logger = get_logger("commands.edit")

_MODS_DIR_ARGUMENT = click.argument(
    "mods_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=False,
)


@click.command()
@click.argument("mod_id")
@_MODS_DIR_ARGUMENT
@click.option(
    "--force",
    is_flag=True,
    help="Enable the id even if no installed mod has it.",
)
@pass_context
def enable(ctx: ModOrderContext, mod_id: str, mods_dir: Optional[Path], force: bool) -> None:
    """Add MOD_ID to the end of the load order."""
    root = resolve_mods_dir(ctx, mods_dir)
    mod_id = normalize_id(mod_id)

    installed = {mod.id for mod in load_mods(root)}
    if mod_id not in installed and not force:
        print_error(f"No installed mod with id '{mod_id}'")
        sys.exit(1)

    if open_store(ctx, root).enable(mod_id):
        print_success(f"Enabled '{mod_id}'")
    else:
        print_warning(f"'{mod_id}' is already enabled")
    sys.exit(0)


@click.command()
@click.argument("mod_id")
@_MODS_DIR_ARGUMENT
@pass_context
def disable(ctx: ModOrderContext, mod_id: str, mods_dir: Optional[Path]) -> None:
    """Remove MOD_ID from the load order."""
    root = resolve_mods_dir(ctx, mods_dir)
    mod_id = normalize_id(mod_id)

    if open_store(ctx, root).disable(mod_id):
        print_success(f"Disabled '{mod_id}'")
    else:
        print_warning(f"'{mod_id}' is not in the load order")
    sys.exit(0)


@click.command()
@click.argument("mod_id")
@_MODS_DIR_ARGUMENT
@click.option("--up", "direction", flag_value="up", help="Load one step earlier.")
@click.option("--down", "direction", flag_value="down", help="Load one step later.")
@pass_context
def move(
    ctx: ModOrderContext,
    mod_id: str,
    mods_dir: Optional[Path],
    direction: Optional[str],
) -> None:
    """Move MOD_ID one position up or down in the load order."""
    if direction is None:
        raise click.UsageError("Specify --up or --down")

    root = resolve_mods_dir(ctx, mods_dir)
    store = open_store(ctx, root)
    mod_id = normalize_id(mod_id)

    moved = store.move_up(mod_id) if direction == "up" else store.move_down(mod_id)
    if moved:
        print_success(f"Moved '{mod_id}' {direction} to #{store.read().index_of(mod_id) + 1}")
    elif store.read().index_of(mod_id) < 0:
        print_error(f"'{mod_id}' is not in the load order")
        sys.exit(1)
    else:
        print_warning(f"'{mod_id}' cannot move further {direction}")
    sys.exit(0)
