"""Sort command implementation for modorder.

Computes a dependency-respecting load order. The saved order is used as a
tie-break hint, so mods the graph does not constrain keep their relative
positions and re-running the command is a no-op.

Typical usage::

    # Show the recommended order for the enabled mods
    $ modorder sort Mods

    # Include every installed mod and save the result
    $ modorder sort Mods --all --write --yes
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from modorder.context import pass_context, ModOrderContext
from modorder.core.resolver import LoadOrderResolver
from modorder.models.package import normalize_id
from modorder.models.results import ResolutionResult
from modorder.commands.common import get_config, load_mods, open_store, resolve_mods_dir
from modorder.utils import (
    confirm,
    get_logger,
    print_diagnostics,
    print_json,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.sort")


@click.command()
@click.argument(
    "mods_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=False,
)
@click.option(
    "--all",
    "include_all",
    is_flag=True,
    help="Sort every installed mod, not just the enabled ones.",
)
@click.option(
    "--write",
    is_flag=True,
    help="Save the computed order to the load order file.",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Do not ask for confirmation before writing.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def sort(
    ctx: ModOrderContext,
    mods_dir: Optional[Path],
    include_all: bool,
    write: bool,
    yes: bool,
    format: str,
) -> None:
    """Compute a load order that satisfies mod dependencies.

    Mods that depend on others are placed after them; loadBefore and
    loadAfter hints are honoured where they do not conflict with hard
    dependencies. Mods caught in a dependency cycle are appended in priority
    order (saved position first, then id) and reported.
    """
    root = resolve_mods_dir(ctx, mods_dir)
    store = open_store(ctx, root)
    config = get_config(ctx)

    packages = [mod.descriptor for mod in load_mods(root)]
    saved_order = store.read_order()
    if not include_all:
        enabled, _ = store.split_enabled(packages)
        packages = enabled

    if not packages:
        print_warning("No mods to sort. Use --all to include every installed mod.")
        sys.exit(0)

    result = LoadOrderResolver().resolve(packages, prior_order=saved_order)
    ignored = [
        normalize_id(token)
        for token in config.ignore_dependencies
        if normalize_id(token)
    ]
    problems = [
        d.message
        for d in result.diagnostics
        if not any(token in d.target_id for token in ignored)
    ]

    if format.lower() == "json":
        payload = result.to_json()
        payload["changed"] = result.order != saved_order
        print_json(payload)
    else:
        _render(result, saved_order, problems)

    if not write:
        sys.exit(0)

    if result.order == saved_order:
        print_success("Load order already up to date")
        sys.exit(0)

    if not yes and not confirm(f"Write new load order to {store.path}?", default=True):
        print_warning("Load order not changed")
        sys.exit(0)

    backup = store.save_order(result.order, backup=True)
    if backup is not None:
        logger.info("Previous load order backed up to %s", backup)
    print_success(f"Saved load order ({len(result.order)} mods) to {store.path}")
    sys.exit(0)


def _render(result: ResolutionResult, saved_order: List[str], problems: List[str]) -> None:
    previous = {mod_id: i + 1 for i, mod_id in enumerate(saved_order)}
    rows: List[Dict[str, Any]] = []
    for position, package in enumerate(result.packages, start=1):
        rows.append(
            {
                "#": position,
                "Mod": package.id,
                "Name": package.display_name,
                "Version": package.version or "-",
                "Was #": previous.get(package.id, "new"),
            }
        )
    print_table(
        rows,
        title="Recommended load order",
        column_styles={"#": {"justify": "right"}, "Was #": {"justify": "right"}},
        row_styler=lambda row: "bold magenta" if row["Mod"] in result.cycled_ids else None,
    )

    print_diagnostics(problems, title="Dependency problems")
    if result.has_cycles:
        print_warning(
            "Dependency cycle between: " + ", ".join(sorted(result.cycled_ids))
        )
