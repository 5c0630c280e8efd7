"""Check command implementation for modorder.

Evaluates the saved load order of a mods folder against the dependencies
the enabled mods declare, without changing anything.

The command orchestrates three components:

1. **discover_packages**: reads every mod's ``About/About.json``.
2. **LoadOrderStore**: reads ``loadorder.json`` and decides which mods are
   enabled.
3. **LoadOrderResolver**: evaluates the saved order and computes the
   recommended one.

Typical usage::

    # Table of every enabled mod with its status
    $ modorder check Mods

    # Machine-readable JSON output
    $ modorder check Mods --format json > report.json
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from modorder.context import pass_context, ModOrderContext
from modorder.core.discovery import DiscoveredPackage
from modorder.core.load_order_store import LoadOrderValidation
from modorder.commands.common import get_config, load_mods, open_store, resolve_mods_dir
from modorder.utils import (
    colorize_status,
    get_logger,
    print_diagnostics,
    print_json,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.check")


@click.command()
@click.argument(
    "mods_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=False,
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Also fail when only soft ordering hints are violated.",
)
@pass_context
def check(
    ctx: ModOrderContext,
    mods_dir: Optional[Path],
    format: str,
    strict: Optional[bool],
) -> None:
    """Check the saved load order for dependency problems.

    Reports mods that load before one of their dependencies, mods whose
    dependencies are missing or have the wrong version, dependency cycles,
    and (as warnings) violated loadBefore/loadAfter hints.

    Exits:
        0 if the order is fine, 1 if problems were found.
    """
    config = get_config(ctx)
    root = resolve_mods_dir(ctx, mods_dir)
    store = open_store(ctx, root)

    discovered = load_mods(root)
    by_id = {mod.id: mod for mod in discovered}
    saved_order = store.read_order()
    enabled = [by_id[mod_id].descriptor for mod_id in saved_order if mod_id in by_id]

    validation = store.validate(enabled, ignore=config.ignore_dependencies)
    unknown = [mod_id for mod_id in saved_order if mod_id not in by_id]

    if format.lower() == "json":
        print_json(_to_json(validation, unknown))
    else:
        _render(validation, by_id, unknown)

    fail_on_soft = config.fail_on_soft_issues if strict is None else strict
    failed = validation.has_blocking_issues or (
        fail_on_soft and bool(validation.soft_issue_ids)
    )
    logger.debug("check finished, failed=%s", failed)
    sys.exit(1 if failed else 0)


def _render(
    validation: LoadOrderValidation,
    by_id: Dict[str, DiscoveredPackage],
    unknown: List[str],
) -> None:
    evaluation = validation.evaluation
    enabled_order = evaluation.enabled_order if evaluation else []
    if not enabled_order:
        print_warning("No enabled mods in the load order.")
    else:
        suggested = {mod_id: i + 1 for i, mod_id in enumerate(evaluation.sorted_ids)}
        rows: List[Dict[str, Any]] = []
        for position, mod_id in enumerate(enabled_order, start=1):
            mod = by_id[mod_id]
            status = validation.status_of(mod_id)
            rows.append(
                {
                    "#": position,
                    "Mod": mod_id,
                    "Version": mod.descriptor.version or "-",
                    "Status": colorize_status(status),
                    "Suggested #": suggested.get(mod_id, "-"),
                }
            )
        print_table(
            rows,
            title="Load order",
            column_styles={"#": {"justify": "right"}, "Suggested #": {"justify": "right"}},
        )

    print_diagnostics(validation.missing_dependencies, title="Dependency problems")
    if validation.cycled_ids:
        print_warning(
            "Dependency cycle between: " + ", ".join(sorted(validation.cycled_ids))
        )
    for mod_id in unknown:
        print_warning(f"'{mod_id}' is in the load order but not installed")

    if not validation.has_issues:
        print_success("Load order is consistent with all dependencies")


def _to_json(validation: LoadOrderValidation, unknown: List[str]) -> Dict[str, Any]:
    evaluation = validation.evaluation
    return {
        "enabled_order": list(evaluation.enabled_order) if evaluation else [],
        "suggested_order": list(evaluation.sorted_ids) if evaluation else [],
        "hard_issues": sorted(validation.hard_issue_ids),
        "soft_issues": sorted(validation.soft_issue_ids),
        "cycled": sorted(validation.cycled_ids),
        "problems": list(validation.missing_dependencies),
        "not_installed": unknown,
    }
