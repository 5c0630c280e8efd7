"""
Terminal output for the modorder CLI, rendered with Rich.

Everything a user is meant to read goes through here: one-line status
messages, the load order table, diagnostic lists, JSON reports and the
confirmation prompt. Diagnostics for developers go through
:mod:`modorder.utils.logger` instead.

Color is disabled when ``NO_COLOR`` or ``CI`` is set or stdout is not a
terminal. The console is created lazily and cached; call
:func:`reconfigure_console` after changing those variables.
"""

from __future__ import annotations

import os
import sys
import json
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

MODORDER_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "status.ok": "green",
        "status.soft": "yellow",
        "status.hard": "bold red",
        "status.cycle": "bold magenta",
    }
)

#: Labels shown in the status column of ``modorder check``.
STATUS_LABELS: Dict[str, str] = {
    "ok": "ok",
    "soft": "soft hint violated",
    "hard": "dependency loads later",
    "cycle": "dependency cycle",
}

_YES = frozenset({"y", "yes"})
_NO = frozenset({"n", "no"})


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError, ValueError):
        return False


@lru_cache(maxsize=None)
def _get_console() -> Console:
    color = _color_enabled()
    return Console(theme=MODORDER_THEME, no_color=not color, highlight=color)


def reconfigure_console() -> None:
    """Forget the cached console; the next output creates a fresh one."""
    _get_console.cache_clear()


def get_raw_console() -> Console:
    """The Rich console used for all output, for callers needing more control."""
    return _get_console()


# ---------------------------------------------------------------------------
# Status lines
# ---------------------------------------------------------------------------


def _status_line(prefix: str, message: str, style: str) -> None:
    # markup=False: mod ids and paths may contain square brackets
    _get_console().print(f"{prefix} {message}", style=style, markup=False)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _status_line(prefix, message, "success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _status_line(prefix, message, "error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _status_line(prefix, message, "warning")


def print_diagnostics(messages: Iterable[str], *, title: str = "Problems") -> int:
    """Print ``messages`` as a bulleted list under ``title``.

    Nothing is printed for an empty list.

    Returns:
        Number of messages printed.
    """
    items = list(messages)
    if items:
        console = _get_console()
        console.print(f"\n{title}:", style="warning", markup=False)
        for item in items:
            console.print(f"  - {item}", markup=False)
    return len(items)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def print_table(
    rows: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    caption: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
    row_styler: Optional[Callable[[Dict[str, Any]], Optional[str]]] = None,
) -> None:
    """Render ``rows`` as a table.

    Cell values are converted with ``str`` and may contain Rich markup
    (see :func:`colorize_status`).

    Args:
        rows: One mapping per row.
        headers: Columns to show, in order. Defaults to the first row's keys.
        title: Shown above the table.
        caption: Shown below the table.
        column_styles: Per column ``style``, ``justify`` and ``no_wrap``.
        row_styler: Returns a style for a row, or ``None``.
    """
    if not rows:
        return

    columns = headers if headers is not None else list(rows[0])
    styles = column_styles or {}

    table = Table(title=title, caption=caption, header_style="bold")
    for column in columns:
        options = styles.get(column, {})
        table.add_column(
            column,
            style=options.get("style"),
            justify=options.get("justify", "left"),
            no_wrap=options.get("no_wrap", False),
            overflow="fold",
        )

    for row in rows:
        table.add_row(
            *(str(row.get(column, "")) for column in columns),
            style=row_styler(row) if row_styler else None,
        )

    _get_console().print(table)


def print_json(data: Any) -> None:
    """Print ``data`` as indented, unstyled JSON."""
    _get_console().print_json(json.dumps(data), highlight=False)


def colorize_status(status: str) -> str:
    """Rich markup for a ``check`` status (``ok``, ``soft``, ``hard``, ``cycle``).

    Unknown statuses are returned unchanged.
    """
    key = status.lower()
    if key not in STATUS_LABELS:
        return status
    return f"[status.{key}]{STATUS_LABELS[key]}[/status.{key}]"


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question on the terminal.

    ``y``/``yes`` and ``n``/``no`` are accepted in any case; anything else,
    including an empty answer, selects ``default``. Ctrl+C or end of input
    declines.
    """
    console = _get_console()
    hint = "[Y/n]" if default else "[y/N]"
    console.print(f"{message} {hint}: ", end="", style="info", markup=False)

    try:
        answer = input().strip().lower()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return False

    if answer in _YES:
        return True
    if answer in _NO:
        return False
    return default
