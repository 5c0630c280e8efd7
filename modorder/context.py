"""Per-invocation state handed from the ``modorder`` group to its commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

import click

if TYPE_CHECKING:
    from modorder.config import ModOrderConfig


class ModOrderContext:
    """Options of the top-level group, stored on ``click.Context.obj``.

    Attributes:
        config_path: Value of ``--config`` / ``MODORDER_CONFIG``.
        verbose: Number of ``-v`` flags.
        color: False when ``--no-color`` was given.
        config: Settings loaded by the group callback.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[ModOrderConfig] = None


pass_context = click.make_pass_decorator(ModOrderContext, ensure=True)
