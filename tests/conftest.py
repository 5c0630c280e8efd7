"""Shared fixtures for the modorder test suite."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Generator, Optional

import pytest

import modorder.utils.logger as logger_module
from modorder.utils.console import reconfigure_console


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the modorder logger so caplog sees records in every test.

    The CLI installs its own handler and turns propagation off; without
    this, the first CLI test would hide log records from later tests.
    """
    root_logger = logging.getLogger("modorder")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._configured = False
    reconfigure_console()


@pytest.fixture
def make_mod(tmp_path: Path) -> Callable[..., Path]:
    """Create ``<tmp>/Mods/<folder>/About/About.json`` and return the folder.

    Pass ``about=None`` to create a folder without metadata, or ``raw`` to
    write arbitrary text instead of JSON.
    """

    def _make(
        folder: str,
        about: Optional[Dict[str, Any]] = None,
        *,
        raw: Optional[str] = None,
    ) -> Path:
        mod_dir = tmp_path / "Mods" / folder
        about_dir = mod_dir / "About"
        about_dir.mkdir(parents=True, exist_ok=True)
        if raw is not None:
            (about_dir / "About.json").write_text(raw, encoding="utf-8")
        elif about is not None:
            (about_dir / "About.json").write_text(json.dumps(about), encoding="utf-8")
        return mod_dir

    return _make


@pytest.fixture
def mods_root(tmp_path: Path) -> Path:
    """Empty mods folder."""
    root = tmp_path / "Mods"
    root.mkdir(exist_ok=True)
    return root
