"""Configuration loading for modorder.

Settings live in a ``[modorder]`` table of ``modorder.toml`` or in the
``[tool.modorder]`` table of ``pyproject.toml``. The file is chosen in this
order: ``--config`` / ``MODORDER_CONFIG``, then ``modorder.toml`` in the
working directory, then a ``pyproject.toml`` that has the table.

Values given on the command line override the file, which overrides the
defaults below.

Example::

    [modorder]
    mods_dir = "Mods"
    order_file = "loadorder.json"
    ignore_dependencies = ["harmony"]
    fail_on_soft_issues = false
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from modorder.exceptions import ConfigError
from modorder.utils.logger import get_logger
from modorder.constants import DEFAULT_FAIL_ON_SOFT_ISSUES, DEFAULT_ORDER_FILENAME

logger = get_logger("config")

CONFIG_FILENAME = "modorder.toml"
PYPROJECT_FILENAME = "pyproject.toml"


@dataclass
class ModOrderConfig:
    """Settings read from the configuration file.

    Attributes:
        mods_dir: Mods folder used when a command gets no ``MODS_DIR``.
        order_file: Name of the saved load order inside the mods folder.
        ignore_dependencies: Dependency id substrings to leave out of
            missing / version mismatch reports, for mods that are installed
            somewhere other than the mods folder.
        fail_on_soft_issues: Let ``check`` fail on broken soft hints too.
        source_path: File the values came from, ``None`` for defaults.
    """

    mods_dir: Optional[Path] = None
    order_file: str = DEFAULT_ORDER_FILENAME
    ignore_dependencies: List[str] = field(default_factory=list)
    fail_on_soft_issues: bool = DEFAULT_FAIL_ON_SOFT_ISSUES

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """User-facing options as plain values, for debug output."""
        return {
            "mods_dir": None if self.mods_dir is None else str(self.mods_dir),
            "order_file": self.order_file,
            "ignore_dependencies": list(self.ignore_dependencies),
            "fail_on_soft_issues": self.fail_on_soft_issues,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Return the configuration file to use, or ``None`` if there is none.

    Raises:
        ConfigError: ``explicit_path`` was given but is not a file.
    """
    if explicit_path is not None:
        candidate = explicit_path.resolve()
        if candidate.is_file():
            logger.debug("Using config given on the command line: %s", candidate)
            return candidate
        raise ConfigError(
            f"Configuration file not found: {explicit_path}",
            config_path=str(explicit_path),
        )

    here = Path.cwd()
    own_file = here / CONFIG_FILENAME
    if own_file.is_file():
        logger.debug("Found %s", own_file)
        return own_file

    pyproject = here / PYPROJECT_FILENAME
    if pyproject.is_file() and _pyproject_has_modorder_section(pyproject):
        logger.debug("Found [tool.modorder] in %s", pyproject)
        return pyproject

    logger.debug("No configuration file in %s", here)
    return None


def _pyproject_has_modorder_section(path: Path) -> bool:
    # A broken pyproject.toml belongs to someone else; treat it as absent
    try:
        document = _read_toml(path)
    except ConfigError:
        return False
    tool = document.get("tool")
    return isinstance(tool, dict) and "modorder" in tool


def load_config(config_path: Optional[Path] = None) -> ModOrderConfig:
    """Find, read and validate the configuration.

    Args:
        config_path: File to read instead of searching the working directory.

    Returns:
        The parsed settings, or defaults when no file is found.

    Raises:
        ConfigError: The file is unreadable, not TOML, or holds bad values.
    """
    path = discover_config_file(config_path)
    if path is None:
        return ModOrderConfig()

    logger.info("Loading configuration from %s", path)
    document = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        table = document.get("tool", {}).get("modorder", {})
    else:
        table = document.get("modorder", {})

    if not table:
        logger.debug("%s has no modorder table, using defaults", path.name)
        return ModOrderConfig(source_path=path)

    config = _parse_section(table, config_path=str(path))
    config.source_path = path
    if config.mods_dir is not None and not config.mods_dir.is_absolute():
        # Relative to the file that names it
        config.mods_dir = path.parent / config.mods_dir

    logger.debug("Configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}", config_path=str(path)
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}", config_path=str(path)
        ) from exc


def _check_mods_dir(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return None
    return f"mods_dir must be a non-empty string, got {value!r}"


def _check_order_file(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip() and Path(value).name == value:
        return None
    return f"order_file must be a plain file name, got {value!r}"


def _check_ignore_dependencies(value: Any) -> Optional[str]:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return None
    return "ignore_dependencies must be a list of strings"


def _check_bool(name: str) -> Callable[[Any], Optional[str]]:
    def check(value: Any) -> Optional[str]:
        if isinstance(value, bool):
            return None
        return f"{name} must be true or false, got {value!r}"

    return check


# option name -> (validator returning an error message, converter)
_OPTIONS: Dict[str, Any] = {
    "mods_dir": (_check_mods_dir, Path),
    "order_file": (_check_order_file, str),
    "ignore_dependencies": (_check_ignore_dependencies, list),
    "fail_on_soft_issues": (_check_bool("fail_on_soft_issues"), bool),
}


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> ModOrderConfig:
    """Turn a modorder table into a :class:`ModOrderConfig`.

    Raises:
        ConfigError: The table has unknown keys or a value of the wrong kind.
    """
    unknown = sorted(set(section) - set(_OPTIONS))
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            config_path=config_path,
        )

    values: Dict[str, Any] = {}
    for name, value in section.items():
        validate, convert = _OPTIONS[name]
        problem = validate(value)
        if problem is not None:
            raise ConfigError(problem, config_path=config_path, option=name)
        values[name] = convert(value)

    return ModOrderConfig(**values)
