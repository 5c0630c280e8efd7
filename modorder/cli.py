"""
Command-line interface for modorder.

The ``modorder`` group handles the options shared by every command
(configuration file, verbosity, color) and stores the result on a
:class:`~modorder.context.ModOrderContext`. The commands themselves live
in :mod:`modorder.commands`.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from modorder.config import load_config
from modorder.__version__ import __version__
from modorder.context import ModOrderContext
from modorder.exceptions import ConfigError, ModOrderError
from modorder.utils.logger import get_logger, setup_logging
from modorder.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")

#: Log level for each ``-v`` count; anything above the last entry is DEBUG.
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="MODORDER_CONFIG",
    help="Configuration file (default: modorder.toml or pyproject.toml).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Show progress (-v) or debug details (-vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="MODORDER_COLOR",
    help="Colorize output.",
)
@click.version_option(
    version=__version__,
    prog_name="modorder",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """Keep a mod load order consistent with the mods' dependencies.

    \b
    Commands:
      check             Report problems in the saved load order
      sort              Compute a load order and optionally save it
      enable / disable  Add a mod to or remove it from the load order
      move              Move a mod one step up or down

    \b
    Examples:
      modorder check Mods
      modorder sort Mods --write
      modorder -v move com.example.addon --up
    """
    # NO_COLOR is honoured by rich and by our log formatter alike
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    level = _VERBOSITY_LEVELS[min(verbose, len(_VERBOSITY_LEVELS) - 1)]
    setup_logging(level=level, verbose=verbose >= 2)

    try:
        settings = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    state = ModOrderContext()
    state.config_path = config or settings.source_path
    state.verbose = verbose
    state.color = color
    state.config = settings
    ctx.obj = state

    logger.debug(
        "modorder %s, config=%s, verbosity=%d, color=%s",
        __version__,
        state.config_path,
        verbose,
        color,
    )


from modorder.commands.check import check  # noqa: E402
from modorder.commands.sort import sort  # noqa: E402
from modorder.commands.edit import disable, enable, move  # noqa: E402

for _command in (check, sort, enable, disable, move):
    cli.add_command(_command)


def main() -> int:
    """Run the CLI and translate the outcome into an exit code.

    Returns:
        0 on success, 1 when problems were found or an error occurred,
        2 for usage errors and 130 when interrupted.
    """
    try:
        result = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.Abort, KeyboardInterrupt):
        print_warning("Interrupted")
        return 130
    except SystemExit as exc:
        # Commands report their verdict through sys.exit()
        return exc.code if isinstance(exc.code, int) else 1
    except ModOrderError as exc:
        print_error(str(exc))
        logger.debug("Details: %r", exc, exc_info=True)
        return 1
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception")
        return 1

    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
