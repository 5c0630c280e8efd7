"""Support ``python -m modorder``, which behaves like the ``modorder`` script."""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    lines = ["modorder CLI could not be loaded.", f"Python version : {sys.version}"]
    try:
        from modorder.__version__ import __version__
    except ImportError:
        __version__ = "<unknown>"
    lines.append(f"modorder version: {__version__}")
    lines.append(f"ImportError: {exc}")
    sys.stderr.write("\n".join(lines) + "\n")


def main() -> int:
    """Run the CLI and return its exit code."""
    try:
        # click and rich are only needed once a command actually runs
        from modorder.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
