"""
Helpers shared by the CLI and the core modules.

Console and table output through rich, the package logger, file reads and
atomic writes with backups, and mod version parsing. ``__all__`` lists what
other modules may rely on.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from modorder.utils.filesystem import (
    clean_old_backups,
    create_backup_file,
    list_backups,
    list_subdirectories,
    safe_read_file,
    safe_write_file,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from modorder.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from modorder.utils.console import (
    colorize_status,
    confirm,
    get_raw_console,
    print_diagnostics,
    print_error,
    print_json,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from modorder.utils.version_utils import is_valid_mod_version, parse_mod_version

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "confirm",
    "print_error",
    "print_json",
    "print_table",
    "print_success",
    "print_warning",
    "print_diagnostics",
    "get_raw_console",
    "reconfigure_console",
    "colorize_status",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Filesystem
    "safe_read_file",
    "safe_write_file",
    "create_backup_file",
    "list_backups",
    "clean_old_backups",
    "list_subdirectories",
    # Version utilities
    "parse_mod_version",
    "is_valid_mod_version",
]
