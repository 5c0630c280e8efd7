"""
Fixed values shared across modorder.

Mod folder layout, the saved load order file, version limits, constraint
operators and log formats. Nothing here is meant to be reassigned.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Mod layout on disk
# ---------------------------------------------------------------------------

#: Directory inside a mod folder that holds its metadata.
ABOUT_DIR_NAME: Final[str] = "About"

#: Metadata document inside :data:`ABOUT_DIR_NAME`.
ABOUT_FILE_NAME: Final[str] = "About.json"

#: Optional preview image inside :data:`ABOUT_DIR_NAME`.
PREVIEW_FILE_NAME: Final[str] = "preview.png"

#: Folder names (case-insensitive) under the mods root that never hold a mod.
RESERVED_FOLDER_NAMES: Final[Sequence[str]] = ("disabled",)

# ---------------------------------------------------------------------------
# Load order file
# ---------------------------------------------------------------------------

#: Default name of the persisted load order document.
DEFAULT_ORDER_FILENAME: Final[str] = "loadorder.json"

# ---------------------------------------------------------------------------
# Constraint parsing
# ---------------------------------------------------------------------------

#: Comparison operators accepted in dependency strings.
CONSTRAINT_OPERATORS: Final[Sequence[str]] = (">=", "<=", ">", "<", "==", "!=")

#: Minimum number of components in a constraint version (``major.minor``).
MIN_VERSION_COMPONENTS: Final[int] = 2

#: Maximum number of components (``major.minor.build.revision``).
MAX_VERSION_COMPONENTS: Final[int] = 4

#: Largest value a single version component may hold.
MAX_VERSION_COMPONENT_VALUE: Final[int] = 2**31 - 1

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Fail ``check`` when only soft ordering hints are violated.
DEFAULT_FAIL_ON_SOFT_ISSUES: Final[bool] = False

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading metadata documents.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: asctime format used by the verbose log format.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: One line per record, level first.
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Used from -vv on.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

#: Root logger namespace; every modorder logger lives beneath it.
LOGGER_NAMESPACE: Final[str] = "modorder"
