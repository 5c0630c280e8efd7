"""Version of the modorder package.

Kept in its own module so that ``modorder.__main__`` can report it even
when the CLI dependencies fail to import.
"""

__version__ = "0.1.0.dev0"
