"""
Exceptions raised by modorder's file and CLI layers.

The resolver never raises for bad mod metadata: missing dependencies,
version mismatches and cycles come back as values on its results. The
exceptions here cover what the resolver cannot recover from on the
caller's behalf, namely unreadable files and invalid configuration.

Every exception carries a ``details`` mapping that is appended to the
message when printed, e.g.::

    Invalid JSON: Expecting value (file=Mods/loadorder.json, line=3)
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class ModOrderError(Exception):
    """Root of the modorder exception hierarchy.

    Args:
        message: Human-readable description.
        details: Extra context shown after the message. ``None`` values
            are dropped.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.details: Dict[str, Any] = {
            key: value for key, value in (details or {}).items() if value is not None
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, details={self.details!r})"


class ParseError(ModOrderError):
    """A JSON document (``About.json``, ``loadorder.json``) could not be decoded.

    Args:
        message: What was wrong with the content.
        file_path: Document being decoded.
        line_number: Line the decoder stopped at, if known.
    """

    __slots__ = ("file_path", "line_number")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        super().__init__(message, {"file": file_path, "line": line_number})
        self.file_path = file_path
        self.line_number = line_number


class ConfigError(ModOrderError):
    """The configuration file is missing, unreadable or invalid.

    Args:
        message: What is wrong.
        config_path: Configuration file involved.
        option: Offending option name, if a single one is at fault.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(message, {"path": config_path, "option": option})
        self.config_path = config_path
        self.option = option


class FileOperationError(ModOrderError):
    """Reading, writing, backing up or listing a file failed.

    Args:
        message: What failed.
        file_path: File or folder involved.
        operation: ``read``, ``write``, ``backup``, ``restore``, ``list``
            or ``discover``.
        original_error: Underlying ``OSError`` or decode error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            {
                "path": file_path,
                "operation": operation,
                "cause": str(original_error) if original_error else None,
            },
        )
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
