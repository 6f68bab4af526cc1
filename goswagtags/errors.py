"""Unified error model for goswagtags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        return "unknown location"


class GoSwagError(Exception):
    """Base class for all errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        """Render the error the way Go's scanner prints diagnostics."""
        location_desc = self.location.describe()
        if location_desc == "unknown location":
            return self.message
        return f"{location_desc}: {self.message}"

    def __str__(self) -> str:
        return self.format()


class GoParseError(GoSwagError):
    """Raised when a source file is not valid Go."""

    code = "PARSE_ERROR"


class StatError(GoSwagError):
    """Raised when a command line path does not exist or cannot be inspected."""

    code = "STAT_ERROR"


class WalkError(GoSwagError):
    """Raised when a directory tree cannot be traversed."""

    code = "WALK_ERROR"


class WriteError(GoSwagError):
    """Raised when a rewritten file cannot be stored."""

    code = "WRITE_ERROR"


class FormatError(GoSwagError):
    """Raised when a mutated tree cannot be rendered back to source."""

    code = "FORMAT_ERROR"


__all__ = [
    "ErrorLocation",
    "GoSwagError",
    "GoParseError",
    "StatError",
    "WalkError",
    "WriteError",
    "FormatError",
]
