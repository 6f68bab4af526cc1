"""Source location information for byte offsets."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from typing import List


@dataclass
class SourceLocation:
    """
    Represents a location in source code.

    Lines and columns are 1-based; columns count bytes, as Go's token
    positions do.
    """
    file: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Return human-readable location string."""
        return f"{self.file}:{self.line}:{self.column}"


class LineTable:
    """Maps byte offsets of one file to lines and columns."""

    def __init__(self, src: bytes, path: str = "") -> None:
        self.path = path
        self.size = len(src)
        self._starts: List[int] = [0] + [m.end() for m in re.finditer(b"\n", src)]

    def line(self, offset: int) -> int:
        return bisect.bisect_right(self._starts, offset)

    def line_start(self, offset: int) -> int:
        return self._starts[self.line(offset) - 1]

    def location(self, offset: int) -> SourceLocation:
        line = self.line(offset)
        return SourceLocation(self.path, line, offset - self._starts[line - 1] + 1)


__all__ = ["SourceLocation", "LineTable"]
