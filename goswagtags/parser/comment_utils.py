"""Utilities for grouping Go comments and attaching them to declarations."""

from __future__ import annotations

import bisect
from typing import List, Optional, Sequence, Tuple

from goswagtags.ast.comments import Comment, CommentGroup
from goswagtags.ast.source_location import LineTable

_BLANK = b" \t\r\n"


def _starts_line(src: bytes, offset: int, lines: LineTable) -> bool:
    """Check that only whitespace precedes ``offset`` on its line."""
    return not src[lines.line_start(offset):offset].strip(_BLANK)


def group_comments(
    spans: Sequence[Tuple[int, int]],
    src: bytes,
    lines: LineTable,
) -> List[CommentGroup]:
    """Group comment spans the way go/parser does.

    A comment that follows code on its line opens a trailing group which only
    takes further comments on that same line. Any other group takes comments
    separated by at most one line break and no code.
    """
    groups: List[CommentGroup] = []
    index = 0
    while index < len(spans):
        start, end = spans[index]
        trailing = not _starts_line(src, start, lines)
        group = CommentGroup([Comment(start, src[start:end].decode("utf-8"))], trailing=trailing)
        last_end = end
        index += 1
        allowed_breaks = 0 if trailing else 1
        while index < len(spans):
            next_start, next_end = spans[index]
            gap = src[last_end:next_start]
            if gap.strip(_BLANK) or gap.count(b"\n") > allowed_breaks:
                break
            group.comments.append(Comment(next_start, src[next_start:next_end].decode("utf-8")))
            last_end = next_end
            index += 1
        groups.append(group)
    return groups


class CommentIndex:
    """Position lookups over the parsed, offset-sorted comment groups."""

    def __init__(self, groups: Sequence[CommentGroup], src: bytes, lines: LineTable) -> None:
        self.groups = list(groups)
        self.src = src
        self.lines = lines
        self._ends = [group.end for group in self.groups]
        self._starts = [group.pos for group in self.groups]

    def lead_comment(self, pos: int) -> Optional[CommentGroup]:
        """Return the doc group of a node starting at ``pos``.

        That is the own-line group ending on the line directly above the node
        with nothing but whitespace in between.
        """
        index = bisect.bisect_right(self._ends, pos) - 1
        if index < 0:
            return None
        group = self.groups[index]
        if group.trailing or self.src[group.end:pos].strip(_BLANK):
            return None
        if self.lines.line(group.end) + 1 != self.lines.line(pos):
            return None
        return group

    def line_comment(self, end: int) -> Optional[CommentGroup]:
        """Return the trailing group on the same line right after ``end``."""
        index = bisect.bisect_left(self._starts, end)
        if index >= len(self.groups):
            return None
        group = self.groups[index]
        gap = self.src[end:group.pos]
        if not group.trailing or gap.strip(_BLANK) or b"\n" in gap:
            return None
        return group


__all__ = ["group_comments", "CommentIndex"]
