"""Comment records and comment groups keyed by byte offset."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(eq=False)
class Comment:
    """A single ``//`` or ``/* */`` comment.

    ``slash`` is the byte offset of the comment marker in the source file and
    ``text`` is the literal comment text including its markers.
    """

    slash: int
    text: str

    @property
    def end(self) -> int:
        return self.slash + len(self.text.encode("utf-8"))


@dataclass(eq=False)
class CommentGroup:
    """A run of comments with no code and no blank line between them.

    Groups compare by identity so they can key the comment registry.
    """

    comments: List[Comment] = field(default_factory=list)
    trailing: bool = False
    synthetic: bool = False

    @property
    def pos(self) -> int:
        return self.comments[0].slash

    @property
    def end(self) -> int:
        return self.comments[-1].end

    def has_comment(self, literal: str) -> bool:
        """Check whether any comment equals ``literal`` once trimmed."""
        return any(comment.text.strip() == literal for comment in self.comments)


def sort_key(group: CommentGroup) -> tuple:
    return (group.pos, group.end)


__all__ = ["Comment", "CommentGroup", "sort_key"]
