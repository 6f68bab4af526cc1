"""Core rendering infrastructure for annotated Go files."""

from __future__ import annotations

import re
import shlex
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from goswagtags.ast import (
    CommentGroup,
    DeclStmt,
    FuncDecl,
    GenDecl,
    LineTable,
    Node,
    SourceFile,
    sort_key,
    walk,
)
from goswagtags.errors import FormatError

_TRAILING_WHITESPACE = re.compile(r"[\t ]+(?=\r?$)", re.MULTILINE)
_INDENT = b" \t"


@dataclass
class FormattingOptions:
    """Configuration options for rendering."""

    # Line settings
    insert_final_newline: bool = True
    trim_trailing_whitespace: bool = True

    # Runs of blank lines longer than this are collapsed
    max_empty_lines: Optional[int] = 1

    # Pipe the result through this gofmt command line; None keeps code bytes as they are
    gofmt_command: Optional[str] = None


def _line_ending(src: bytes, offset: int) -> bytes:
    """Return the line terminator used by the line holding ``offset``."""
    newline = src.find(b"\n", offset)
    if newline == -1:
        newline = src.rfind(b"\n")
    if newline > 0 and src[newline - 1:newline] == b"\r":
        return b"\r\n"
    return b"\n"


@dataclass(order=True)
class _Edit:
    start: int
    end: int
    order: int
    text: bytes = b""


class GoFormatter:
    """
    Renders a parsed, annotated Go file back to source text.

    Code is copied byte for byte. Comment groups are reconciled with the
    source by offset: original groups still listed in the file's comments
    stay where they are, original groups no longer listed are deleted, and
    synthesized groups are inserted. A synthesized group that is the doc of a
    declaration goes on its own line directly above that declaration.
    """

    def __init__(self, options: Optional[FormattingOptions] = None):
        self.options = options or FormattingOptions()

    def render(self, source_file: SourceFile) -> str:
        """Format ``source_file`` and apply the text cleanup."""
        text = self.cleanup(self.format_file(source_file))
        if self.options.gofmt_command:
            text = self.cleanup(self._gofmt(source_file, text))
        return text

    def format_file(self, source_file: SourceFile) -> str:
        src = source_file.src
        out = bytearray()
        cursor = 0
        for edit in sorted(self._edits(source_file)):
            if edit.start < cursor:
                raise self._error(source_file, "comment edits overlap", edit.start)
            out += src[cursor:edit.start]
            out += edit.text
            cursor = edit.end
        out += src[cursor:]
        if self.options.insert_final_newline and out and not out.endswith(b"\n"):
            out += _line_ending(src, len(src))
        try:
            return out.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self._error(source_file, f"rendered text is not UTF-8: {exc.reason}", exc.start) from exc

    def cleanup(self, text: str) -> str:
        """Apply final text cleanup rules."""
        if self.options.trim_trailing_whitespace:
            text = _TRAILING_WHITESPACE.sub("", text)
        limit = self.options.max_empty_lines
        if limit is not None:
            text = re.sub(r"((?:\r?\n){%d})(?:\r?\n)+" % (limit + 1), r"\1", text)
        return text

    def _gofmt(self, source_file: SourceFile, text: str) -> str:
        """Reformat ``text`` with the configured gofmt command."""
        command = shlex.split(self.options.gofmt_command)
        try:
            proc = subprocess.run(command, input=text.encode("utf-8"), capture_output=True)
        except OSError as exc:
            raise FormatError(f"{command[0]}: {exc.strerror or exc}", path=source_file.path) from exc
        if proc.returncode != 0:
            detail = proc.stderr.decode("utf-8", "replace").strip()
            raise FormatError(f"{command[0]} failed: {detail}", path=source_file.path)
        return proc.stdout.decode("utf-8")

    def _edits(self, source_file: SourceFile) -> List[_Edit]:
        self._check_comments(source_file)
        src = source_file.src
        lines = source_file.lines
        kept: Set[CommentGroup] = set(source_file.comments)
        original: Set[CommentGroup] = set(source_file.parsed_comments)

        docs: Dict[CommentGroup, Node] = {}
        local: Set[Node] = set()
        for node in walk(source_file):
            if isinstance(node, (GenDecl, FuncDecl)) and node.doc is not None:
                docs[node.doc] = node
            elif isinstance(node, DeclStmt):
                local.add(node.decl)

        edits: List[_Edit] = []
        for order, group in enumerate(source_file.parsed_comments):
            if group not in kept:
                edits.append(self._deletion(src, lines, group, order))
        for order, group in enumerate(source_file.comments, start=len(edits)):
            if group in original:
                continue
            decl = docs.get(group)
            if decl is not None:
                edits.append(self._doc_insertion(src, lines, decl, group, decl in local, order))
            else:
                edits.append(self._free_insertion(src, group, order))
        return edits

    def _check_comments(self, source_file: SourceFile) -> None:
        previous: Optional[CommentGroup] = None
        for group in source_file.comments:
            if not group.comments:
                raise self._error(source_file, "empty comment group", 0)
            if previous is not None:
                if sort_key(group) < sort_key(previous):
                    raise self._error(source_file, "comments are not sorted by position", group.pos)
                if not group.synthetic and not previous.synthetic and group.pos < previous.end:
                    raise self._error(source_file, "comment groups overlap", group.pos)
            previous = group

    @staticmethod
    def _deletion(src: bytes, lines: LineTable, group: CommentGroup, order: int) -> _Edit:
        start, end = group.pos, group.end
        line_start = lines.line_start(start)
        newline = src.find(b"\n", end)
        line_end = len(src) if newline == -1 else newline + 1
        if not src[line_start:start].strip(_INDENT) and not src[end:line_end].strip(b" \t\r\n"):
            return _Edit(line_start, line_end, order)
        if not src[end:line_end].strip(b" \t\r\n"):
            while start > line_start and src[start - 1:start] in (b" ", b"\t"):
                start -= 1
        return _Edit(start, end, order)

    @staticmethod
    def _doc_insertion(
        src: bytes,
        lines: LineTable,
        decl: Node,
        group: CommentGroup,
        is_local: bool,
        order: int,
    ) -> _Edit:
        line_start = lines.line_start(decl.pos)
        prefix = src[line_start:decl.pos]
        eol = _line_ending(src, decl.pos)
        comments = [comment.text.encode("utf-8") for comment in group.comments]
        if not prefix.strip(_INDENT):
            text = b"".join(prefix + comment + eol for comment in comments)
            return _Edit(line_start, line_start, order, text)

        # The declaration shares its line with other code: break the line first
        indent = prefix[:len(prefix) - len(prefix.lstrip(_INDENT))]
        if is_local:
            indent += b"\t"
        text = eol + b"".join(indent + comment + eol for comment in comments) + indent
        return _Edit(decl.pos, decl.pos, order, text)

    @staticmethod
    def _free_insertion(src: bytes, group: CommentGroup, order: int) -> _Edit:
        offset = min(group.pos, len(src))
        newline = src.find(b"\n", offset)
        eol = _line_ending(src, offset)
        text = b"".join(comment.text.encode("utf-8") + eol for comment in group.comments)
        if newline == -1:
            if src and not src.endswith(b"\n"):
                text = eol + text
            return _Edit(len(src), len(src), order, text)
        return _Edit(newline + 1, newline + 1, order, text)

    @staticmethod
    def _error(source_file: SourceFile, message: str, offset: int) -> FormatError:
        location = source_file.lines.location(offset)
        return FormatError(message, path=source_file.path, line=location.line, column=location.column)


__all__ = ["FormattingOptions", "GoFormatter"]
