"""Go front end.

Parses Go source with the tree-sitter Go grammar and lowers the concrete
syntax tree into the declaration model of :mod:`goswagtags.ast`. Comment
nodes are collected in document order and grouped by position.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Union

import tree_sitter_go
from tree_sitter import Language, Node as TSNode, Parser

from goswagtags.ast import (
    BlockStmt,
    Decl,
    DeclStmt,
    FuncDecl,
    GenDecl,
    ImportSpec,
    LineTable,
    SourceFile,
    Spec,
    TypeSpec,
    ValueSpec,
)
from goswagtags.errors import GoParseError

from .comment_utils import CommentIndex, group_comments

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

_GEN_TOKENS = {
    "import_declaration": "import",
    "const_declaration": "const",
    "var_declaration": "var",
    "type_declaration": "type",
}
_FUNC_NODES = {"function_declaration", "method_declaration"}
_LOCAL_DECL_NODES = {"const_declaration", "var_declaration", "type_declaration"}
_SPEC_NODES = {"import_spec", "const_spec", "var_spec", "type_spec", "type_alias"}

# Tree-sitter parser (initialized lazily)
_go_parser: Optional[Parser] = None


def get_go_parser() -> Parser:
    """Get or create the Go parser."""
    global _go_parser
    if _go_parser is None:
        _go_parser = Parser(GO_LANGUAGE)
    return _go_parser


def _walk(node: TSNode) -> Iterator[TSNode]:
    # Iterative traversal to avoid the recursion limit on deep expressions
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _spec_nodes(node: TSNode) -> Iterator[TSNode]:
    for child in node.named_children:
        if child.type in _SPEC_NODES:
            yield child
        elif child.type.endswith("_list"):
            yield from _spec_nodes(child)


class GoParser:
    """Parser for a single Go source file."""

    def __init__(self, source: Union[str, bytes], path: str = "<input>") -> None:
        self.src = source.encode("utf-8") if isinstance(source, str) else source
        self.path = path
        self.lines = LineTable(self.src, path)
        self._comments: Optional[CommentIndex] = None

    def error(self, message: str, offset: int) -> GoParseError:
        location = self.lines.location(offset)
        return GoParseError(message, path=self.path, line=location.line, column=location.column)

    def parse(self) -> SourceFile:
        try:
            self.src.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self.error("illegal UTF-8 encoding", exc.start) from exc

        tree = get_go_parser().parse(self.src)
        root = tree.root_node
        if root.has_error:
            raise self._syntax_error(root)

        spans = sorted((node.start_byte, node.end_byte) for node in _walk(root) if node.type == "comment")
        groups = group_comments(spans, self.src, self.lines)
        self._comments = CommentIndex(groups, self.src, self.lines)

        source_file = SourceFile(
            path=self.path,
            src=self.src,
            package="",
            comments=list(groups),
            parsed_comments=tuple(groups),
            lines=self.lines,
        )
        for child in root.named_children:
            if child.type == "comment":
                continue
            if not source_file.package:
                if child.type != "package_clause":
                    raise self.error(f"expected 'package', found {self._describe(child)}", child.start_byte)
                name = next((c for c in child.named_children if c.type == "package_identifier"), child)
                source_file.package = self._text(name)
                continue
            source_file.decls.append(self._top_level_decl(child))

        if not source_file.package:
            raise self.error("expected 'package', found 'EOF'", len(self.src))
        logger.debug(
            "parsed %s: %d declarations, %d comment groups",
            self.path,
            len(source_file.decls),
            len(groups),
        )
        return source_file

    def _top_level_decl(self, node: TSNode) -> Decl:
        if node.type in _FUNC_NODES:
            return self._func_decl(node)
        if node.type in _GEN_TOKENS:
            return self._gen_decl(node, nested=False)
        raise self.error(f"expected declaration, found {self._describe(node)}", node.start_byte)

    def _func_decl(self, node: TSNode) -> FuncDecl:
        name_node = node.child_by_field_name("name")
        receiver = node.child_by_field_name("receiver")
        body_node = node.child_by_field_name("body")
        body = None
        if body_node is not None:
            body = BlockStmt(body_node.start_byte, body_node.end_byte, self._decl_stmts(body_node))
        return FuncDecl(
            pos=node.start_byte,
            end=node.end_byte,
            name=self._text(name_node),
            recv=self._text(receiver) if receiver is not None else None,
            body=body,
            doc=self._comments.lead_comment(node.start_byte),
        )

    def _gen_decl(self, node: TSNode, nested: bool) -> GenDecl:
        return GenDecl(
            pos=node.start_byte,
            end=node.end_byte,
            tok=_GEN_TOKENS[node.type],
            specs=[self._spec(spec, nested) for spec in _spec_nodes(node)],
            doc=self._comments.lead_comment(node.start_byte),
            comment=self._comments.line_comment(node.end_byte),
        )

    def _spec(self, node: TSNode, nested: bool) -> Spec:
        if node.type in ("type_spec", "type_alias"):
            name_node = node.child_by_field_name("name")
            type_node = node.child_by_field_name("type")
            return TypeSpec(
                pos=node.start_byte,
                end=node.end_byte,
                name=self._text(name_node),
                name_end=name_node.end_byte,
                is_struct=type_node is not None and type_node.type == "struct_type",
                is_alias=node.type == "type_alias",
            )
        if node.type == "import_spec":
            return ImportSpec(node.start_byte, node.end_byte, self._text(node.child_by_field_name("path")))
        return ValueSpec(
            pos=node.start_byte,
            end=node.end_byte,
            names=[self._text(name) for name in node.children_by_field_name("name")],
            decls=[] if nested else self._decl_stmts(node),
        )

    def _decl_stmts(self, node: TSNode) -> List[DeclStmt]:
        """Collect every declaration statement below ``node`` in document order."""
        stmts: List[DeclStmt] = []
        descendants = _walk(node)
        next(descendants)
        for child in descendants:
            if child.type in _LOCAL_DECL_NODES:
                stmts.append(DeclStmt(child.start_byte, child.end_byte, self._gen_decl(child, nested=True)))
        return stmts

    def _syntax_error(self, root: TSNode) -> GoParseError:
        for node in _walk(root):
            if node.is_missing:
                return self.error(f"expected '{node.type}'", node.start_byte)
            if node.is_error:
                return self.error(f"syntax error: unexpected {self._describe(node)}", node.start_byte)
        return self.error("syntax error", 0)

    def _describe(self, node: TSNode) -> str:
        words = self._text(node).split()
        if not words:
            return "'EOF'"
        return f"'{words[0][:24]}'"

    def _text(self, node: TSNode) -> str:
        return self.src[node.start_byte:node.end_byte].decode("utf-8")


def parse_source(source: Union[str, bytes], path: str = "<input>") -> SourceFile:
    """Parse one Go file, raising :class:`GoParseError` on invalid syntax."""
    return GoParser(source, path).parse()


__all__ = ["GO_LANGUAGE", "GoParser", "get_go_parser", "parse_source"]
