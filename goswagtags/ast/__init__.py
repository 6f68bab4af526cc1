"""Syntax tree model for Go source files."""

from .comments import Comment, CommentGroup, sort_key
from .nodes import (
    BlockStmt,
    Decl,
    DeclStmt,
    FuncDecl,
    GenDecl,
    ImportSpec,
    Node,
    SourceFile,
    Spec,
    TypeSpec,
    ValueSpec,
    inspect,
    iter_child_nodes,
    walk,
)
from .source_location import LineTable, SourceLocation

__all__ = [
    "Comment",
    "CommentGroup",
    "sort_key",
    "BlockStmt",
    "Decl",
    "DeclStmt",
    "FuncDecl",
    "GenDecl",
    "ImportSpec",
    "Node",
    "SourceFile",
    "Spec",
    "TypeSpec",
    "ValueSpec",
    "inspect",
    "iter_child_nodes",
    "walk",
    "LineTable",
    "SourceLocation",
]
