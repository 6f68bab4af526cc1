"""Declaration nodes of a parsed Go file.

Only the node kinds the annotation pass inspects are modelled. Every node
carries the byte offsets ``pos`` (inclusive) and ``end`` (exclusive) of the
source text it was parsed from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple, Union

from .comments import CommentGroup
from .source_location import LineTable


@dataclass(eq=False)
class TypeSpec:
    pos: int
    end: int
    name: str
    name_end: int
    is_struct: bool = False
    is_alias: bool = False


@dataclass(eq=False)
class ValueSpec:
    """A ``var`` or ``const`` spec.

    ``decls`` holds the declaration statements found inside function literals
    of the initializer.
    """

    pos: int
    end: int
    names: List[str] = field(default_factory=list)
    decls: List["DeclStmt"] = field(default_factory=list)


@dataclass(eq=False)
class ImportSpec:
    pos: int
    end: int
    path: str


Spec = Union[TypeSpec, ValueSpec, ImportSpec]


@dataclass(eq=False)
class GenDecl:
    """An ``import``, ``const``, ``var`` or ``type`` declaration."""

    pos: int
    end: int
    tok: str
    specs: List[Spec] = field(default_factory=list)
    doc: Optional[CommentGroup] = None
    comment: Optional[CommentGroup] = None


@dataclass(eq=False)
class DeclStmt:
    """A declaration used as a statement inside a function body."""

    pos: int
    end: int
    decl: GenDecl


@dataclass(eq=False)
class BlockStmt:
    """A function body.

    ``stmts`` is the flattened, document-ordered list of declaration
    statements lexically inside the body, nested blocks and function literals
    included.
    """

    pos: int
    end: int
    stmts: List[DeclStmt] = field(default_factory=list)


@dataclass(eq=False)
class FuncDecl:
    pos: int
    end: int
    name: str
    recv: Optional[str] = None
    body: Optional[BlockStmt] = None
    doc: Optional[CommentGroup] = None


Decl = Union[GenDecl, FuncDecl]


@dataclass(eq=False)
class SourceFile:
    path: str
    src: bytes
    package: str
    decls: List[Decl] = field(default_factory=list)
    comments: List[CommentGroup] = field(default_factory=list)
    parsed_comments: Tuple[CommentGroup, ...] = ()
    lines: Optional[LineTable] = None

    @property
    def pos(self) -> int:
        return 0

    @property
    def end(self) -> int:
        return len(self.src)


Node = Union[SourceFile, FuncDecl, BlockStmt, DeclStmt, GenDecl, TypeSpec, ValueSpec, ImportSpec]


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` in document order."""
    if isinstance(node, SourceFile):
        yield from node.decls
    elif isinstance(node, FuncDecl):
        if node.body is not None:
            yield node.body
    elif isinstance(node, BlockStmt):
        yield from node.stmts
    elif isinstance(node, DeclStmt):
        yield node.decl
    elif isinstance(node, GenDecl):
        yield from node.specs
    elif isinstance(node, ValueSpec):
        yield from node.decls
    elif isinstance(node, (TypeSpec, ImportSpec)):
        return
    else:
        raise TypeError(f"unexpected node type {type(node).__name__}")


def inspect(node: Node, visit: Callable[[Node], bool]) -> None:
    """Traverse the tree in pre-order, like go/ast's Inspect.

    Children of a node are skipped when ``visit`` returns False.
    """
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        if visit(current):
            stack.extend(reversed(list(iter_child_nodes(current))))


def walk(node: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order."""
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))


__all__ = [
    "TypeSpec",
    "ValueSpec",
    "ImportSpec",
    "Spec",
    "GenDecl",
    "DeclStmt",
    "BlockStmt",
    "FuncDecl",
    "Decl",
    "SourceFile",
    "Node",
    "iter_child_nodes",
    "inspect",
    "walk",
]
