"""Declaration scanner: finds the struct types that need an ``@name`` annotation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from goswagtags.ast import (
    CommentGroup,
    DeclStmt,
    FuncDecl,
    GenDecl,
    Node,
    SourceFile,
    SourceLocation,
    TypeSpec,
    inspect,
)

from .naming import (
    annotation_comment,
    compound_name,
    enclosing_function,
    is_annotation_group,
    is_exported,
    synthesize,
)
from .registry import CommentMap, insert_group

logger = logging.getLogger(__name__)


@dataclass
class AnnotationOptions:
    """Switches of the annotation pass."""

    # Annotate structs declared inside functions as <Func><Struct>
    compound_names: bool = False
    # Drop doc groups made only of @name lines that no longer match
    prune_stale: bool = True


@dataclass
class Annotation:
    """One annotation added to a declaration."""

    name: str
    decl: GenDecl
    group: CommentGroup
    location: SourceLocation
    pruned: List[CommentGroup] = field(default_factory=list)


class DeclarationScanner:
    """Single pre-order pass over a file that annotates eligible structs.

    Declarations found as statements inside function bodies land in a skip
    set before the traversal reaches them. Every other exported struct type
    that does not already carry its annotation gets a synthesized doc group,
    merged into the comment registry.
    """

    def __init__(
        self,
        source_file: SourceFile,
        cmap: CommentMap,
        options: Optional[AnnotationOptions] = None,
    ) -> None:
        self.file = source_file
        self.cmap = cmap
        self.options = options or AnnotationOptions()
        self.skip: Set[GenDecl] = set()
        self.functions: List[FuncDecl] = []
        self.annotations: List[Annotation] = []

    def scan(self) -> List[Annotation]:
        inspect(self.file, self._visit)
        return self.annotations

    def _visit(self, node: Node) -> bool:
        if isinstance(node, FuncDecl):
            self.functions.append(node)
        elif isinstance(node, DeclStmt):
            self.skip.add(node.decl)
        elif isinstance(node, GenDecl):
            self._apply(node)
        return True

    def _apply(self, decl: GenDecl) -> None:
        if decl.tok != "type" or not decl.specs:
            return
        spec = decl.specs[0]
        if not isinstance(spec, TypeSpec) or not spec.is_struct:
            return

        name = spec.name
        if decl in self.skip:
            function = None
            if self.options.compound_names:
                function = enclosing_function(self.functions, decl)
            if function is None:
                logger.debug("%s: skipping local type %s", self._where(decl), name)
                return
            name = compound_name(function, name)

        if not is_exported(name):
            logger.debug("%s: skipping unexported type %s", self._where(decl), name)
            return

        expected = annotation_comment(name)
        existing = self._existing_groups(decl, spec)
        if any(group.has_comment(expected) for group in existing):
            logger.debug("%s: %s is already annotated", self._where(decl), name)
            return

        stale = self._stale_groups(decl, existing)
        for group in stale:
            owner = self.cmap.owner_of(group)
            if owner is not None:
                self.cmap.remove(owner, group)

        doc = synthesize(decl, spec, name)
        self.cmap[decl] = insert_group(self.cmap.get(decl), doc)
        self.annotations.append(
            Annotation(name=name, decl=decl, group=doc, location=self._where(decl), pruned=stale)
        )
        logger.debug("%s: annotated %s", self._where(decl), name)

    def _existing_groups(self, decl: GenDecl, spec: TypeSpec) -> List[CommentGroup]:
        """Groups that may already carry the annotation of ``decl``.

        Those are its doc and trailing comment plus any ``@name``-only group
        it owns ahead of the type spec: one set off by a blank line, or one
        inside a parenthesized ``type (...)`` above the first spec.
        """
        groups = [group for group in (decl.doc, decl.comment) if group is not None]
        for group in self.cmap.get(decl):
            if group.end <= spec.pos and group not in groups and is_annotation_group(group):
                groups.append(group)
        return groups

    def _stale_groups(self, decl: GenDecl, existing: List[CommentGroup]) -> List[CommentGroup]:
        if not self.options.prune_stale:
            return []
        return [
            group
            for group in existing
            if group is not decl.comment and not group.synthetic and is_annotation_group(group)
        ]

    def _where(self, decl: GenDecl) -> SourceLocation:
        return self.file.lines.location(decl.pos)


def annotate_file(
    source_file: SourceFile,
    options: Optional[AnnotationOptions] = None,
) -> List[Annotation]:
    """Annotate ``source_file`` in place and rebuild its comment list."""
    cmap = CommentMap.build(source_file)
    annotations = DeclarationScanner(source_file, cmap, options).scan()
    source_file.comments = cmap.filter(source_file).comments()
    return annotations


__all__ = ["AnnotationOptions", "Annotation", "DeclarationScanner", "annotate_file"]
