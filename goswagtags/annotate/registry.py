"""Comment registry: which declaration owns which comment groups.

Go syntax trees attach comments by byte offset rather than by reference, so
the registry is the only place a comment group is tied to a node. Groups are
seeded from the parsed file, reshuffled by the annotation pass and finally
flattened back into the file's offset-sorted comment list.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence

from goswagtags.ast import (
    CommentGroup,
    FuncDecl,
    GenDecl,
    Node,
    SourceFile,
    sort_key,
    walk,
)

from .naming import is_annotation_group


def insert_group(groups: Sequence[CommentGroup], doc: CommentGroup) -> List[CommentGroup]:
    """Merge ``doc`` into an owner's position-ordered comment groups.

    Groups starting before ``doc`` keep their order ahead of it and groups
    starting after it follow. At ``doc``'s own position only an earlier
    annotation (synthetic, or made of ``@name`` lines) is replaced; any other
    group there is kept and ``doc`` goes in front of it. Inserting the same
    group twice yields the same list as inserting it once.
    """
    merged: List[CommentGroup] = []
    placed = False
    for group in sorted(groups, key=lambda g: g.pos):
        if group.pos == doc.pos and _replaceable(group, doc):
            if not placed:
                merged.append(doc)
                placed = True
            continue
        if group.pos >= doc.pos and not placed:
            merged.append(doc)
            placed = True
        merged.append(group)
    if not placed:
        merged.append(doc)
    return merged


def _replaceable(group: CommentGroup, doc: CommentGroup) -> bool:
    return group is doc or group.synthetic or is_annotation_group(group)


def _owner_candidates(source_file: SourceFile) -> List[Node]:
    return [node for node in walk(source_file) if isinstance(node, (GenDecl, FuncDecl))]


def _siblings(container: Node, source_file: SourceFile) -> List[Node]:
    if isinstance(container, FuncDecl):
        if container.body is None:
            return []
        return [stmt.decl for stmt in container.body.stmts]
    return list(source_file.decls)


class CommentMap:
    """Ordered mapping from owner node to the comment groups attached to it."""

    def __init__(self) -> None:
        self._entries: Dict[Node, List[CommentGroup]] = {}

    @classmethod
    def build(cls, source_file: SourceFile) -> "CommentMap":
        """Associate every comment group of ``source_file`` with an owner."""
        cmap = cls()
        candidates = _owner_candidates(source_file)
        for group in source_file.comments:
            owner = cls._owner_of(group, source_file, candidates)
            cmap._entries.setdefault(owner, []).append(group)
        for groups in cmap._entries.values():
            groups.sort(key=sort_key)
        return cmap

    @staticmethod
    def _owner_of(group: CommentGroup, source_file: SourceFile, candidates: Sequence[Node]) -> Node:
        container: Node = source_file
        for node in candidates:
            if node.pos <= group.pos < node.end and (
                container is source_file or node.end - node.pos < container.end - container.pos
            ):
                container = node
        if isinstance(container, GenDecl):
            return container

        siblings = _siblings(container, source_file)
        for node in siblings:
            if node.doc is group or getattr(node, "comment", None) is group:
                return node

        lines = source_file.lines
        previous: Optional[Node] = None
        following: Optional[Node] = None
        for node in siblings:
            if node.end <= group.pos:
                previous = node
            elif node.pos >= group.end and following is None:
                following = node
        if previous is not None and lines.line(previous.end) == lines.line(group.pos):
            return previous
        if following is not None:
            return following
        if previous is not None:
            return previous
        return container

    def __contains__(self, owner: Node) -> bool:
        return owner in self._entries

    def __getitem__(self, owner: Node) -> List[CommentGroup]:
        return self._entries[owner]

    def __setitem__(self, owner: Node, groups: List[CommentGroup]) -> None:
        self._entries[owner] = list(groups)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, owner: Node) -> List[CommentGroup]:
        return list(self._entries.get(owner, []))

    def remove(self, owner: Node, group: CommentGroup) -> None:
        groups = self._entries.get(owner)
        if groups and group in groups:
            groups.remove(group)

    def owner_of(self, group: CommentGroup) -> Optional[Node]:
        for owner, groups in self._entries.items():
            if any(candidate is group for candidate in groups):
                return owner
        return None

    def filter(self, source_file: SourceFile) -> "CommentMap":
        """Return a map restricted to owners reachable from ``source_file``."""
        reachable = set(walk(source_file))
        filtered = CommentMap()
        for owner, groups in self._entries.items():
            if owner in reachable:
                filtered._entries[owner] = list(groups)
        return filtered

    def comments(self) -> List[CommentGroup]:
        """Return every group once, sorted by position."""
        seen = set()
        flat: List[CommentGroup] = []
        for groups in self._entries.values():
            for group in groups:
                if group not in seen:
                    seen.add(group)
                    flat.append(group)
        flat.sort(key=sort_key)
        return flat


__all__ = ["CommentMap", "insert_group"]
