"""Annotation synthesis: the ``@name`` text and its synthetic comment group."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from goswagtags.ast import Comment, CommentGroup, FuncDecl, GenDecl, TypeSpec

ANNOTATION_TAG = "@name"

_WORD_SEPARATORS = re.compile(r"[\s_.\-]+")


def to_camel(value: str) -> str:
    """Convert ``snake_case`` or mixed words to UpperCamelCase.

    Inner capitals are kept, so ``GetAppList_res`` becomes ``GetAppListRes``.
    """
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SEPARATORS.split(value) if word)


def annotation_text(name: str) -> str:
    return f"{ANNOTATION_TAG} {name}"


def annotation_comment(name: str) -> str:
    """Return the literal comment line carrying the annotation for ``name``."""
    return f"// {annotation_text(name)}"


def is_annotation_group(group: CommentGroup) -> bool:
    """Check whether every comment of ``group`` is an ``@name`` annotation."""
    return all(
        comment.text.startswith("//") and comment.text[2:].strip().startswith(ANNOTATION_TAG + " ")
        for comment in group.comments
    )


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def enclosing_function(functions: Sequence[FuncDecl], decl: GenDecl) -> Optional[FuncDecl]:
    """Return the first function, in traversal order, strictly containing ``decl``."""
    for function in functions:
        if function.pos < decl.pos < function.end:
            return function
    return None


def compound_name(function: FuncDecl, name: str) -> str:
    return to_camel(f"{function.name}_{name}")


def synthesize(decl: GenDecl, spec: TypeSpec, name: str) -> CommentGroup:
    """Create the annotation group for ``spec`` and make it ``decl``'s doc.

    The group sits at the end of the type spec, a position that is the same
    on every run for the same declaration.
    """
    doc = CommentGroup([Comment(spec.end, annotation_comment(name))], synthetic=True)
    decl.doc = doc
    return doc


__all__ = [
    "ANNOTATION_TAG",
    "annotation_comment",
    "annotation_text",
    "compound_name",
    "enclosing_function",
    "is_annotation_group",
    "is_exported",
    "synthesize",
    "to_camel",
]
