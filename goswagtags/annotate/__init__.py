"""The ``@name`` annotation pass."""

from .naming import (
    ANNOTATION_TAG,
    annotation_comment,
    annotation_text,
    compound_name,
    enclosing_function,
    is_exported,
    synthesize,
    to_camel,
)
from .registry import CommentMap, insert_group
from .scanner import Annotation, AnnotationOptions, DeclarationScanner, annotate_file

__all__ = [
    "ANNOTATION_TAG",
    "Annotation",
    "AnnotationOptions",
    "CommentMap",
    "DeclarationScanner",
    "annotate_file",
    "annotation_comment",
    "annotation_text",
    "compound_name",
    "enclosing_function",
    "insert_group",
    "is_exported",
    "synthesize",
    "to_camel",
]
