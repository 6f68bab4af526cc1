"""
goswagtags: canonical ``@name`` annotations for Go structs.

swag and similar OpenAPI generators read ``// @name <Type>`` doc comments to
decide what a Go struct is called in the generated schema. This package
rewrites Go source so every exported struct type carries one.

The code is organised into several modules:

* ``ast`` : the declaration and comment model of a parsed Go file.
* ``parser`` : the Go front end, built on the tree-sitter Go grammar.
* ``annotate`` : the comment registry, the declaration scanner and the
  annotation synthesizer.
* ``formatting`` : renders the annotated tree back to source text and
  normalizes whitespace.
* ``processor`` and ``files`` : the per-file pipeline and file selection.
* ``cli`` : the command line interface.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
