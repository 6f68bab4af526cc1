"""
Renderer for annotated Go files.

This module turns a mutated syntax tree back into source text:
1. Copies code verbatim and reconciles comment groups by offset
2. Places synthesized doc comments directly above their declarations
3. Strips trailing whitespace and collapses runs of blank lines
"""

from __future__ import annotations

__all__ = ["GoFormatter", "FormattingOptions", "DefaultFormattingRules"]

from .core import FormattingOptions, GoFormatter
from .rules import DefaultFormattingRules
