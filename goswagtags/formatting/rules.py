"""Default formatting rules for rewritten Go files."""

from __future__ import annotations

from .core import FormattingOptions


class DefaultFormattingRules:
    """Preset formatting options."""

    @classmethod
    def standard(cls) -> FormattingOptions:
        """gofmt-compatible output with at most one blank line in a row."""
        return FormattingOptions(
            insert_final_newline=True,
            trim_trailing_whitespace=True,
            max_empty_lines=1,
        )
