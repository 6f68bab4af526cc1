"""
goswagtags CLI entry point.

Adds ``// @name <Type>`` annotations above exported Go struct declarations so
that swag and other OpenAPI generators pick up stable type names.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from goswagtags import __version__
from goswagtags.annotate import AnnotationOptions
from goswagtags.config import ConfigError, ToolConfig, load_config
from goswagtags.formatting import DefaultFormattingRules
from goswagtags.processor import ProcessOptions, run

from .errors import CLIConfigError, handle_cli_exception, wrap_exception


def _configure_logging(args) -> None:
    """Configure the goswagtags logger from the CLI flag or environment."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('GOSWAGTAGS_LOG_LEVEL', 'warning')
    ).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }

    numeric_level = level_map.get(log_level, logging.WARNING)

    logger = logging.getLogger('goswagtags')
    logger.setLevel(numeric_level)

    # stdout carries rewritten source, so log records go to stderr
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goswagtags",
        usage="%(prog)s [flags] [path ...]",
        description="Annotate exported Go structs with '// @name <Type>' for OpenAPI generators",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-i",
        dest="in_place",
        action="store_true",
        default=None,
        help="Make in-place editing",
    )
    parser.add_argument(
        "--compound",
        dest="compound_names",
        action="store_true",
        default=None,
        help="Annotate structs declared inside functions as <Function><Struct>",
    )
    parser.add_argument(
        "--keep-stale",
        dest="prune_stale",
        action="store_false",
        default=None,
        help="Keep doc comments holding only outdated @name annotations",
    )
    parser.add_argument(
        "--gofmt",
        action="store_true",
        default=None,
        help="Reformat the output with gofmt (see gofmt_command in the config file)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a goswagtags.toml configuration file",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Set logging level (or set GOSWAGTAGS_LOG_LEVEL)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print full tracebacks on errors (or set GOSWAGTAGS_VERBOSE=1)",
    )
    parser.add_argument("paths", nargs="*", metavar="path", help="Go files or directories")
    return parser


def build_options(args, config: ToolConfig) -> ProcessOptions:
    """Merge command line flags over the configuration file."""
    def pick(flag, configured):
        return configured if flag is None else flag

    formatting = DefaultFormattingRules.standard()
    formatting.max_empty_lines = config.max_empty_lines
    if pick(args.gofmt, config.gofmt):
        formatting.gofmt_command = config.gofmt_command
    return ProcessOptions(
        in_place=pick(args.in_place, config.in_place),
        file_mode=config.file_mode,
        exclude_dirs=config.exclude_dirs,
        annotation=AnnotationOptions(
            compound_names=pick(args.compound_names, config.compound_names),
            prune_stale=pick(args.prune_stale, config.prune_stale),
        ),
        formatting=formatting,
    )


def _load_config(args) -> ToolConfig:
    explicit = Path(args.config) if args.config else None
    try:
        return load_config(Path.cwd(), explicit)
    except ConfigError as exc:
        raise wrap_exception(
            exc,
            message=str(exc),
            error_class=CLIConfigError,
            hint="See the [goswagtags] table in README.md for the supported keys",
        ) from exc


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        Print an annotated file:
        >>> main(['models.go'])  # doctest: +SKIP

        Rewrite a package tree in place:
        >>> main(['-i', './api'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    if not args.paths:
        parser.print_help(sys.stderr)
        return

    try:
        options = build_options(args, _load_config(args))
        run(args.paths, options)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)


__all__ = ["build_options", "build_parser", "main"]
