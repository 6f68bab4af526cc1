"""
Error reporting for the goswagtags CLI.

Source errors (:class:`goswagtags.errors.GoSwagError`) already know how to
print themselves as ``file:line:col: message``; this module adds the CLI's
own errors and the top-level handler that prints a diagnostic and exits.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

from goswagtags.errors import GoSwagError

# Tracebacks longer than this are cut when printed
_CLI_TRACE_LIMIT = 4000

_TRUTHY = {"1", "true", "yes", "on"}


class CLIError(Exception):
    """
    An error raised by the command line layer itself.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion shown below the message
        context: Extra details printed in verbose mode
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """The configuration file is unreadable, not TOML, or holds bad values."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Render ``exc`` for stderr.

    Examples:
        >>> print(format_cli_error(CLIConfigError("Bad mode", hint="Use '0644'")))
        Error [CLI_CONFIG_ERROR]: Bad mode
        Hint: Use '0644'
    """
    if isinstance(exc, GoSwagError):
        lines = [exc.format()]
        if verbose and exc.code:
            lines.append(f"({exc.code})")
    elif isinstance(exc, CLIError):
        lines = [f"Error [{exc.code}]: {exc.message}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose:
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())
    else:
        lines = [f"Error: {type(exc).__name__}: {exc}"]

    if include_traceback:
        lines.append("")
        lines.append(_traceback_excerpt())
    return "\n".join(lines)


def _traceback_excerpt() -> str:
    # Only meaningful inside an except block
    trace = traceback.format_exc().strip()
    if len(trace) > _CLI_TRACE_LIMIT:
        trace = trace[:_CLI_TRACE_LIMIT - 3] + "..."
    return trace


def wrap_exception(
    exc: BaseException,
    *,
    message: str,
    error_class: type = CLIError,
    **kwargs
) -> CLIError:
    """Turn ``exc`` into a CLI error, recording the original in its context."""
    context = dict(kwargs.pop('context', None) or {})
    context.setdefault('cause', f"{type(exc).__name__}: {exc}")
    return error_class(message, context=context, **kwargs)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """``--verbose``, GOSWAGTAGS_VERBOSE or GOSWAGTAGS_DEBUG."""
    return verbose_flag or _env_flag("GOSWAGTAGS_VERBOSE") or _env_flag("GOSWAGTAGS_DEBUG")


def cli_reraise_enabled() -> bool:
    """GOSWAGTAGS_RERAISE or GOSWAGTAGS_DEBUG."""
    return _env_flag("GOSWAGTAGS_RERAISE") or _env_flag("GOSWAGTAGS_DEBUG")


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Print ``exc`` to stderr and exit with ``exit_code``.

    Note:
        This function calls sys.exit() and does not return.
    """
    if cli_reraise_enabled():
        raise exc

    verbose = cli_verbose_enabled(verbose)
    print(format_cli_error(exc, verbose=verbose, include_traceback=verbose), file=sys.stderr)
    sys.exit(exit_code)


__all__ = [
    "CLIConfigError",
    "CLIError",
    "cli_reraise_enabled",
    "cli_verbose_enabled",
    "format_cli_error",
    "handle_cli_exception",
    "wrap_exception",
]
