"""Workspace configuration support for the goswagtags CLI."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from goswagtags.files import DEFAULT_EXCLUDE_DIRS

CONFIG_FILENAMES = ("goswagtags.toml", ".goswagtags.toml")
CONFIG_SECTION = "goswagtags"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or holds bad values."""


@dataclass
class ToolConfig:
    """Resolved configuration for a run."""

    in_place: bool = False
    compound_names: bool = False
    prune_stale: bool = True
    file_mode: int = 0o644
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    max_empty_lines: int = 1
    gofmt: bool = False
    gofmt_command: str = "gofmt"
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _parse_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _parse_file_mode(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"'file_mode' must be an octal string or integer, got {value!r}")
    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        try:
            mode = int(value, 8)
        except ValueError as exc:
            raise ConfigError(f"'file_mode' is not an octal number: {value!r}") from exc
    else:
        raise ConfigError(f"'file_mode' must be an octal string or integer, got {value!r}")
    if not 0 <= mode <= 0o7777:
        raise ConfigError(f"'file_mode' out of range: {value!r}")
    return mode


def _parse_exclude_dirs(value: Any) -> Tuple[str, ...]:
    values: List[str]
    if isinstance(value, str):
        values = [value]
    elif isinstance(value, (list, tuple)):
        values = [str(item) for item in value]
    else:
        raise ConfigError(f"'exclude_dirs' must be a list of directory names, got {value!r}")
    return tuple(values)


def find_config_file(root: Path) -> Optional[Path]:
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def parse_config(data: Dict[str, Any], source: Optional[Path] = None) -> ToolConfig:
    """Build a :class:`ToolConfig` from decoded TOML data.

    Settings live in a ``[goswagtags]`` table; a file holding only top-level
    keys is read as that table.
    """
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] must be a table")

    defaults = ToolConfig()
    max_empty_lines = section.get("max_empty_lines", defaults.max_empty_lines)
    if isinstance(max_empty_lines, bool) or not isinstance(max_empty_lines, int) or max_empty_lines < 0:
        raise ConfigError(f"'max_empty_lines' must be a non-negative integer, got {max_empty_lines!r}")

    gofmt_command = section.get("gofmt_command", defaults.gofmt_command)
    if not isinstance(gofmt_command, str) or not gofmt_command.strip():
        raise ConfigError(f"'gofmt_command' must be a non-empty string, got {gofmt_command!r}")

    return ToolConfig(
        in_place=_parse_bool(section, "in_place", defaults.in_place),
        compound_names=_parse_bool(section, "compound_names", defaults.compound_names),
        prune_stale=_parse_bool(section, "prune_stale", defaults.prune_stale),
        file_mode=_parse_file_mode(section.get("file_mode", defaults.file_mode)),
        exclude_dirs=_parse_exclude_dirs(section.get("exclude_dirs", list(defaults.exclude_dirs))),
        max_empty_lines=max_empty_lines,
        gofmt=_parse_bool(section, "gofmt", defaults.gofmt),
        gofmt_command=gofmt_command,
        source=source,
        raw=dict(section),
    )


def load_config(root: Path, explicit: Optional[Path] = None) -> ToolConfig:
    """Load configuration from ``explicit`` or from a config file in ``root``.

    Without any file the defaults are returned.
    """
    path = explicit if explicit is not None else find_config_file(root)
    if path is None:
        return ToolConfig()
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    return parse_config(_read_toml_config(path), source=path)


__all__ = [
    "CONFIG_FILENAMES",
    "ConfigError",
    "ToolConfig",
    "find_config_file",
    "load_config",
    "parse_config",
]
