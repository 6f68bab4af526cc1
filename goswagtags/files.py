"""Selection and traversal of Go source files."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Collection, Iterator, Union

from goswagtags.errors import WalkError

GO_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"
DEFAULT_EXCLUDE_DIRS = ("vendor",)

PathLike = Union[str, "os.PathLike[str]"]


def is_hidden(name: str) -> bool:
    return name.startswith(".") and name not in (".", "..")


def is_source_path(path: PathLike, exclude_dirs: Collection[str] = DEFAULT_EXCLUDE_DIRS) -> bool:
    """Check whether ``path`` names a Go file the tool should rewrite.

    Test files, files below an excluded (vendored) directory and hidden paths
    are left alone.
    """
    parts = PurePath(path).parts
    if not parts:
        return False
    name = parts[-1]
    if not name.endswith(GO_SUFFIX) or name.endswith(TEST_SUFFIX):
        return False
    return not any(is_hidden(part) or part in exclude_dirs for part in parts)


def iter_source_files(root: PathLike, exclude_dirs: Collection[str] = DEFAULT_EXCLUDE_DIRS) -> Iterator[str]:
    """Yield the eligible Go files below ``root`` in lexical order.

    Entries of a directory are visited in name order with subdirectories
    descended into where they sort, as Go's filepath.Walk does. Hidden and
    excluded directories are pruned; symbolic links are not followed.
    """
    root = os.fspath(root)
    try:
        with os.scandir(root) as scanner:
            entries = sorted(scanner, key=lambda entry: entry.name)
    except OSError as exc:
        raise WalkError(f"open {root}: {exc.strerror or exc}") from exc

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise WalkError(f"lstat {entry.path}: {exc.strerror or exc}") from exc
        if is_dir:
            if is_hidden(entry.name) or entry.name in exclude_dirs:
                continue
            yield from iter_source_files(entry.path, exclude_dirs)
        elif is_source_path(entry.name, exclude_dirs):
            yield entry.path


__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "GO_SUFFIX",
    "TEST_SUFFIX",
    "is_hidden",
    "is_source_path",
    "iter_source_files",
]
