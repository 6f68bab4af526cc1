"""Per-file pipeline: parse, annotate, render, then print or write back."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, List, Optional, Tuple, Union

from goswagtags.annotate import Annotation, AnnotationOptions, annotate_file
from goswagtags.errors import GoParseError, StatError, WriteError
from goswagtags.files import DEFAULT_EXCLUDE_DIRS, is_source_path, iter_source_files
from goswagtags.formatting import DefaultFormattingRules, FormattingOptions, GoFormatter
from goswagtags.parser import parse_source

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


@dataclass
class ProcessOptions:
    """Options for a whole run."""

    in_place: bool = False
    file_mode: int = DEFAULT_FILE_MODE
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    annotation: AnnotationOptions = field(default_factory=AnnotationOptions)
    formatting: FormattingOptions = field(default_factory=DefaultFormattingRules.standard)


@dataclass
class FileResult:
    """Outcome of processing one file."""

    path: str
    output: str
    annotations: List[Annotation] = field(default_factory=list)
    changed: bool = False


def process_source(
    source: Union[str, bytes],
    path: str = "<input>",
    options: Optional[ProcessOptions] = None,
) -> FileResult:
    """Run the annotation pipeline over in-memory source text."""
    options = options or ProcessOptions()
    source_file = parse_source(source, path)
    annotations = annotate_file(source_file, options.annotation)
    output = GoFormatter(options.formatting).render(source_file)
    original = source.decode("utf-8") if isinstance(source, bytes) else source
    return FileResult(path=path, output=output, annotations=annotations, changed=output != original)


def process_file(
    path: str,
    options: Optional[ProcessOptions] = None,
    stdout: Optional[IO[str]] = None,
) -> FileResult:
    """Process one file and either print the result or overwrite the file."""
    options = options or ProcessOptions()
    logger.info("processing %s", path)
    try:
        source = Path(path).read_bytes()
    except OSError as exc:
        raise GoParseError(f"open {path}: {exc.strerror or exc}") from exc

    result = process_source(source, path, options)
    for annotation in result.annotations:
        logger.debug("%s: added @name %s", annotation.location, annotation.name)

    if options.in_place:
        write_file(path, result.output, options.file_mode)
        logger.info("wrote %s (%d annotations)", path, len(result.annotations))
    else:
        stream = stdout or sys.stdout
        stream.write(result.output)
        stream.flush()
    return result


def write_file(path: str, text: str, mode: int = DEFAULT_FILE_MODE) -> None:
    """Truncate and rewrite ``path``; ``mode`` applies when the file is created."""
    data = text.encode("utf-8")
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise WriteError(f"open {path}: {exc.strerror or exc}") from exc


def run(
    paths: Iterable[str],
    options: Optional[ProcessOptions] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> List[FileResult]:
    """Process every eligible file named by or found below ``paths``.

    Paths that cannot be inspected are reported and skipped. Any other
    failure propagates and ends the run.
    """
    options = options or ProcessOptions()
    errors = stderr or sys.stderr
    results: List[FileResult] = []
    for path in paths:
        try:
            os.stat(path)
        except OSError as exc:
            print(StatError(f"stat {path}: {exc.strerror or exc}").format(), file=errors)
            continue

        if os.path.isdir(path):
            candidates: Iterable[str] = iter_source_files(path, options.exclude_dirs)
        elif is_source_path(path, options.exclude_dirs):
            candidates = [path]
        else:
            logger.debug("skipping %s", path)
            continue

        for candidate in candidates:
            results.append(process_file(candidate, options, stdout))
    return results


__all__ = [
    "DEFAULT_FILE_MODE",
    "FileResult",
    "ProcessOptions",
    "process_file",
    "process_source",
    "run",
    "write_file",
]
