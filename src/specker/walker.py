"""Discovery of specification files below a directory."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from specker.errors import ParseError
from specker.models import Options, SpecDocument
from specker.parser import parse_spec_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecPath:
    """A parsed specification together with where it was found."""

    path: Path
    relative: Path
    document: SpecDocument


def find_spec_files(spec_dir: Path, extension: str) -> list[Path]:
    """Return spec files with ``extension`` below ``spec_dir``, sorted."""
    suffix = "." + extension.lstrip(".")
    files: list[Path] = []
    for path in spec_dir.rglob(f"*{suffix}"):
        if not path.is_file():
            continue
        parts = path.relative_to(spec_dir).parts
        if any(p.startswith(".") for p in parts):
            continue
        files.append(path)
    return sorted(files)


def walk_spec_dir(
    spec_dir: Path,
    extension: str,
    options: Options,
    on_error: Callable[[Path, Exception], None] | None = None,
) -> Iterator[SpecPath]:
    """Parse every spec file below ``spec_dir``.

    Without ``on_error`` the first malformed or unreadable file stops the walk
    with its ParseError (carrying the file path), OSError or
    UnicodeDecodeError. With ``on_error`` the file and exception are passed
    to the callback and the walk moves on to the next file.
    """
    if not spec_dir.is_dir():
        raise FileNotFoundError(f"Spec directory not found: {spec_dir}")

    for path in find_spec_files(spec_dir, extension):
        logger.debug("Parsing spec file %s", path)
        try:
            document = parse_spec_file(path, options)
        except (ParseError, OSError, UnicodeDecodeError) as e:
            if on_error is None:
                raise
            on_error(path, e)
            continue
        yield SpecPath(path=path, relative=path.relative_to(spec_dir), document=document)
