"""Line matching engine.

An item body is a sequence of literal lines and skip markers. A run of skip
markers matches the fewest actual lines needed to reach the next literal, so
matching is a single forward scan over the input with no backtracking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence

from specker.errors import (
    ContentMismatch,
    ExpectedEndOfInput,
    RenderError,
    UnexpectedEndOfInput,
)
from specker.models import Options, PatternLine, SpecItem
from specker.variables import substitute

logger = logging.getLogger(__name__)


def read_lines(stream: Iterable[str]) -> Iterator[str]:
    """Lazily yield lines from a text stream without their terminators."""
    for line in stream:
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def divergence_offset(expected: str, actual: str) -> int | None:
    """Index of the first differing character, or None if the strings are equal."""
    if expected == actual:
        return None
    for i, (a, b) in enumerate(zip(expected, actual)):
        if a != b:
            return i
    return min(len(expected), len(actual))


def match_lines(
    body: Sequence[PatternLine],
    lines: Iterable[str],
    variables: Mapping[str, str],
    options: Options,
) -> None:
    """Match a pattern body against actual lines.

    Returns None on success and raises a MatchError subclass on the first
    divergence. Placeholders are resolved immediately before each comparison.
    """
    actual = read_lines(lines)
    line_no = 0  # last consumed actual line, 1-based
    pos = 0

    while pos < len(body):
        entry = body[pos]

        if entry.is_skip:
            while pos < len(body) and body[pos].is_skip:
                pos += 1
            if pos == len(body):
                return  # trailing skip matches the rest of the input
            anchor = body[pos]
            expected = substitute(anchor.text, variables, options)
            for line in actual:
                line_no += 1
                if line == expected:
                    logger.debug(
                        "Skip anchored on line %d by pattern line %d",
                        line_no, anchor.line_number,
                    )
                    break
            else:
                raise UnexpectedEndOfInput(line_no, expected, anchor.line_number)
            pos += 1
            continue

        expected = substitute(entry.text, variables, options)
        line = next(actual, None)
        if line is None:
            raise UnexpectedEndOfInput(line_no, expected, entry.line_number)
        line_no += 1
        offset = divergence_offset(expected, line)
        if offset is not None:
            raise ContentMismatch(line_no, expected, line, offset, entry.line_number)
        pos += 1

    if options.strict_eof:
        surplus = next(actual, None)
        if surplus is not None:
            raise ExpectedEndOfInput(line_no + 1, surplus)


def match_item(
    item: SpecItem,
    stream: Iterable[str],
    variables: Mapping[str, str],
    options: Options,
) -> None:
    """Match one specification item against an open input stream."""
    match_lines(item.body, stream, variables, options)


def render_item(
    item: SpecItem, variables: Mapping[str, str], options: Options
) -> str:
    """Return the content an item expects, with placeholders resolved.

    Items containing skip markers have no single concrete rendering.
    """
    lines: list[str] = []
    for entry in item.body:
        if entry.is_skip:
            raise RenderError(
                f"Cannot render skip marker at line {entry.line_number}"
            )
        lines.append(substitute(entry.text, variables, options))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"

