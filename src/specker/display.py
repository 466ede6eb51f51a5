"""Human-readable rendering of parse and match errors."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from specker.errors import MatchError, ParseError, SpecError
from specker.parser import split_lines

CONTEXT_LINES = 2
MAX_LINE_WIDTH = 80


def summarize(error: SpecError) -> str:
    """One-line description of an error, for output that cannot span lines."""
    if isinstance(error, MatchError):
        return error.summary
    return str(error)


def _clip(line: str) -> str:
    if len(line) > MAX_LINE_WIDTH:
        return line[:MAX_LINE_WIDTH - 2] + ".."
    return line


def _caret_row(text: str, offset: int, width: int) -> str:
    # A divergence past the cut of a clipped line is marked under the "..".
    if len(text) > MAX_LINE_WIDTH:
        offset = min(offset, MAX_LINE_WIDTH - 2)
    width = min(width, MAX_LINE_WIDTH)
    # Keep tabs in the padding so the carets line up under tabbed text.
    pad = "".join("\t" if c == "\t" else " " for c in text[:offset])
    return pad + "^" * max(1, width - offset)


def _focus(error: SpecError) -> tuple[int, str, str, str]:
    """Return (line number, shown text, caret row, message) for an error."""
    if isinstance(error, MatchError):
        expected = error.expected or ""
        if error.actual is None:
            # Input ran out: point at the position just past the last line.
            number, text = error.line_number + 1, ""
        else:
            number, text = error.line_number, error.actual
        width = max(len(expected), len(text))
        return number, text, _caret_row(text, error.offset, width), error.summary
    if isinstance(error, ParseError):
        text = error.line
        return error.line_number, text, _caret_row(text, 0, len(text)), error.message
    raise TypeError(f"Cannot locate error of type {type(error).__name__}")


def format_error(
    error: SpecError, label: str, context: Sequence[str] = ()
) -> str:
    """Render an error as the offending line with a caret row under the divergence.

    ``context`` holds lines that precede the offending line in the source and
    are printed above it. Lines wider than MAX_LINE_WIDTH are cut and end in
    "..".
    """
    number, text, carets, message = _focus(error)
    first = number - len(context)
    gutter = len(str(number))

    rows = [f"in {label!r}"]
    for i, line in enumerate(context):
        rows.append(f"{first + i:>{gutter}} | {_clip(line)}")
    rows.append(f"{number:>{gutter}} | {_clip(text)}")
    blank = " " * gutter
    rows.append(f"{blank} | {carets}")
    rows.append(f"{blank} | {message}")
    return "\n".join(rows)


def format_error_for_file(
    path: Path, error: SpecError, label: str | None = None
) -> str:
    """Render an error, reading preceding context lines from ``path``."""
    # Undecodable bytes after the reported line must not hide the report.
    lines = split_lines(path.read_text(encoding="utf-8", errors="replace"))
    number, _, _, _ = _focus(error)
    start = max(0, number - 1 - CONTEXT_LINES)
    context = lines[start:max(0, number - 1)]
    return format_error(error, label or str(path), context)
