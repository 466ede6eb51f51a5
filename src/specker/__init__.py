"""Specker: check generated files against line-pattern specifications."""

__version__ = "0.1.0"

from specker.errors import (
    ContentMismatch,
    ExpectedEndOfInput,
    MalformedPlaceholder,
    MatchError,
    ParseError,
    RenderError,
    SpecError,
    TargetNotFound,
    TargetUnreadable,
    UndefinedVariable,
    UnexpectedEndOfInput,
)
from specker.display import format_error, summarize
from specker.matcher import match_item, match_lines, render_item
from specker.models import LineKind, Options, PatternLine, SpecDocument, SpecItem
from specker.parser import parse_spec_file, parse_spec_string
from specker.variables import substitute
from specker.walker import SpecPath, walk_spec_dir

__all__ = [
    "ContentMismatch",
    "ExpectedEndOfInput",
    "LineKind",
    "MalformedPlaceholder",
    "MatchError",
    "Options",
    "ParseError",
    "PatternLine",
    "RenderError",
    "SpecDocument",
    "SpecError",
    "SpecItem",
    "SpecPath",
    "TargetNotFound",
    "TargetUnreadable",
    "UndefinedVariable",
    "UnexpectedEndOfInput",
    "format_error",
    "match_item",
    "match_lines",
    "parse_spec_file",
    "parse_spec_string",
    "render_item",
    "substitute",
    "summarize",
    "walk_spec_dir",
]
