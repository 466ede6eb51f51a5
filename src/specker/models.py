"""Core data models for specker."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from specker.errors import SpecError


@dataclass(frozen=True)
class Options:
    """Marker conventions used to parse, substitute and match a specification."""

    skip_marker: str = ".."
    item_marker: str = "##"
    var_start: str = "${"
    var_end: str = "}"
    strict_eof: bool = False

    def __post_init__(self) -> None:
        for name in ("skip_marker", "item_marker", "var_start", "var_end"):
            if not getattr(self, name):
                raise ValueError(f"Option {name} must not be empty")


class LineKind(Enum):
    """Kinds of pattern lines in an item body."""

    LITERAL = "literal"
    SKIP = "skip"


@dataclass(frozen=True)
class PatternLine:
    """One line of an item body: literal text or the skip marker."""

    kind: LineKind
    text: str = ""
    line_number: int = 0

    def __post_init__(self) -> None:
        if self.kind is LineKind.SKIP and self.text:
            raise ValueError("Skip lines carry no text")

    @classmethod
    def literal(cls, text: str, line_number: int = 0) -> PatternLine:
        return cls(LineKind.LITERAL, text, line_number)

    @classmethod
    def skip(cls, line_number: int = 0) -> PatternLine:
        return cls(LineKind.SKIP, "", line_number)

    @property
    def is_skip(self) -> bool:
        return self.kind is LineKind.SKIP


@dataclass(frozen=True)
class SpecItem:
    """A named unit of a specification: parameters plus an expected line pattern."""

    params: dict[str, str] = field(default_factory=dict)
    body: tuple[PatternLine, ...] = ()
    line_number: int = 0

    def get_param(self, key: str) -> str | None:
        return self.params.get(key)


@dataclass(frozen=True)
class SpecDocument:
    """A parsed specification file."""

    items: tuple[SpecItem, ...] = ()
    source_file: str | None = None

    def __iter__(self) -> Iterator[SpecItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def iter_item_values(self, key: str) -> Iterator[tuple[SpecItem, str]]:
        """Yield (item, value) for every item that declares ``key``."""
        for item in self.items:
            value = item.get_param(key)
            if value is not None:
                yield item, value


@dataclass
class CheckFailure:
    """A single item that did not match its target file."""

    spec_file: str
    item_line: int
    target: str
    error: SpecError


@dataclass
class CheckResult:
    """Result of checking one or more specification documents."""

    checked: int = 0
    failures: list[CheckFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.failures) == 0

    @property
    def passed(self) -> int:
        # Parse failures name no target and were never counted as checked.
        return self.checked - sum(1 for f in self.failures if f.target)


@dataclass
class ProjectConfig:
    """Project configuration for specker."""

    version: str = "0.1.0"
    spec_dir: str = "spec"
    extension: str = "txt"
    root: str = ""
    skip_marker: str = ".."
    item_marker: str = "##"
    var_start: str = "${"
    var_end: str = "}"
    strict_eof: bool = False
    variables: dict[str, str] = field(default_factory=dict)
