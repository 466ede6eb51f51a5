"""Exception types raised while parsing, substituting and matching specifications."""

from __future__ import annotations


class SpecError(Exception):
    """Base class for all specker errors."""


class ParseError(SpecError):
    """Raised when specification text is malformed."""

    def __init__(
        self,
        message: str,
        line_number: int,
        line: str = "",
        source_file: str | None = None,
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        self.source_file = source_file
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"{self.source_file}:" if self.source_file else "line "
        return f"{where}{self.line_number}: {self.message}"


class PlaceholderError(SpecError):
    """Raised when a placeholder cannot be resolved."""


class UndefinedVariable(PlaceholderError):
    """A placeholder references a name absent from the variable map."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Undefined variable: {name}")


class MalformedPlaceholder(PlaceholderError):
    """A placeholder is unterminated or names nothing."""

    def __init__(self, text: str, offset: int) -> None:
        self.text = text
        self.offset = offset
        super().__init__(f"Malformed placeholder at column {offset + 1}: {text!r}")


def _describe(text: str | None) -> str:
    return "end of input" if text is None else repr(text)


class MatchError(SpecError):
    """Actual content does not match the expected pattern.

    ``line_number`` is the 1-based line of the actual input, ``offset`` the
    0-based index of the first differing character. ``expected`` is ``None``
    when end of input was expected, ``actual`` is ``None`` when input ran out.
    """

    def __init__(
        self,
        line_number: int,
        expected: str | None,
        actual: str | None,
        offset: int = 0,
        pattern_line: int = 0,
    ) -> None:
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        self.offset = offset
        self.pattern_line = pattern_line
        super().__init__(self.summary)

    @property
    def summary(self) -> str:
        return (
            f"expected {_describe(self.expected)}, found {_describe(self.actual)} "
            f"({self._location()})"
        )

    def _location(self) -> str:
        return f"line {self.line_number}, column {self.offset + 1}"


class ContentMismatch(MatchError):
    """A literal line differs from the actual line."""


class UnexpectedEndOfInput(MatchError):
    """Input ended while a literal or wildcard anchor still needed a line."""

    def __init__(
        self, line_number: int, expected: str, pattern_line: int = 0
    ) -> None:
        super().__init__(line_number, expected, None, 0, pattern_line)

    def _location(self) -> str:
        if self.line_number == 0:
            return "input is empty"
        return f"after line {self.line_number}"


class ExpectedEndOfInput(MatchError):
    """Surplus lines follow a pattern that does not end in a skip marker."""

    def __init__(self, line_number: int, actual: str) -> None:
        super().__init__(line_number, None, actual, 0)


class RenderError(SpecError):
    """An item cannot be written out as concrete content."""


class TargetNotFound(SpecError):
    """The file named by an item does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class TargetUnreadable(SpecError):
    """A file exists but cannot be read as UTF-8 text."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")
