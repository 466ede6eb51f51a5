"""Specification parser.

Grammar (informal EBNF):
    document   := item* EOF
    item       := param* body
    param      := MARKER key ':' value EOL
    MARKER     := item_marker (whitespace | EOL)
    body       := (SKIP | TEXT)*
    SKIP       := skip_marker EOL
    TEXT       := any other line, kept verbatim

Lines before the first marker form an item without parameters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from specker.errors import ParseError
from specker.models import Options, PatternLine, SpecDocument, SpecItem

logger = logging.getLogger(__name__)


class TokenType(Enum):
    MARKER = auto()     # ## key: value
    SKIP = auto()       # ..
    TEXT = auto()       # anything else
    EOF = auto()


@dataclass
class Token:
    type: TokenType
    text: str
    line_number: int


def split_lines(content: str) -> list[str]:
    """Split text on ``\\n`` or ``\\r\\n``; a final terminator adds no empty line."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Lexer:
    """Classifies each line of specification text."""

    def __init__(self, content: str, options: Options) -> None:
        self.lines = split_lines(content)
        self.options = options

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        for i, line in enumerate(self.lines):
            line_num = i + 1  # 1-indexed
            if self._is_marker(line):
                tokens.append(Token(TokenType.MARKER, line, line_num))
            elif line == self.options.skip_marker:
                tokens.append(Token(TokenType.SKIP, line, line_num))
            else:
                tokens.append(Token(TokenType.TEXT, line, line_num))

        tokens.append(Token(TokenType.EOF, "", len(self.lines) + 1))
        return tokens

    def _is_marker(self, line: str) -> bool:
        marker = self.options.item_marker
        if not line.startswith(marker):
            return False
        rest = line[len(marker):]
        return not rest or rest[0].isspace()


class Parser:
    """Groups a token stream into specification items."""

    def __init__(
        self,
        tokens: list[Token],
        options: Options,
        source_file: str | None = None,
    ) -> None:
        self.tokens = tokens
        self.options = options
        self.source_file = source_file
        self.pos = 0

    def parse(self) -> SpecDocument:
        items: list[SpecItem] = []
        while not self._at_end():
            items.append(self._parse_item())
        logger.debug("Parsed %d item(s) from %s", len(items), self.source_file or "<string>")
        return SpecDocument(items=tuple(items), source_file=self.source_file)

    def _parse_item(self) -> SpecItem:
        start_line = self._peek().line_number
        params: dict[str, str] = {}
        while self._peek().type == TokenType.MARKER:
            token = self._advance()
            key, value = self._parse_param(token)
            if key in params:
                raise self._error(f"Duplicate parameter '{key}'", token)
            params[key] = value

        body: list[PatternLine] = []
        while self._peek().type in (TokenType.SKIP, TokenType.TEXT):
            token = self._advance()
            if token.type == TokenType.SKIP:
                body.append(PatternLine.skip(token.line_number))
            else:
                body.append(PatternLine.literal(token.text, token.line_number))

        return SpecItem(params=params, body=tuple(body), line_number=start_line)

    def _parse_param(self, token: Token) -> tuple[str, str]:
        content = token.text[len(self.options.item_marker):].strip()
        if not content:
            raise self._error("Expected 'key: value' after item marker", token)
        key, sep, value = content.partition(":")
        key = key.strip()
        if not sep:
            raise self._error(f"Expected ':' after parameter key '{key}'", token)
        if not key:
            raise self._error("Parameter key must not be empty", token)
        return key, value.strip()

    def _error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, token.line_number, token.text, self.source_file)

    def _peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return Token(TokenType.EOF, "", -1)

    def _advance(self) -> Token:
        token = self._peek()
        self.pos += 1
        return token

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.EOF


def parse_spec_string(
    content: str, options: Options, source_file: str | None = None
) -> SpecDocument:
    """Parse specification text into a SpecDocument."""
    tokens = Lexer(content, options).tokenize()
    return Parser(tokens, options, source_file).parse()


def parse_spec_file(path: Path, options: Options) -> SpecDocument:
    """Parse a specification file into a SpecDocument."""
    content = path.read_text(encoding="utf-8")
    return parse_spec_string(content, options, source_file=str(path))
