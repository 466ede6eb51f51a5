"""Placeholder substitution for literal pattern lines."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from specker.errors import MalformedPlaceholder, UndefinedVariable
from specker.models import Options


def _scan(text: str, options: Options) -> Iterator[tuple[int, int, str]]:
    """Yield (start, end, name) for each placeholder; end is one past var_end."""
    pos = 0
    while True:
        start = text.find(options.var_start, pos)
        if start == -1:
            return
        name_start = start + len(options.var_start)
        # The first closing delimiter terminates the placeholder; no nesting.
        close = text.find(options.var_end, name_start)
        if close == -1:
            raise MalformedPlaceholder(text, start)
        name = text[name_start:close].strip()
        if not name:
            raise MalformedPlaceholder(text, start)
        pos = close + len(options.var_end)
        yield start, pos, name


def placeholders(text: str, options: Options) -> list[str]:
    """Return the variable names referenced by ``text`` in order of appearance."""
    return [name for _, _, name in _scan(text, options)]


def substitute(text: str, variables: Mapping[str, str], options: Options) -> str:
    """Resolve every placeholder in ``text`` against ``variables``."""
    parts: list[str] = []
    pos = 0
    for start, end, name in _scan(text, options):
        if name not in variables:
            raise UndefinedVariable(name)
        parts.append(text[pos:start])
        parts.append(str(variables[name]))
        pos = end
    if not parts:
        return text
    parts.append(text[pos:])
    return "".join(parts)
