"""Acceptance tests: matching behaviour end to end, from spec text to diagnostics."""

import io

import pytest

from specker import (
    ContentMismatch,
    ExpectedEndOfInput,
    Options,
    UndefinedVariable,
    UnexpectedEndOfInput,
    format_error,
    match_item,
    parse_spec_string,
    substitute,
)

pytestmark = pytest.mark.acceptance

HTML_SPEC = """\
## file: index.html
<html>
..
<body>
..
</html>
"""


def _item(text: str, options: Options):
    return parse_spec_string(text, options).items[0]


def _stream(lines: list[str]) -> io.StringIO:
    return io.StringIO("".join(line + "\n" for line in lines))


class TestLiteralOnlySpecs:
    """Without skip markers a spec matches exactly its own lines."""

    @pytest.mark.parametrize("actual", [
        ["a", "b", "c"],
        ["a", "b", "c", "trailing"],
    ])
    def test_matches(self, actual: list[str]) -> None:
        options = Options()
        match_item(_item("## file: f\na\nb\nc\n", options), _stream(actual), {}, options)

    @pytest.mark.parametrize("actual", [
        ["a", "c"],
        ["a", "b"],
        ["b", "a", "c"],
    ])
    def test_rejects(self, actual: list[str]) -> None:
        options = Options()
        with pytest.raises((ContentMismatch, UnexpectedEndOfInput)):
            match_item(_item("## file: f\na\nb\nc\n", options), _stream(actual), {}, options)

    def test_strict_requires_exact_length(self) -> None:
        options = Options(strict_eof=True)
        item = _item("## file: f\na\nb\n", options)
        match_item(item, _stream(["a", "b"]), {}, options)
        with pytest.raises(ExpectedEndOfInput):
            match_item(item, _stream(["a", "b", "c"]), {}, options)


class TestSkipMarkers:
    def test_html_document_matches(self) -> None:
        options = Options()
        actual = ["<html>", "<head></head>", "<body>", "<p>x</p>", "</html>"]
        match_item(_item(HTML_SPEC, options), _stream(actual), {}, options)

    def test_missing_closing_tag(self) -> None:
        options = Options()
        actual = ["<html>", "<body>", "<p>x</p>", "</htm>"]
        with pytest.raises(UnexpectedEndOfInput) as exc:
            match_item(_item(HTML_SPEC, options), _stream(actual), {}, options)
        assert exc.value.expected == "</html>"
        assert exc.value.pattern_line == 6

    def test_only_skip_matches_anything(self) -> None:
        options = Options()
        item = _item("## file: f\n..\n", options)
        for actual in ([], ["x"], ["x", "y", "z"]):
            match_item(item, _stream(actual), {}, options)

    def test_repeated_skips_equal_single(self) -> None:
        options = Options()
        single = _item("## file: f\na\n..\nz\n", options)
        repeated = _item("## file: f\na\n..\n..\n..\nz\n", options)
        for actual in (["a", "z"], ["a", "1", "2", "z"], ["a", "1"]):
            outcomes = []
            for item in (single, repeated):
                try:
                    match_item(item, _stream(actual), {}, options)
                    outcomes.append(None)
                except UnexpectedEndOfInput as e:
                    outcomes.append((e.line_number, e.expected))
            assert outcomes[0] == outcomes[1]


class TestVariables:
    def test_hello_world(self) -> None:
        assert substitute("Hello ${name}!", {"name": "World"}, Options()) == "Hello World!"

    def test_unbound_never_empties(self) -> None:
        with pytest.raises(UndefinedVariable) as exc:
            substitute("Hello ${name}!", {}, Options())
        assert exc.value.name == "name"

    def test_bindings_applied_at_match_time(self) -> None:
        options = Options()
        item = _item("## file: f\nversion ${v}\n", options)
        match_item(item, _stream(["version 1"]), {"v": "1"}, options)
        match_item(item, _stream(["version 2"]), {"v": "2"}, options)


class TestDiagnostics:
    def test_css_mismatch_report(self) -> None:
        options = Options()
        item = _item("## file: style.css\nbody {\n", options)
        with pytest.raises(ContentMismatch) as exc:
            match_item(item, _stream(["bddy {"]), {}, options)
        err = exc.value
        assert err.offset == 1
        report = format_error(err, "style.css").split("\n")
        assert report[1] == "1 | bddy {"
        assert report[2] == "  |  ^^^^^"
        assert "expected 'body {', found 'bddy {'" in str(err)

    def test_alternative_markers(self) -> None:
        options = Options(skip_marker="...", item_marker="%%", var_start="<<", var_end=">>")
        text = "%% file: f\nname=<<n>>\n...\nend\n"
        item = _item(text, options)
        match_item(item, _stream(["name=x", "..", "end"]), {"n": "x"}, options)
