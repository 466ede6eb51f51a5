"""Unit tests for specker.walker."""

from pathlib import Path

import pytest

from specker.errors import ParseError
from specker.models import Options
from specker.walker import find_spec_files, walk_spec_dir


class TestFindSpecFiles:
    def test_sorted_recursive(self, tmp_path: Path) -> None:
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "a.txt").write_text("")
        (tmp_path / "ignored.md").write_text("")
        files = find_spec_files(tmp_path, "txt")
        assert files == [tmp_path / "b.txt", tmp_path / "nested" / "a.txt"]

    def test_extension_with_dot(self, tmp_path: Path) -> None:
        (tmp_path / "a.spec").write_text("")
        assert find_spec_files(tmp_path, ".spec") == [tmp_path / "a.spec"]

    def test_hidden_dirs_skipped(self, tmp_path: Path) -> None:
        (tmp_path / ".cache").mkdir()
        (tmp_path / ".cache" / "a.txt").write_text("")
        assert find_spec_files(tmp_path, "txt") == []


class TestWalkSpecDir:
    def test_yields_parsed_documents(self, spec_project: Path, options: Options) -> None:
        found = list(walk_spec_dir(spec_project, "txt", options))
        assert len(found) == 1
        assert found[0].relative == Path("site.txt")
        assert len(found[0].document) == 2

    def test_parse_error_names_file(self, tmp_path: Path, options: Options) -> None:
        (tmp_path / "bad.txt").write_text("## nocolon\n")
        with pytest.raises(ParseError) as exc:
            list(walk_spec_dir(tmp_path, "txt", options))
        assert exc.value.source_file == str(tmp_path / "bad.txt")

    def test_missing_dir(self, tmp_path: Path, options: Options) -> None:
        with pytest.raises(FileNotFoundError):
            list(walk_spec_dir(tmp_path / "nope", "txt", options))

    def test_undecodable_file_raises(self, tmp_path: Path, options: Options) -> None:
        (tmp_path / "bad.txt").write_bytes(b"\xff\xfe\n")
        with pytest.raises(UnicodeDecodeError):
            list(walk_spec_dir(tmp_path, "txt", options))

    def test_on_error_continues(self, tmp_path: Path, options: Options) -> None:
        (tmp_path / "a.txt").write_text("## nocolon\n")
        (tmp_path / "b.txt").write_bytes(b"\xff\xfe\n")
        (tmp_path / "c.txt").write_text("## file: out\nx\n")
        errors: list[tuple[Path, Exception]] = []

        found = list(walk_spec_dir(
            tmp_path, "txt", options, on_error=lambda p, e: errors.append((p, e))
        ))

        assert [s.relative for s in found] == [Path("c.txt")]
        assert [p.name for p, _ in errors] == ["a.txt", "b.txt"]
        assert isinstance(errors[0][1], ParseError)
        assert isinstance(errors[1][1], UnicodeDecodeError)
