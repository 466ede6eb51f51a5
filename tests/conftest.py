"""Shared test fixtures for specker."""

from pathlib import Path

import pytest

from specker.models import Options


@pytest.fixture
def options() -> Options:
    """Default marker conventions."""
    return Options()


@pytest.fixture
def sample_spec_content() -> str:
    """Return a spec with an HTML item and a CSS item."""
    return """\
## file: output/index.html
<html>
..
<body>
..
</html>
## file: output/style.css
body {
    color: ${color};
}
"""


@pytest.fixture
def spec_project(tmp_path: Path, sample_spec_content: str) -> Path:
    """Create a spec directory whose targets all match."""
    spec_dir = tmp_path / "spec"
    spec_dir.mkdir()
    (spec_dir / "site.txt").write_text(sample_spec_content)

    output = spec_dir / "output"
    output.mkdir()
    (output / "index.html").write_text(
        "<html>\n<head></head>\n<body>\n<p>x</p>\n</html>\n"
    )
    (output / "style.css").write_text("body {\n    color: red;\n}\n")
    return spec_dir
