"""Tests for ``@file`` snippet extraction."""

from pathlib import Path

import pytest

from bookgen.errors import IncludeError
from bookgen.parser import snippets


def test_show_regions_and_hidden_lines(tmp_path: Path) -> None:
    """Ensure show regions and hidden lines filter the snippet."""

    (tmp_path / "main.py").write_text(
        "import os\n"
        "# :show start\n"
        "print(os.name)\n"
        "debug()  # :hide\n"
        "print('done')\n"
        "# :show end\n"
        "cleanup()\n",
        encoding="utf-8",
    )
    lines = snippets.extract_snippet_lines(tmp_path, "@file main.py")
    assert lines == ["```python", "print(os.name)", "print('done')", "```"]


def test_unknown_extension_has_bare_fence(tmp_path: Path) -> None:
    """Ensure unknown extensions get a fence without a language."""

    (tmp_path / "data.txt").write_text("a\nb\n", encoding="utf-8")
    lines = snippets.extract_snippet_lines(
        tmp_path, "@file data.txt no_output"
    )
    assert lines == ["```", "a", "b", "```"]


def test_nested_includes_resolve_relative_to_snippet(tmp_path: Path) -> None:
    """Ensure nested includes resolve against the snippet directory."""

    inner = tmp_path / "code" / "lib"
    inner.mkdir(parents=True)
    (inner / "util.go").write_text("func util() {}\n", encoding="utf-8")
    (tmp_path / "code" / "main.go").write_text(
        "package main\n@file lib/util.go\n", encoding="utf-8"
    )

    lines = snippets.extract_snippet_lines(tmp_path, "@file code/main.go")
    assert lines == [
        "```go",
        "package main",
        "```go",
        "func util() {}",
        "```",
        "```",
    ]


def test_include_cycle(tmp_path: Path) -> None:
    """Ensure an include cycle is reported."""

    (tmp_path / "a.go").write_text("@file b.go\n", encoding="utf-8")
    (tmp_path / "b.go").write_text("@file a.go\n", encoding="utf-8")
    with pytest.raises(IncludeError):
        snippets.extract_snippet_lines(tmp_path, "@file a.go")


@pytest.mark.parametrize("line", ["@file ", "@file x.go bogus"])
def test_bad_directives(tmp_path: Path, line: str) -> None:
    """Ensure malformed directives are rejected."""

    (tmp_path / "x.go").write_text("x\n", encoding="utf-8")
    with pytest.raises(IncludeError):
        snippets.extract_snippet_lines(tmp_path, line)


def test_missing_snippet_is_an_os_error(tmp_path: Path) -> None:
    """Ensure a missing snippet is an OS error."""

    with pytest.raises(OSError):
        snippets.extract_snippet_lines(tmp_path, "@file nope.go")


def test_binary_snippet_is_an_include_error(tmp_path: Path) -> None:
    """Ensure a snippet that is not UTF-8 is an include error."""

    (tmp_path / "x.go").write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(IncludeError) as info:
        snippets.extract_snippet_lines(tmp_path, "@file x.go")
    assert isinstance(info.value, OSError)
    assert info.value.path == (tmp_path / "x.go").resolve()
