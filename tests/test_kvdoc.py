"""Tests for KV document parsing and include expansion."""

from pathlib import Path

import pytest

from bookgen.errors import FormatError, KeyNotFoundError
from bookgen.parser import kvdoc


def test_parse_single_and_multiline_entries() -> None:
    """Ensure inline and multi-line values are parsed and trimmed."""

    doc = kvdoc.parse_kv_lines(
        [
            "Id: 42",
            "Title: Intro",
            "Body:",
            "",
            "first line",
            "second line",
            "",
            "",
        ]
    )
    assert doc.keys() == ["Id", "Title", "Body"]
    assert doc.get_value("Id") == "42"
    assert doc.get_value("Body") == "first line\nsecond line"


def test_duplicate_keys_first_match_wins() -> None:
    """Ensure repeated keys are kept and lookups return the first."""

    doc = kvdoc.parse_kv_lines(["Title: one", "Title: two"])
    assert len(doc) == 2
    assert doc.get_value("Title") == "one"
    assert [kv.value for kv in doc] == ["one", "two"]


def test_missing_key() -> None:
    """Ensure a missing key raises with the key and path."""

    doc = kvdoc.parse_kv_lines(["Id: 1"], path="a.md")
    with pytest.raises(KeyNotFoundError) as info:
        doc.get_value("Body")
    assert info.value.key == "Body"
    assert info.value.path == Path("a.md")
    assert doc.get_value_silent("Body", "none") == "none"


def test_text_before_first_key_is_rejected() -> None:
    """Ensure text before the first key is a format error."""

    with pytest.raises(FormatError):
        kvdoc.parse_kv_lines(["", "stray text", "Id: 1"])


def test_colon_without_space_is_not_a_key() -> None:
    """Ensure only ``Key:`` or ``Key: value`` starts an entry."""

    doc = kvdoc.parse_kv_lines(
        ["Body:", "See http://example.com", "Note:not a key", "lower: text"]
    )
    assert doc.keys() == ["Body"]
    assert doc.get_value("Body") == (
        "See http://example.com\nNote:not a key\nlower: text"
    )


def test_parse_file_normalizes_crlf(tmp_path: Path) -> None:
    """Ensure CRLF line endings are normalized."""

    path = tmp_path / "a.md"
    path.write_bytes(b"Id: 1\r\nBody:\r\nline\r\n")
    doc = kvdoc.parse_kv_file(path)
    assert doc.get_value("Body") == "line"
    assert doc.path == path


def test_include_is_replaced_by_snippet_lines(tmp_path: Path) -> None:
    """Ensure an include directive is replaced by a fenced snippet."""

    snippets = tmp_path / "snippets"
    snippets.mkdir()
    (snippets / "x.go").write_text(
        "package main\n\nfunc main() {}\n", encoding="utf-8"
    )
    path = tmp_path / "a.md"
    path.write_text(
        "Id: 1\nBody:\nBefore\n@file snippets/x.go\nAfter\n", encoding="utf-8"
    )

    doc = kvdoc.parse_kv_file_with_includes(path)
    assert doc.get_value("Body").split("\n") == [
        "Before",
        "```go",
        "package main",
        "",
        "func main() {}",
        "```",
        "After",
    ]


def test_missing_include_falls_back_to_raw_file(tmp_path: Path) -> None:
    """Ensure a missing snippet keeps the directive as text."""

    path = tmp_path / "a.md"
    path.write_text(
        "Id: 1\nBody:\nBefore\n@file snippets/x.go\nAfter\n", encoding="utf-8"
    )

    doc = kvdoc.parse_kv_file_with_includes(path)
    assert "@file snippets/x.go" in doc.get_value("Body").split("\n")


def test_missing_source_file_raises(tmp_path: Path) -> None:
    """Ensure a missing source file is an OS error."""

    with pytest.raises(OSError):
        kvdoc.parse_kv_file_with_includes(tmp_path / "missing.md")


def test_dump_kv_logs_entries(caplog: pytest.LogCaptureFixture) -> None:
    """Ensure dumped entries are logged with shortened values."""

    doc = kvdoc.parse_kv_lines(["Id: 1", "Body:", "x" * 200])
    kvdoc.dump_kv(doc)
    assert "K: Id" in caplog.text
    assert "K: Body" in caplog.text
    assert "x" * 200 not in caplog.text


def test_text_after_single_line_entry_is_rejected() -> None:
    """Ensure stray text after an inline value is rejected."""

    with pytest.raises(FormatError) as info:
        kvdoc.parse_kv_lines(["Title: Intro", "stray", "Id: 1"], "a.md")
    assert info.value.path == Path("a.md")
    assert ":2:" in str(info.value)


def test_blank_lines_after_single_line_entry() -> None:
    """Ensure blank lines may separate single-line entries."""

    doc = kvdoc.parse_kv_lines(["Title: Intro", "", "  ", "Id: 1"])
    assert doc.get_value("Title") == "Intro"
    assert doc.get_value("Id") == "1"


def test_non_utf8_source_is_a_format_error(tmp_path: Path) -> None:
    """Ensure an undecodable source is a format error with its path."""

    path = tmp_path / "a.md"
    path.write_bytes(b"Id: 1\nBody:\n\xff\n")
    with pytest.raises(FormatError) as info:
        kvdoc.parse_kv_file_with_includes(path)
    assert info.value.path == path


def test_binary_include_falls_back_to_raw_file(tmp_path: Path) -> None:
    """Ensure an undecodable snippet keeps the directive as text."""

    snippets = tmp_path / "snippets"
    snippets.mkdir()
    (snippets / "x.go").write_bytes(b"\xff\xfe\x00bad")
    path = tmp_path / "a.md"
    path.write_text(
        "Id: 1\nBody:\nBefore\n@file snippets/x.go\nAfter\n", encoding="utf-8"
    )

    doc = kvdoc.parse_kv_file_with_includes(path)
    assert doc.get_value("Body").split("\n") == [
        "Before",
        "@file snippets/x.go",
        "After",
    ]
