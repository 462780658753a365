"""Tests for contributor loading."""

import json
from pathlib import Path

import pytest

from bookgen.errors import ContributorError, FormatError
from bookgen.parser import contributors
from bookgen.parser.contributor import Contributor


def test_load_contributors_skips_deleted_users(tmp_path: Path) -> None:
    """Ensure deleted users are dropped and names are unquoted."""

    path = tmp_path / "so_contributors.txt"
    path.write_text("7\n2\n1\n", encoding="utf-8")
    names = {1: "zed", 2: "Ann%C3%A9", 7: "user_deleted"}

    result = contributors.load_contributors(path, names.get)

    assert result == [
        Contributor(user_id=2, url_part="Ann%C3%A9", name="Anné"),
        Contributor(user_id=1, url_part="zed", name="zed"),
    ]


def test_non_integer_line_is_fatal(tmp_path: Path) -> None:
    """Ensure a non-numeric line is reported with its line number."""

    path = tmp_path / "so_contributors.txt"
    path.write_text("1\nbob\n", encoding="utf-8")
    with pytest.raises(ContributorError) as info:
        contributors.load_contributors(path, {1: "a"}.get)
    assert ":2:" in str(info.value)


def test_markdown() -> None:
    """Ensure the contributors list renders as markdown links."""

    assert contributors.contributors_markdown([]) == ""
    md = contributors.contributors_markdown(
        [Contributor(user_id=5, url_part="eve", name="eve")]
    )
    assert md.splitlines()[-1] == (
        "* [eve](https://stackoverflow.com/users/5/eve)"
    )


def test_user_names_are_loaded_once(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Ensure the user name file is read only once per path."""

    path = tmp_path / "users.json"
    path.write_text(json.dumps({"1": "alice"}), encoding="utf-8")

    calls = {"count": 0}
    original = contributors._read_user_names

    def counting_reader(p: Path) -> dict[int, str]:
        calls["count"] += 1
        return original(p)

    monkeypatch.setattr(contributors, "_read_user_names", counting_reader)
    monkeypatch.setattr(contributors, "_USER_NAMES", {})

    first = contributors.load_user_names(path)
    second = contributors.load_user_names(path)
    assert first == {1: "alice"}
    assert first is second
    assert calls["count"] == 1


def test_user_names_must_be_a_mapping(tmp_path: Path) -> None:
    """Ensure a user name file that is not a mapping is rejected."""

    path = tmp_path / "users.yaml"
    path.write_text("- alice\n", encoding="utf-8")
    with pytest.raises(ContributorError):
        contributors.load_user_names(path)


def test_non_utf8_contributors_file(tmp_path: Path) -> None:
    """Ensure an undecodable contributors file is a format error."""

    path = tmp_path / "so_contributors.txt"
    path.write_bytes(b"1\n\xff\n")
    with pytest.raises(FormatError) as info:
        contributors.load_contributors(path, {1: "a"}.get)
    assert info.value.path == path
