"""Shared fixtures that build book source trees on disk."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

DocWriter = Callable[..., Path]


def _write_doc(path: Path, **fields: str) -> Path:
    """Write a KV document with one entry per keyword argument."""

    lines: list[str] = []
    for key, value in fields.items():
        if "\n" in value:
            lines.append(f"{key}:")
            lines.extend(value.split("\n"))
        else:
            lines.append(f"{key}: {value}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_doc() -> DocWriter:
    """Return a helper writing KV documents."""
    return _write_doc


@pytest.fixture
def books_dir(tmp_path: Path) -> Path:
    """Create a ``books/go`` tree with two chapters and contributors."""

    root = tmp_path / "books"
    book = root / "go"

    intro = book / "01-intro"
    _write_doc(intro / "000-index.md", Id="100", Title="Getting started")
    _write_doc(
        intro / "01-hello.md",
        Id="101",
        Title="Hello World",
        Body="Print a greeting.\n\nThat is all.",
    )
    _write_doc(
        intro / "02-vars.MD",
        Id="102",
        Title="Variables",
        BodyHtml="<p>var x int</p>",
    )
    (intro / "notes.txt").write_text("not an article", encoding="utf-8")

    flags = book / "02-flags"
    _write_doc(flags / "000-index.md", Id="200", Title="Command-line flags")
    _write_doc(
        flags / "01-flag.md", Id="201", Title="Flag package", Body="flag.Int"
    )

    (book / "so_contributors.txt").write_text("3\n1\n\n", encoding="utf-8")
    (book / "toc.txt").write_text("ignored", encoding="utf-8")
    return root


@pytest.fixture
def user_names() -> dict[int, str]:
    """Contributor ids used by the ``books_dir`` fixture."""
    return {1: "alice", 3: "Bob%20Smith", 7: "user_deleted"}
