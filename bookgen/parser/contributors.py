"""Load Stack Overflow contributors and build the contributors chapter."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote

import yaml  # type: ignore[import-untyped]

from bookgen.errors import BookIOError, ContributorError, FormatError
from bookgen.json_utils import json_loads

from .chapter import Chapter
from .contributor import Contributor
from .kvdoc import KeyValue, KVDoc
from .types import ContributorList

if TYPE_CHECKING:
    from .book import Book

CONTRIBUTORS_FILE_NAME = "so_contributors.txt"
CONTRIBUTORS_FILE_NAME_BASE = "ch-contributors"
DELETED_USER = "user_deleted"

GITHUB_CONTRIBUTORS_URL = (
    "https://github.com/essentialbooks/books/graphs/contributors"
)

UserNames = dict[int, str]
NameResolver = Callable[[int], "str | None"]

# User name maps keyed by path; each file is read at most once.
_USER_NAMES: dict[Path, UserNames] = {}
_USER_NAMES_LOCK = threading.Lock()


def _read_user_names(path: Path) -> UserNames:
    """Read a YAML or JSON mapping of user ids to URL names."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BookIOError(f"cannot read '{path}': {exc}", path) from exc
    except UnicodeDecodeError as exc:
        raise FormatError(
            f"'{path}' is not valid UTF-8: {exc}", path
        ) from exc

    # Decode JSON or YAML depending on file extension.
    if path.suffix == ".json":
        data = json_loads(text)
    else:
        data = yaml.safe_load(text)

    if not isinstance(data, dict):
        raise ContributorError(f"'{path}' does not hold a mapping", path)
    try:
        return {int(k): str(v) for k, v in data.items()}
    except ValueError as exc:
        raise ContributorError(f"'{path}': {exc}", path) from exc


def load_user_names(path: Path) -> UserNames:
    """Return the user name map stored at ``path``, loading it once."""

    path = Path(path).resolve()
    with _USER_NAMES_LOCK:
        names = _USER_NAMES.get(path)
        if names is None:
            names = _read_user_names(path)
            _USER_NAMES[path] = names
    return names


def load_contributors(path: Path, resolve: NameResolver) -> ContributorList:
    """Read contributor ids from ``path`` and resolve their names.

    Args:
        path: File with one integer user id per line.
        resolve: Returns the URL name for an id, or ``None`` if unknown.

    Returns:
        Contributors sorted by display name. Deleted users are left out.

    Raises:
        ContributorError: If a line is not an integer or an id is unknown.
    """

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise BookIOError(f"cannot read '{path}': {exc}", path) from exc
    except UnicodeDecodeError as exc:
        raise FormatError(
            f"'{path}' is not valid UTF-8: {exc}", path
        ) from exc

    contributors: ContributorList = []
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            user_id = int(line)
        except ValueError as exc:
            raise ContributorError(
                f"{path}:{line_no}: '{line}' is not a user id", path
            ) from exc

        name = resolve(user_id)
        if not name:
            raise ContributorError(
                f"{path}:{line_no}: no contributor for id {user_id}", path
            )
        if name == DELETED_USER:
            continue
        contributors.append(
            Contributor(user_id=user_id, url_part=name, name=unquote(name))
        )

    contributors.sort(key=lambda c: c.name)
    return contributors


def contributors_markdown(contributors: ContributorList) -> str:
    """Return the markdown body of the contributors chapter."""

    if not contributors:
        return ""
    lines = [
        f"Contributors from [GitHub]({GITHUB_CONTRIBUTORS_URL})",
        "",
        "Contributors from Stack Overflow:",
    ]
    lines.extend(f"* [{c.name}]({c.url})" for c in contributors)
    return "\n".join(lines)


def build_contributors_chapter(book: Book) -> Chapter:
    """Return the synthetic chapter listing the contributors of ``book``."""

    doc = KVDoc([KeyValue("Body", contributors_markdown(book.contributors))])
    return Chapter(
        chapter_dir="",
        book=book,
        title="Contributors",
        file_name_base=CONTRIBUTORS_FILE_NAME_BASE,
        index_doc=doc,
    )
