"""Exception hierarchy used while assembling books."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bookgen.parser.article import Article
    from bookgen.parser.chapter import Chapter


class BookgenError(Exception):
    """Base class for every error raised by ``bookgen``.

    Attributes:
        path: File or directory the error refers to, when known.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class BookIOError(BookgenError, OSError):
    """A file or directory could not be read."""


class IncludeError(BookIOError):
    """An ``@file`` directive could not be resolved."""


class FormatError(BookgenError, ValueError):
    """A source document is malformed or misses a required field."""


class KeyNotFoundError(FormatError):
    """A key is absent from a KV document."""

    def __init__(self, key: str, path: Path | str | None = None) -> None:
        where = f" in '{path}'" if path is not None else ""
        super().__init__(f"key '{key}' not found{where}", path)
        self.key = key


class IdentifierError(FormatError):
    """An identifier is not usable in a URL."""


class ContributorError(BookgenError):
    """A contributor id could not be resolved to a name."""


class ConsistencyError(BookgenError):
    """The assembled book violates a book-wide invariant."""


class DuplicateChapterError(ConsistencyError):
    """Two chapters of the same book declare the same id."""

    def __init__(self, first: Chapter, second: Chapter) -> None:
        super().__init__(
            f"Duplicate chapter id '{second.chapter_id}' in:\n"
            f"Chapter '{second.title}', file: '{second.index_path}'\n"
            f"Chapter '{first.title}', file: '{first.index_path}'",
            second.index_path,
        )
        self.first = first
        self.second = second


class DuplicateArticleError(ConsistencyError):
    """Two articles of the same book declare the same id."""

    def __init__(self, first: Article, second: Article) -> None:
        super().__init__(
            f"Duplicate article id: '{second.article_id}', in: "
            f"{second.source_path} and {first.source_path}",
            second.source_path,
        )
        self.first = first
        self.second = second
