"""Parse a chapter directory and its articles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from bookgen.errors import (
    BookgenError,
    BookIOError,
    FormatError,
    IdentifierError,
)

from .article import Article
from .chapter import INDEX_FILE_NAME, Chapter
from .kvdoc import KVDoc, dump_kv, parse_kv_file_with_includes
from .siblings import build_siblings
from .types import ArticleList
from .utils import has_whitespace, make_url_safe

if TYPE_CHECKING:
    from .book import Book

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "No Title"
ARTICLE_EXT = ".md"


def _required_id(doc: KVDoc, path: Path, what: str) -> str:
    """Return the ``Id`` field of ``doc``; it must be non-empty, no spaces."""

    try:
        value = doc.get_value("Id")
    except FormatError as exc:
        raise FormatError(f"{what} '{path}': missing Id", path) from exc

    if not value:
        raise IdentifierError(f"{what} '{path}': empty id", path)
    if has_whitespace(value):
        raise IdentifierError(
            f"{what} '{path}': id '{value}' contains whitespace", path
        )
    return value


def parse_article(path: Path) -> Article:
    """Parse a single article file.

    Args:
        path: Location of the article source.

    Returns:
        The parsed article, not yet attached to a chapter.

    Raises:
        BookIOError: If the file cannot be read.
        FormatError: If ``Id`` or the body is missing.
        IdentifierError: If the id is empty or contains whitespace.
    """

    doc = parse_kv_file_with_includes(path)
    article_id = _required_id(doc, path, "article")

    title = doc.get_value_silent("Title", DEFAULT_TITLE)
    if title == DEFAULT_TITLE:
        logger.warning(f"parse_article: no title for {path}")

    article = Article(
        article_id=article_id,
        title=title,
        file_name_base=f"a-{article_id}-{make_url_safe(title)}",
        source_path=path,
    )

    # Markdown body wins; pre-rendered HTML is used as a fallback.
    article.body_markdown = doc.get_value_silent("Body", "")
    if "Body" in doc.keys():
        return article
    if "BodyHtml" in doc.keys():
        article.body_html = doc.get_value("BodyHtml")
        return article

    dump_kv(doc)
    raise FormatError(f"article '{path}': missing Body and BodyHtml", path)


def _article_paths(chapter_dir: Path) -> list[Path]:
    """Return the article files of ``chapter_dir`` in listing order."""

    try:
        entries = sorted(chapter_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise BookIOError(
            f"cannot list chapter '{chapter_dir}': {exc}", chapter_dir
        ) from exc

    paths: list[Path] = []
    for entry in entries:
        # Only regular files; directories and symlinks are ignored.
        if entry.is_symlink() or not entry.is_file():
            continue
        if entry.suffix.lower() != ARTICLE_EXT:
            continue
        if entry.name.lower() == INDEX_FILE_NAME:
            continue
        paths.append(entry)
    return paths


def parse_chapter(
    chapter_dir: Path, *, strict: bool, book: Book | None = None
) -> Chapter:
    """Parse the index document and every article of ``chapter_dir``.

    Args:
        chapter_dir: Directory containing ``000-index.md`` and the articles.
        strict: Abort on the first malformed article when ``True``; skip it
            with a warning otherwise. Skipped articles do not take a number.
        book: Book the chapter belongs to.

    Returns:
        The chapter with its articles numbered and siblings attached.

    Raises:
        BookIOError: If the index or an article cannot be read.
        FormatError: If the index misses ``Title`` or ``Id``, or (in strict
            mode) an article is malformed.
        IdentifierError: If an id is empty or contains whitespace.
    """

    chapter_dir = Path(chapter_dir)
    index_path = chapter_dir / INDEX_FILE_NAME
    chapter = Chapter(
        chapter_dir=chapter_dir.name, book=book, index_path=index_path
    )

    doc = parse_kv_file_with_includes(index_path)
    chapter.index_doc = doc

    try:
        chapter.title = doc.get_value("Title")
    except FormatError as exc:
        raise FormatError(
            f"chapter '{index_path}': missing Title", index_path
        ) from exc
    chapter.chapter_id = _required_id(doc, index_path, "chapter")
    chapter.file_name_base = (
        f"ch-{chapter.chapter_id}-{make_url_safe(chapter.title)}"
    )

    articles: ArticleList = []
    for path in _article_paths(chapter_dir):
        try:
            article = parse_article(path)
        except BookgenError as exc:
            if strict:
                raise
            logger.warning(f"Skipping article {path}: {exc}")
            continue

        article.chapter = chapter
        article.no = len(articles) + 1
        articles.append(article)

    chapter.articles = articles
    build_siblings(articles)
    logger.debug(
        f"Parsed chapter '{chapter.title}' with {len(articles)} articles"
    )
    return chapter
