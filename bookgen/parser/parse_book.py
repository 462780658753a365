"""Assemble a book from its source directory."""

from __future__ import annotations

import logging
import time
from functools import partial
from pathlib import Path

from bookgen.errors import BookIOError, FormatError

from .book import Book
from .contributors import (
    CONTRIBUTORS_FILE_NAME,
    NameResolver,
    build_contributors_chapter,
    load_contributors,
    load_user_names,
)
from .identifiers import ensure_unique_ids
from .options import ParseOptions
from .parse_chapter import parse_chapter
from .types import ChapterList
from .utils import make_url_safe
from .workers import first_error, parse_chapters

logger = logging.getLogger(__name__)

TOC_FILE_NAME = "toc.txt"


def _default_resolver(options: ParseOptions) -> NameResolver:
    """Return a resolver backed by the configured user name map."""

    if options.user_names is None:
        return lambda user_id: None
    names = load_user_names(options.user_names)
    return names.get


def _scan_book_dir(
    book: Book, resolve: NameResolver | None, options: ParseOptions
) -> list[Path]:
    """Load top-level files of the book and return its chapter directories."""

    try:
        entries = sorted(book.source_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise BookIOError(
            f"cannot list book '{book.source_dir}': {exc}", book.source_dir
        ) from exc

    chapter_dirs: list[Path] = []
    for entry in entries:
        if entry.is_dir():
            chapter_dirs.append(entry)
            continue

        name = entry.name.lower()
        if name == TOC_FILE_NAME:
            continue
        if name == CONTRIBUTORS_FILE_NAME:
            resolver = resolve or _default_resolver(options)
            book.contributors = load_contributors(entry, resolver)
            continue
        raise FormatError(
            f"Unexpected file at top-level: '{entry.name}'", entry
        )

    return chapter_dirs


def _renumber(chapters: ChapterList) -> None:
    """Assign dense 1-based numbers to chapters and their articles."""

    for chapter_no, chapter in enumerate(chapters, start=1):
        chapter.no = chapter_no
        for article_no, article in enumerate(chapter.articles, start=1):
            article.no = article_no


def parse_book(
    book_name: str,
    options: ParseOptions,
    resolve: NameResolver | None = None,
) -> Book:
    """Parse every chapter of a book and validate the result.

    Args:
        book_name: Book name such as "Go"; the sources are read from
            ``options.books_dir / make_url_safe(book_name)``.
        options: Parsing options.
        resolve: Maps contributor ids to URL names. Defaults to the map
            loaded from ``options.user_names``.

    Returns:
        The assembled book. Duplicate article ids and, in non-strict mode,
        chapters that failed to parse are recorded in ``book.errors``.

    Raises:
        BookIOError: If the book directory or a source cannot be read.
        FormatError: If a source is malformed (strict mode).
        ContributorError: If a contributor id cannot be resolved.
        DuplicateChapterError: If two chapters share an id.
    """

    time_start = time.perf_counter()
    logger.info(f"Parsing book {book_name}")

    title_safe = make_url_safe(book_name)
    book = Book(
        title=book_name,
        title_safe=title_safe,
        title_long=f"Essential {book_name}",
        file_name_base=title_safe,
        source_dir=options.books_dir / title_safe,
    )

    chapter_dirs = _scan_book_dir(book, resolve, options)
    parse = partial(parse_chapter, strict=options.strict, book=book)
    outcomes = parse_chapters(chapter_dirs, parse, options.workers)

    if options.strict:
        err = first_error(outcomes)
        if err is not None:
            raise err

    chapters: ChapterList = []
    for outcome in outcomes:
        if outcome.chapter is None:
            logger.warning(
                f"Skipping chapter {outcome.chapter_dir}: {outcome.error}"
            )
            if outcome.error is not None:
                book.errors.append(outcome.error)
            continue
        chapters.append(outcome.chapter)

    chapters.append(build_contributors_chapter(book))
    _renumber(chapters)
    book.chapters = chapters

    manifest = ensure_unique_ids(chapters)
    book.known_urls = manifest.urls
    book.errors.extend(manifest.errors)

    elapsed = time.perf_counter() - time_start
    logger.info(
        f"Book '{book_name}' {book.chapters_count} chapters, "
        f"{book.articles_count} articles, finished parsing in {elapsed:.2f}s"
    )
    return book
