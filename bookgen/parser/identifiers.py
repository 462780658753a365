"""Validate chapter and article ids and collect the book URLs."""

from __future__ import annotations

import logging

from attrs import define, field

from bookgen.errors import DuplicateArticleError, DuplicateChapterError

from .article import Article
from .chapter import Chapter
from .types import ChapterList, ErrorList, UrlList

logger = logging.getLogger(__name__)


@define(slots=True)
class IdentifierManifest:
    """Ids seen in a book and the URLs they produce.

    Attributes:
        ids: Every chapter and article id that was accepted.
        urls: File name bases of accepted chapters and articles, in book
            order.
        errors: Duplicate article ids found while validating.
    """

    ids: set[str] = field(factory=set)
    urls: UrlList = field(factory=list)
    errors: ErrorList = field(factory=list)


def ensure_unique_ids(chapters: ChapterList) -> IdentifierManifest:
    """Check that chapter and article ids are unique within a book.

    Stable URLs are derived from ids, so a duplicate would make two pages
    share one URL.

    Args:
        chapters: Chapters in their final order.

    Returns:
        The manifest of accepted ids and URLs. Duplicate article ids are
        recorded in ``errors`` and left out of ``urls``.

    Raises:
        DuplicateChapterError: If two chapters share an id.
    """

    manifest = IdentifierManifest()
    chapter_ids: dict[str, Chapter] = {}
    article_ids: dict[str, Article] = {}

    for chapter in chapters:
        seen_chapter = chapter_ids.get(chapter.chapter_id)
        if seen_chapter is not None:
            raise DuplicateChapterError(seen_chapter, chapter)
        chapter_ids[chapter.chapter_id] = chapter
        manifest.ids.add(chapter.chapter_id)
        manifest.urls.append(chapter.file_name_base)

        for article in chapter.articles:
            seen_article = article_ids.get(article.article_id)
            if seen_article is not None:
                err = DuplicateArticleError(seen_article, article)
                logger.error(str(err))
                manifest.errors.append(err)
                continue
            article_ids[article.article_id] = article
            manifest.ids.add(article.article_id)
            manifest.urls.append(article.file_name_base)

    return manifest
