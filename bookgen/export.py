"""Plain-data views of an assembled book."""

from __future__ import annotations

from typing import Any

from bookgen.parser.article import Article
from bookgen.parser.book import Book
from bookgen.parser.chapter import Chapter

JSONDict = dict[str, Any]


def _article_to_dict(article: Article) -> JSONDict:
    return {
        "article_id": article.article_id,
        "no": article.no,
        "title": article.title,
        "file_name_base": article.file_name_base,
        "url": article.url,
        "canonical_url": article.canonical_url,
        "github_url": article.github_url,
        "source_path": str(article.source_path),
        "body_markdown": article.body_markdown,
        "body_html": article.body_html,
        "siblings": [s.article_id for s in article.siblings],
    }


def _chapter_to_dict(chapter: Chapter) -> JSONDict:
    return {
        "chapter_id": chapter.chapter_id,
        "no": chapter.no,
        "title": chapter.title,
        "file_name_base": chapter.file_name_base,
        "url": chapter.url,
        "canonical_url": chapter.canonical_url,
        "github_url": chapter.github_url,
        "index_path": str(chapter.index_path) if chapter.index_path else None,
        "body": chapter.body,
        "articles": [_article_to_dict(a) for a in chapter.articles],
    }


def book_to_dict(book: Book) -> JSONDict:
    """Return a JSON-compatible representation of ``book``.

    Back-references from articles and chapters to their parents are
    replaced by the URLs they produce.

    Args:
        book: Assembled book.

    Returns:
        Nested dictionaries and lists describing the book.
    """

    return {
        "book": {
            "title": book.title,
            "title_long": book.title_long,
            "file_name_base": book.file_name_base,
            "url": book.url,
            "canonical_url": book.canonical_url,
            "chapters_count": book.chapters_count,
            "articles_count": book.articles_count,
        },
        "contributors": [
            {"user_id": c.user_id, "name": c.name, "url": c.url}
            for c in book.contributors
        ],
        "chapters": [_chapter_to_dict(ch) for ch in book.chapters],
        "urls": list(book.known_urls),
        "errors": [str(e) for e in book.errors],
    }
