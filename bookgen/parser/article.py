"""Represents a single article of a chapter."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import quote

from attrs import define, field

from .site import GITHUB_TEXT, GITHUB_URL, SITE_URL, URL_PREFIX

if TYPE_CHECKING:
    from .book import Book
    from .chapter import Chapter
    from .siblings import SiblingSummary


@define(slots=True)
class Article:
    """Represents a single article of a chapter.

    Attributes:
        article_id: Stable identifier, unique within the book.
        title: Article title.
        file_name_base: Base of the output file name and URL, formatted as
            ``a-{article_id}-{slug}``.
        source_path: File the article was read from.
        body_markdown: Markdown body from the ``Body`` field.
        body_html: Pre-rendered body from the ``BodyHtml`` field.
        no: 1-based position of the article inside its chapter.
        chapter: Chapter owning the article.
        siblings: Table of contents of the chapter as seen from this article.
    """

    article_id: str
    title: str
    file_name_base: str
    source_path: Path
    body_markdown: str = ""
    body_html: str = ""
    no: int = 0
    chapter: Chapter | None = field(default=None, repr=False, eq=False)
    siblings: Sequence[SiblingSummary] = field(
        factory=list, repr=False, eq=False
    )

    @property
    def book(self) -> Book | None:
        return self.chapter.book if self.chapter else None

    @property
    def url(self) -> str:
        # /essential/go/a-14047-flags
        book = self.book
        book_base = book.file_name_base if book else ""
        return f"{URL_PREFIX}/{book_base}/{self.file_name_base}"

    @property
    def canonical_url(self) -> str:
        return SITE_URL + self.url

    @property
    def github_text(self) -> str:
        return GITHUB_TEXT

    @property
    def github_url(self) -> str:
        """Return the GitHub page showing the article source file."""

        chapter_url = self.chapter.github_url if self.chapter else GITHUB_URL
        uri = f"{chapter_url}/{self.source_path.name}"
        return uri.replace("/tree/", "/blob/")

    @property
    def github_edit_url(self) -> str:
        # Same page as ``github_url``; an /edit/ link would fork the repo.
        return self.github_url

    @property
    def github_issue_url(self) -> str:
        """Return a link that opens a pre-filled GitHub issue."""

        title = f"Issue for article '{self.title}'"
        body = (
            f"From URL: {self.canonical_url}\n"
            f"File: {self.github_edit_url}\n"
        )
        return (
            f"{GITHUB_URL}/issues/new?title={quote(title)}"
            f"&body={quote(body)}&labels=docs"
        )
