"""Chapter grouping the articles of one source directory."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import quote

from attrs import define, field

from .kvdoc import KVDoc
from .site import GITHUB_TEXT, GITHUB_URL, SITE_URL, URL_PREFIX
from .types import ArticleList

if TYPE_CHECKING:
    from .book import Book

INDEX_FILE_NAME = "000-index.md"


@define(slots=True)
class Chapter:
    """Chapter grouping the articles of one source directory.

    Attributes:
        chapter_dir: Name of the chapter directory inside the book sources.
        book: Book owning the chapter.
        chapter_id: Stable identifier, unique within the book.
        title: Chapter title from the index document.
        file_name_base: Base of the output file name and URL, formatted as
            ``ch-{chapter_id}-{slug}``.
        index_path: Path of the ``000-index.md`` document.
        index_doc: Parsed index document.
        articles: Ordered articles of the chapter.
        no: 1-based position of the chapter in the book.
    """

    chapter_dir: str
    book: Book | None = field(default=None, repr=False, eq=False)
    chapter_id: str = ""
    title: str = ""
    file_name_base: str = ""
    index_path: Path | None = None
    index_doc: KVDoc = field(factory=KVDoc, repr=False, eq=False)
    articles: ArticleList = field(factory=list, repr=False)
    no: int = 0

    @property
    def url(self) -> str:
        # /essential/go/ch-4023-parsing-command-line-arguments-and-flags
        book_base = self.book.file_name_base if self.book else ""
        return f"{URL_PREFIX}/{book_base}/{self.file_name_base}"

    @property
    def canonical_url(self) -> str:
        return SITE_URL + self.url

    @property
    def github_text(self) -> str:
        return GITHUB_TEXT

    @property
    def github_url(self) -> str:
        book_url = self.book.github_url if self.book else GITHUB_URL
        return f"{book_url}/{self.chapter_dir}"

    @property
    def github_edit_url(self) -> str:
        """Return the GitHub page of the chapter index document."""

        book_dir = self.book.source_dir.name if self.book else ""
        return (
            f"{GITHUB_URL}/blob/master/books/{book_dir}/"
            f"{self.chapter_dir}/{INDEX_FILE_NAME}"
        )

    @property
    def github_issue_url(self) -> str:
        title = f"Issue for chapter '{self.title}'"
        body = (
            f"From URL: {self.canonical_url}\n"
            f"File: {self.github_edit_url}\n"
        )
        return (
            f"{GITHUB_URL}/issues/new?title={quote(title)}"
            f"&body={quote(body)}&labels=docs"
        )

    # Raw sections of the index document. Markdown conversion happens when
    # the chapter is rendered.

    @property
    def body(self) -> str:
        return self.index_doc.get_value_silent("Body", "")

    @property
    def introduction(self) -> str:
        return self.index_doc.get_value_silent("Introduction", "")

    @property
    def syntax(self) -> str:
        return self.index_doc.get_value_silent("Syntax", "")

    @property
    def remarks(self) -> str:
        return self.index_doc.get_value_silent("Remarks", "")

    @property
    def contributors(self) -> str:
        return self.index_doc.get_value_silent("Contributors", "")

    @property
    def versions_html(self) -> str:
        return self.index_doc.get_value_silent("VersionsHtml", "")
