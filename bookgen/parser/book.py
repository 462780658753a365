"""Book grouping chapters, articles and contributors."""

from __future__ import annotations

from pathlib import Path

from attrs import define, field

from .site import GITHUB_TEXT, GITHUB_URL, SITE_URL, URL_PREFIX
from .types import ChapterList, ContributorList, ErrorList, UrlList


@define(slots=True)
class Book:
    """Book grouping chapters, articles and contributors.

    Attributes:
        title: Book name such as "Go".
        title_safe: URL-safe form of ``title``.
        title_long: Display title such as "Essential Go".
        file_name_base: Directory name used for the book output and URLs.
        source_dir: Directory holding the chapter directories.
        chapters: Ordered chapters; the last one lists the contributors.
        contributors: Contributors sorted by name.
        known_urls: File name bases of all chapters and articles, in book
            order.
        errors: Non-fatal errors recorded while assembling the book.
    """

    title: str
    title_safe: str
    title_long: str
    file_name_base: str
    source_dir: Path
    chapters: ChapterList = field(factory=list, repr=False)
    contributors: ContributorList = field(factory=list, repr=False)
    known_urls: UrlList = field(factory=list, repr=False)
    errors: ErrorList = field(factory=list, repr=False, eq=False)
    _articles_count: int | None = field(
        default=None, init=False, repr=False, eq=False
    )

    @property
    def url(self) -> str:
        return f"{URL_PREFIX}/{self.title_safe}/"

    @property
    def canonical_url(self) -> str:
        return SITE_URL + self.url

    @property
    def github_text(self) -> str:
        return GITHUB_TEXT

    @property
    def github_url(self) -> str:
        return f"{GITHUB_URL}/tree/master/books/{self.source_dir.name}"

    @property
    def contributors_url(self) -> str:
        return self.url + "ch-contributors"

    @property
    def toc_search_js_url(self) -> str:
        return self.url + "toc_search.js"

    @property
    def share_on_twitter_text(self) -> str:
        return f'"{self.title_long}" - a free programming book'

    @property
    def contributor_count(self) -> int:
        return len(self.contributors)

    @property
    def chapters_count(self) -> int:
        return len(self.chapters)

    @property
    def articles_count(self) -> int:
        """Return the number of articles, computed once.

        The index document of every chapter counts as an article.
        """

        if self._articles_count is None:
            n = sum(len(ch.articles) for ch in self.chapters)
            self._articles_count = n + len(self.chapters)
        return self._articles_count
