"""Per-article table of contents views over a chapter."""

from __future__ import annotations

from collections.abc import Sequence
from typing import overload

from attrs import define, field

from .article import Article
from .types import ArticleList, SiblingList


@define(slots=True, frozen=True)
class SiblingSummary:
    """Read-only entry of a chapter table of contents.

    Attributes:
        article: Article the entry describes.
        no: 1-based position of the article in its chapter.
        is_current: ``True`` for the entry of the article being rendered.
    """

    article: Article = field(repr=False)
    no: int
    is_current: bool = False

    @property
    def article_id(self) -> str:
        return self.article.article_id

    @property
    def title(self) -> str:
        return self.article.title

    @property
    def file_name_base(self) -> str:
        return self.article.file_name_base

    @property
    def url(self) -> str:
        return self.article.url


class SiblingView(Sequence[SiblingSummary]):
    """Table of contents of a chapter marking one article as current.

    The view keeps a reference to the chapter's article list and the index
    of the current article; summaries are created on access.
    """

    __slots__ = ("_articles", "_current")

    def __init__(self, articles: ArticleList, current: int) -> None:
        self._articles = articles
        self._current = current

    @property
    def current_index(self) -> int:
        return self._current

    def _summary(self, index: int) -> SiblingSummary:
        return SiblingSummary(
            article=self._articles[index],
            no=index + 1,
            is_current=index == self._current,
        )

    @overload
    def __getitem__(self, index: int) -> SiblingSummary: ...

    @overload
    def __getitem__(self, index: slice) -> SiblingList: ...

    def __getitem__(self, index: int | slice) -> SiblingSummary | SiblingList:
        if isinstance(index, slice):
            return [
                self._summary(i)
                for i in range(*index.indices(len(self._articles)))
            ]
        if index < 0:
            index += len(self._articles)
        if not 0 <= index < len(self._articles):
            raise IndexError("sibling index out of range")
        return self._summary(index)

    def __len__(self) -> int:
        return len(self._articles)

    def __repr__(self) -> str:
        return (
            f"SiblingView(len={len(self._articles)}, "
            f"current={self._current})"
        )


def build_siblings(articles: ArticleList) -> None:
    """Attach a table of contents view to every article in ``articles``.

    Args:
        articles: Articles of one chapter in their final order. The list
            is shared by all views, so it must not be reordered afterwards.
    """

    for idx, article in enumerate(articles):
        article.siblings = SiblingView(articles, idx)
