"""Tests for the per-article table of contents."""

from pathlib import Path

import pytest

from bookgen.parser import Article, SiblingView, build_siblings


def _articles(n: int) -> list[Article]:
    return [
        Article(
            article_id=str(i),
            title=f"Article {i}",
            file_name_base=f"a-{i}-article-{i}",
            source_path=Path(f"{i}.md"),
            no=i,
        )
        for i in range(1, n + 1)
    ]


def test_each_article_sees_itself_as_current() -> None:
    """Ensure the current flag follows the viewing article."""

    articles = _articles(4)
    build_siblings(articles)

    for idx, article in enumerate(articles):
        flags = [s.is_current for s in article.siblings]
        assert flags == [i == idx for i in range(4)]
        assert article.siblings[idx].article_id == article.article_id


def test_view_does_not_touch_articles() -> None:
    """Ensure reading a sibling does not change other views."""

    articles = _articles(2)
    build_siblings(articles)
    summary = articles[0].siblings[1]
    assert summary.title == "Article 2"
    assert summary.no == 2
    assert not summary.is_current
    assert articles[1].siblings[1].is_current


def test_view_indexing() -> None:
    """Ensure sibling views support negative indexes and slices."""

    articles = _articles(3)
    view = SiblingView(articles, 2)
    assert view[-1].is_current
    assert [s.no for s in view[1:]] == [2, 3]
    assert view.current_index == 2
    with pytest.raises(IndexError):
        view[3]


def test_empty_chapter() -> None:
    """Ensure an empty chapter has no siblings to build."""

    articles: list[Article] = []
    build_siblings(articles)
    assert articles == []
