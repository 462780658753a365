"""Common type aliases for parser structures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .article import Article  # noqa: F401
    from .chapter import Chapter  # noqa: F401
    from .contributor import Contributor  # noqa: F401
    from .siblings import SiblingSummary  # noqa: F401


ArticleList = list["Article"]
ChapterList = list["Chapter"]
ContributorList = list["Contributor"]
SiblingList = list["SiblingSummary"]
UrlList = list[str]
ErrorList = list[Exception]
