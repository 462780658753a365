"""Parser package for book sources."""

from .article import Article
from .book import Book
from .chapter import Chapter
from .contributor import Contributor
from .identifiers import IdentifierManifest, ensure_unique_ids
from .kvdoc import (
    KeyValue,
    KVDoc,
    parse_kv_file,
    parse_kv_file_with_includes,
    parse_kv_lines,
)
from .options import ParseOptions
from .parse_book import parse_book
from .parse_chapter import parse_article, parse_chapter
from .siblings import SiblingSummary, SiblingView, build_siblings
from .workers import parse_chapters

__all__ = [
    "Article",
    "Book",
    "Chapter",
    "Contributor",
    "IdentifierManifest",
    "KVDoc",
    "KeyValue",
    "ParseOptions",
    "SiblingSummary",
    "SiblingView",
    "build_siblings",
    "ensure_unique_ids",
    "parse_article",
    "parse_book",
    "parse_chapter",
    "parse_chapters",
    "parse_kv_file",
    "parse_kv_file_with_includes",
    "parse_kv_lines",
]
