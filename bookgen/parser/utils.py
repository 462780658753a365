"""Small text helpers shared by the parsers."""

from __future__ import annotations

import re

_URL_UNSAFE = re.compile(r"[^a-z0-9]+")

# Replacements applied before unsafe characters are collapsed so that
# language names survive in slugs.
_SPECIAL_NAMES = (("c#", "csharp"), ("c++", "cpp"), ("f#", "fsharp"))


def make_url_safe(text: str) -> str:
    """Return a URL-safe slug for ``text``.

    Args:
        text: Arbitrary title text.

    Returns:
        Lower-case slug made of ``[a-z0-9]`` runs joined by single dashes.
    """

    slug = text.lower()
    for name, replacement in _SPECIAL_NAMES:
        slug = slug.replace(name, replacement)
    return _URL_UNSAFE.sub("-", slug).strip("-")


def has_whitespace(text: str) -> bool:
    """Return ``True`` when ``text`` contains any whitespace character."""

    return any(ch.isspace() for ch in text)


def shorten(text: str, limit: int = 70) -> str:
    """Trim ``text`` to ``limit`` characters, marking the cut with ``...``."""

    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."
