"""Site-wide URL settings."""

from __future__ import annotations

import os

# Host prefix used for canonical URLs.
SITE_URL = os.environ.get(
    "BOOKGEN_SITE_URL", "https://www.programming-books.io"
)

# Repository holding the book sources.
GITHUB_URL = os.environ.get(
    "BOOKGEN_GITHUB_URL", "https://github.com/essentialbooks/books"
)

GITHUB_TEXT = "Edit on GitHub"

# Every book is published below this path.
URL_PREFIX = "/essential"
